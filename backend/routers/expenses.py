# routers/expenses.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import Identity, get_current_identity
from crud import ExpenseRepository
from db import get_db
from schemas import DeleteOut, ExpenseCreate, ExpenseOut, ExpenseUpdate
from services.records import ExpenseService

router = APIRouter(prefix="/api/expense", tags=["Expenses"])


def get_service(db: Session = Depends(get_db)) -> ExpenseService:
    return ExpenseService(ExpenseRepository(db))


@router.post("", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def crear_expense(
    body: ExpenseCreate,
    identity: Identity = Depends(get_current_identity),
    service: ExpenseService = Depends(get_service),
):
    return service.create(identity, body)


@router.get("/user/{user_id}/all", response_model=List[ExpenseOut])
def listar_expenses(
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    service: ExpenseService = Depends(get_service),
):
    return service.list_by_user(identity, user_id)


@router.get("/{id}", response_model=ExpenseOut)
def obtener_expense(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: ExpenseService = Depends(get_service),
):
    return service.get_by_id(identity, id)


@router.put("/{id}", response_model=ExpenseOut)
def editar_expense(
    id: int,
    body: ExpenseUpdate,
    identity: Identity = Depends(get_current_identity),
    service: ExpenseService = Depends(get_service),
):
    return service.update(identity, id, body)


@router.delete("/{id}", response_model=DeleteOut)
def eliminar_expense(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: ExpenseService = Depends(get_service),
):
    return DeleteOut(message=service.delete(identity, id))
