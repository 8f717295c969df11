# routers/incomes.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import Identity, get_current_identity
from crud import IncomeRepository
from db import get_db
from schemas import DeleteOut, IncomeCreate, IncomeOut, IncomeUpdate
from services.records import IncomeService

router = APIRouter(prefix="/api/income", tags=["Income"])


def get_service(db: Session = Depends(get_db)) -> IncomeService:
    return IncomeService(IncomeRepository(db))


@router.post("", response_model=IncomeOut, status_code=status.HTTP_201_CREATED)
def crear_income(
    body: IncomeCreate,
    identity: Identity = Depends(get_current_identity),
    service: IncomeService = Depends(get_service),
):
    return service.create(identity, body)


@router.get("/user/{user_id}/all", response_model=List[IncomeOut])
def listar_incomes(
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    service: IncomeService = Depends(get_service),
):
    return service.list_by_user(identity, user_id)


@router.get("/{id}", response_model=IncomeOut)
def obtener_income(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: IncomeService = Depends(get_service),
):
    return service.get_by_id(identity, id)


@router.put("/{id}", response_model=IncomeOut)
def editar_income(
    id: int,
    body: IncomeUpdate,
    identity: Identity = Depends(get_current_identity),
    service: IncomeService = Depends(get_service),
):
    return service.update(identity, id, body)


@router.delete("/{id}", response_model=DeleteOut)
def eliminar_income(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: IncomeService = Depends(get_service),
):
    return DeleteOut(message=service.delete(identity, id))
