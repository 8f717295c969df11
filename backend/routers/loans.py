# routers/loans.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import Identity, get_current_identity
from crud import LoanRepository
from db import get_db
from schemas import DeleteOut, LoanCreate, LoanOut, LoanUpdate
from services.records import LoanService

router = APIRouter(prefix="/api/loan", tags=["Loans"])


def get_service(db: Session = Depends(get_db)) -> LoanService:
    return LoanService(LoanRepository(db))


@router.post("", response_model=LoanOut, status_code=status.HTTP_201_CREATED)
def crear_loan(
    body: LoanCreate,
    identity: Identity = Depends(get_current_identity),
    service: LoanService = Depends(get_service),
):
    return service.create(identity, body)


@router.get("/user/{user_id}/all", response_model=List[LoanOut])
def listar_loans(
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    service: LoanService = Depends(get_service),
):
    return service.list_by_user(identity, user_id)


@router.get("/{id}", response_model=LoanOut)
def obtener_loan(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: LoanService = Depends(get_service),
):
    return service.get_by_id(identity, id)


@router.put("/{id}", response_model=LoanOut)
def editar_loan(
    id: int,
    body: LoanUpdate,
    identity: Identity = Depends(get_current_identity),
    service: LoanService = Depends(get_service),
):
    return service.update(identity, id, body)


@router.delete("/{id}", response_model=DeleteOut)
def eliminar_loan(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: LoanService = Depends(get_service),
):
    return DeleteOut(message=service.delete(identity, id))
