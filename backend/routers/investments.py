# routers/investments.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth import Identity, get_current_identity
from crud import InvestmentRepository
from db import get_db
from schemas import DeleteOut, InvestmentCreate, InvestmentOut, InvestmentUpdate
from services.records import InvestmentService

router = APIRouter(prefix="/api/investment", tags=["Investments"])


def get_service(db: Session = Depends(get_db)) -> InvestmentService:
    return InvestmentService(InvestmentRepository(db))


@router.post("", response_model=InvestmentOut, status_code=status.HTTP_201_CREATED)
def crear_investment(
    body: InvestmentCreate,
    identity: Identity = Depends(get_current_identity),
    service: InvestmentService = Depends(get_service),
):
    return service.create(identity, body)


@router.get("/user/{user_id}/all", response_model=List[InvestmentOut])
def listar_investments(
    user_id: int,
    identity: Identity = Depends(get_current_identity),
    service: InvestmentService = Depends(get_service),
):
    return service.list_by_user(identity, user_id)


@router.get("/{id}", response_model=InvestmentOut)
def obtener_investment(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: InvestmentService = Depends(get_service),
):
    return service.get_by_id(identity, id)


@router.put("/{id}", response_model=InvestmentOut)
def editar_investment(
    id: int,
    body: InvestmentUpdate,
    identity: Identity = Depends(get_current_identity),
    service: InvestmentService = Depends(get_service),
):
    return service.update(identity, id, body)


@router.delete("/{id}", response_model=DeleteOut)
def eliminar_investment(
    id: int,
    identity: Identity = Depends(get_current_identity),
    service: InvestmentService = Depends(get_service),
):
    return DeleteOut(message=service.delete(identity, id))
