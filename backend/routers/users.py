# routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth import get_current_user
from crud import UserRepository
from db import get_db
from models import User
from schemas import ProfileOut, UpdateProfileIn
from services.accounts import ProfileService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/me", response_model=ProfileOut)
def get_profile(user: User = Depends(get_current_user)):
    return user


@router.put("/me", response_model=ProfileOut)
def update_profile(
    body: UpdateProfileIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = ProfileService(UserRepository(db))
    return service.update_profile(user.id, body.full_name, body.phone)
