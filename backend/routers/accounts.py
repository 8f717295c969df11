# routers/accounts.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from crud import UserRepository
from db import get_db
from schemas import AuthResponse, LoginInput, RegisterRequest
from services.accounts import CredentialVerifier

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_credential_verifier(request: Request, db: Session = Depends(get_db)) -> CredentialVerifier:
    state = request.app.state
    return CredentialVerifier(UserRepository(db), state.password_hasher, state.token_codec)


def _auth_response(user, token: str) -> AuthResponse:
    return AuthResponse(
        token=token,
        access_token=token,
        id=user.id,
        email=user.email,
        full_name=user.full_name,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, verifier: CredentialVerifier = Depends(get_credential_verifier)):
    user, token = verifier.register(body.email, body.password, body.full_name, body.phone)
    return _auth_response(user, token)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginInput, verifier: CredentialVerifier = Depends(get_credential_verifier)):
    user, token = verifier.login(body.email, body.password)
    return _auth_response(user, token)
