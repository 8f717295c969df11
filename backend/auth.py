# backend/auth.py
import logging
from typing import NamedTuple, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from core.errors import NotFound, Unauthenticated
from core.security import TokenCodec
from crud import UserRepository
from db import get_db
from models import User

log = logging.getLogger("uvicorn.error")

BEARER_SCHEME = "bearer"


class Identity(NamedTuple):
    user_id: int
    subject: str


class IdentityResolver:
    """Turns an Authorization header into the acting user's identity."""

    def __init__(self, codec: TokenCodec):
        self.codec = codec

    def resolve(self, authorization: Optional[str]) -> Identity:
        if not authorization or not authorization.strip():
            log.warning("Petición sin cabecera Authorization")
            raise Unauthenticated("Authorization token is required")
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != BEARER_SCHEME:
            log.warning("Cabecera Authorization sin esquema Bearer")
            raise Unauthenticated("Authorization header must use the Bearer scheme")

        claims = self.codec.verify(token.strip())
        return Identity(user_id=claims.id, subject=claims.sub)

    def resolve_user(self, authorization: Optional[str], users: UserRepository) -> User:
        # perfil: el token es válido pero el usuario puede ya no existir
        identity = self.resolve(authorization)
        user = users.find_by_id(identity.user_id)
        if user is None:
            log.warning("Token válido para usuario inexistente id=%s", identity.user_id)
            raise NotFound(f"User not found with id: {identity.user_id}")
        return user


# ----------------------------- Dependencias -----------------------------
def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_identity_resolver(codec: TokenCodec = Depends(get_token_codec)) -> IdentityResolver:
    return IdentityResolver(codec)


def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Identity:
    return resolver.resolve(authorization)


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db),
) -> User:
    return resolver.resolve_user(authorization, UserRepository(db))
