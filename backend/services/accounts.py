# services/accounts.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from core.errors import Conflict, NotFound, Unauthenticated
from core.security import PasswordHasher, TokenCodec
from crud import UserRepository
from models import User

log = logging.getLogger("uvicorn.error")

BAD_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialVerifier:
    """Registration and login; the only places that mint tokens."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, codec: TokenCodec):
        self.users = users
        self.hasher = hasher
        self.codec = codec

    def register(
        self, email: str, password: str, full_name: str, phone: Optional[str] = None
    ) -> Tuple[User, str]:
        email = normalize_email(email)
        if self.users.find_by_email(email) is not None:
            log.info("Registro rechazado, email ya existe: %s", email)
            raise Conflict("Email is already taken!")

        user = User(
            email=email,
            hashed_password=self.hasher.hash(password),
            full_name=full_name.strip(),
            phone=phone.strip() if phone else None,
        )
        try:
            user = self.users.save(user)
        except IntegrityError:
            # otro registro concurrente ganó la carrera por el email
            log.info("Registro rechazado por restricción única: %s", email)
            raise Conflict("Email is already taken!")

        log.info("Usuario registrado id=%s", user.id)
        return user, self.codec.mint(user.id, user.email)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        email = normalize_email(email)
        user = self.users.find_by_email(email)
        if user is None:
            self.hasher.dummy_verify()
            log.info("Login fallido: email desconocido")
            raise Unauthenticated(BAD_CREDENTIALS)
        if not self.hasher.verify(password, user.hashed_password):
            log.info("Login fallido: contraseña incorrecta para id=%s", user.id)
            raise Unauthenticated(BAD_CREDENTIALS)

        log.info("Login correcto id=%s", user.id)
        return user, self.codec.mint(user.id, user.email)


class ProfileService:
    def __init__(self, users: UserRepository):
        self.users = users

    def update_profile(
        self, user_id: int, full_name: Optional[str] = None, phone: Optional[str] = None
    ) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            log.warning("Perfil no encontrado id=%s", user_id)
            raise NotFound(f"User not found with id: {user_id}")

        # solo valores con texto sobrescriben
        if full_name and full_name.strip():
            user.full_name = full_name.strip()
        if phone and phone.strip():
            user.phone = phone.strip()

        user = self.users.save(user)
        log.info("Perfil actualizado id=%s", user_id)
        return user
