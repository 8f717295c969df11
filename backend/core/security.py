# core/security.py
from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import Callable, Optional

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from core.errors import Unauthenticated

log = logging.getLogger("uvicorn.error")


# ------------------------------ Tokens ------------------------------
class RejectReason(str, Enum):
    EMPTY = "empty"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    EXPIRED = "expired"


class TokenRejected(Unauthenticated):
    """A bearer token that failed verification. Always surfaces as 401."""

    def __init__(self, reason: RejectReason, message: str = "Invalid or expired token"):
        super().__init__(message)
        self.reason = reason


class TokenClaims(BaseModel):
    id: int
    username: str
    sub: str
    iat: int
    exp: int


class TokenCodec:
    """
    Mints and verifies HMAC-signed JWTs carrying {id, username, sub, iat, exp}.

    Built once at startup and shared read-only between requests.
    """

    def __init__(
        self,
        secret: str,
        expiration_ms: int = 86_400_000,
        algorithm: str = "HS256",
        clock: Optional[Callable[[], float]] = None,
    ):
        self._key = secret.encode("utf-8")
        self._ttl_seconds = expiration_ms / 1000
        self._algorithm = algorithm
        self._clock = clock or time.time

    def mint(self, user_id: int, subject: str) -> str:
        now = int(self._clock())
        claims = {
            "id": user_id,
            "username": subject,
            "sub": subject,
            "iat": now,
            "exp": now + math.ceil(self._ttl_seconds),
        }
        return jwt.encode(claims, self._key, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenClaims:
        if not token or not token.strip():
            raise self._reject(RejectReason.EMPTY, "JWT claims string is empty")
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"], "verify_exp": False},
            )
        except jwt.InvalidSignatureError as e:
            raise self._reject(RejectReason.BAD_SIGNATURE, str(e))
        except jwt.InvalidAlgorithmError as e:
            raise self._reject(RejectReason.UNSUPPORTED_ALGORITHM, str(e))
        except jwt.InvalidTokenError as e:
            raise self._reject(RejectReason.MALFORMED, str(e))

        try:
            claims = TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise self._reject(RejectReason.MALFORMED, f"{e.error_count()} invalid claim(s)")

        # expiry is checked against the codec clock only, strictly now < exp
        if self._clock() >= claims.exp:
            raise self._reject(RejectReason.EXPIRED, "Signature has expired")
        return claims

    @staticmethod
    def _reject(reason: RejectReason, detail: str) -> TokenRejected:
        log.warning("Token rechazado (%s): %s", reason.value, detail)
        if reason is RejectReason.EXPIRED:
            return TokenRejected(reason, "Token has expired")
        return TokenRejected(reason)


# ----------------------------- Passwords -----------------------------
class PasswordHasher:
    """bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: Optional[str]) -> bool:
        if not hashed:
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            log.warning("Hash de contraseña con formato desconocido")
            return False

    def dummy_verify(self) -> None:
        self._context.dummy_verify()
