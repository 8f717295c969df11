# backend/app.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import DEV_JWT_SECRET, Settings, get_settings
from core.errors import register_exception_handlers
from core.security import PasswordHasher, TokenCodec
from db import build_engine, build_session_factory, create_tables
from routers import accounts, expenses, health, incomes, investments, loans, users

log = logging.getLogger("uvicorn.error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    if settings.jwt_secret == DEV_JWT_SECRET:
        log.warning("Usando APP_JWT_SECRET de desarrollo; configúralo antes de desplegar")

    engine = build_engine(settings.sqlalchemy_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_tables(engine)
        yield
        engine.dispose()

    app = FastAPI(title="Manage Money API", lifespan=lifespan)

    # colaboradores compartidos, solo lectura tras el arranque
    app.state.settings = settings
    app.state.session_factory = build_session_factory(engine)
    app.state.token_codec = TokenCodec(
        settings.jwt_secret,
        expiration_ms=settings.jwt_expiration_ms,
        algorithm=settings.jwt_algorithm,
    )
    app.state.password_hasher = PasswordHasher(settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # monta routers
    app.include_router(health.router)
    app.include_router(accounts.router)
    app.include_router(users.router)
    app.include_router(expenses.router)
    app.include_router(incomes.router)
    app.include_router(investments.router)
    app.include_router(loans.router)

    @app.get("/")
    def root():
        return {"name": "Manage Money API", "ok": True}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        log_level=get_settings().log_level.lower(),
    )
