# backend/db.py
import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(url):
    """Engine para PostgreSQL (psycopg2) o SQLite en memoria para pruebas."""
    if str(url).startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True, connect_args={"options": "-c client_encoding=UTF8"})


def build_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def create_tables(engine) -> None:
    import models  # noqa: F401  registra las tablas en Base.metadata

    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logging.getLogger("uvicorn.error").exception("No se pudieron crear las tablas")
        raise


def get_db(request: Request):
    """One session per request, closed when the request ends."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
