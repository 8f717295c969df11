# core/errors.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger("uvicorn.error")


class AppError(Exception):
    """Base for the failures the services raise; mapped to HTTP in one place."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str = "", details: Optional[Any] = None):
        super().__init__(message or self.error)
        self.message = message or self.error
        self.details = details


class Unauthenticated(AppError):
    status_code = 401
    error = "Unauthorized"


class Conflict(AppError):
    status_code = 409
    error = "Conflict"


class NotFound(AppError):
    status_code = 404
    error = "Not Found"


class InvalidInput(AppError):
    status_code = 400
    error = "Invalid Input"


class Unexpected(AppError):
    status_code = 500
    error = "Internal Server Error"


def _body(exc: AppError) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": exc.status_code, "error": exc.error, "detail": exc.message}
    if exc.details is not None:
        body["errors"] = exc.details
    return body


def to_response(exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=_body(exc), headers=headers)


# ----------------------------- Handlers -----------------------------
async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, Unexpected):
        log.error("%s %s falló: %s", request.method, request.url.path, exc.message)
    return to_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for e in exc.errors():
        loc = [str(p) for p in e.get("loc", ()) if p not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": e.get("msg", "")})
    log.info("Entrada inválida en %s %s: %s", request.method, request.url.path, errors)
    return to_response(InvalidInput("Request validation failed", details=errors))


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    log.exception("Error de base de datos en %s %s", request.method, request.url.path)
    return to_response(Unexpected("An error occurred while accessing the database"))


async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Error inesperado en %s %s", request.method, request.url.path)
    return to_response(Unexpected("An unexpected error occurred"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
