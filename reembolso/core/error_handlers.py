# reembolso/core/error_handlers.py
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError

from reembolso.core.exceptions import ReembolsoError, ServiceUnavailable
from reembolso.utils.logger import logger


def error_response(request: Request, exc: ReembolsoError) -> JSONResponse:
    """Respuesta ``{"detail": ...}`` de un error de dominio."""
    if exc.status_code >= 500:
        logger.error("Error %s en %s - %s", exc.status_code, request.url, exc.detail)
    else:
        logger.warning("Error %s en %s - %s", exc.status_code, request.url, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


def register_error_handlers(app: FastAPI):
    @app.exception_handler(ReembolsoError)
    async def reembolso_exception_handler(request: Request, exc: ReembolsoError):
        return error_response(request, exc)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.error("Error HTTP %s en %s - %s", exc.status_code, request.url, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error("Error de validación en %s - %s", request.url, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(OperationalError)
    @app.exception_handler(PoolTimeoutError)
    async def store_unavailable_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Base de datos no disponible en %s - %s", request.url, exc)
        return error_response(request, ServiceUnavailable())

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Error de base de datos en %s", request.url)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )
