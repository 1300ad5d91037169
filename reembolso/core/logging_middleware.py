# reembolso/core/logging_middleware.py
from fastapi import Request

from reembolso.core.error_handlers import error_response
from reembolso.core.exceptions import ServiceUnavailable
from reembolso.utils.logger import logger


async def log_requests(request: Request, call_next):
    logger.info("Petición: %s %s", request.method, request.url)
    response = await call_next(request)
    logger.info("Respuesta: %s %s", response.status_code, request.url)
    return response


async def require_store_ready(request: Request, call_next):
    """Corta la petición con 503 mientras la base de datos no esté lista."""
    gate = getattr(request.app.state, "store_gate", None)
    if gate is None or not gate.ready:
        # Los middlewares "http" corren fuera de los exception handlers: se arma la respuesta acá
        return error_response(request, ServiceUnavailable())
    return await call_next(request)
