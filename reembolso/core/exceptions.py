# reembolso/core/exceptions.py
"""
Errores de dominio.

Los servicios lanzan estas excepciones; ``register_error_handlers`` las
traduce a respuestas HTTP ``{"detail": ...}``.
"""
from fastapi import status


class ReembolsoError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Error interno del servidor"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# --- 400 ---
class ValidationError(ReembolsoError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Solicitud inválida"


class InvalidId(ValidationError):
    detail = "ID inválido"


class InvalidStatus(ValidationError):
    detail = "Status inválido"


class MissingRole(ValidationError):
    detail = "El parámetro 'role' es obligatorio"


class NoFileProvided(ValidationError):
    detail = "Ningún archivo enviado"


class MissingFields(ValidationError):
    detail = "Campos obligatorios ausentes"


# --- 401 ---
class Unauthorized(ReembolsoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "No autorizado"


class InvalidCredentials(Unauthorized):
    detail = "Email o contraseña incorrectos"


# --- 404 ---
class NotFound(ReembolsoError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Recurso no encontrado"


# --- 409 ---
class Conflict(ReembolsoError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Conflicto con un registro existente"


class DuplicateEmail(Conflict):
    detail = "Email ya registrado"


# --- 5xx ---
class ServiceUnavailable(ReembolsoError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = (
        "Servicio no disponible: la conexión con la base de datos falló "
        "o todavía no fue establecida."
    )

