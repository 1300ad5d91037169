# reembolso/services/acesso.py
"""
Servicio de acceso e identidad.

Resuelve quién es el usuario que llama: registro con email único,
login por email y contraseña, y lectura de perfiles por ID.
"""
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from reembolso.core.exceptions import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidId,
    MissingFields,
    NotFound,
)
from reembolso.core.security import PasswordHasher
from reembolso.crud.usuario import create_usuario, get_usuario, get_usuario_by_email
from reembolso.models.usuario import Usuario, RolUsuario
from reembolso.utils.logger import logger

# Límite de BIGINT con signo
_MAX_ID = 2 ** 63 - 1


def parse_id(raw: Any, entidad: str = "registro") -> int:
    """
    Valida que ``raw`` sea una clave bien formada del store (entero positivo)
    antes de consultar.
    """
    if isinstance(raw, bool):
        raise InvalidId(f"ID de {entidad} inválido")
    if isinstance(raw, int):
        valor = raw
    else:
        texto = str(raw).strip()
        if not (texto.isascii() and texto.isdigit()):
            raise InvalidId(f"ID de {entidad} inválido")
        valor = int(texto)
    if valor <= 0 or valor > _MAX_ID:
        raise InvalidId(f"ID de {entidad} inválido")
    return valor


class AccesoService:

    def __init__(self, db: Session, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    # -----------------------------------------------------
    # Registro
    # -----------------------------------------------------
    def register(
        self,
        email: str,
        name: Optional[str],
        role: RolUsuario,
        password: str,
    ) -> Usuario:
        if not email or not password:
            raise MissingFields("Email y contraseña son obligatorios")

        if get_usuario_by_email(self.db, email):
            raise DuplicateEmail()

        try:
            usuario = create_usuario(
                self.db,
                email=email,
                name=name,
                role=role,
                password_hash=self.hasher.hash_password(password),
            )
        except IntegrityError:
            # Otro registro concurrente ganó la carrera: lo frena el índice único
            self.db.rollback()
            raise DuplicateEmail()

        logger.info("Usuario creado", extra={"id": usuario.id, "role": usuario.role.value})
        return usuario

    # -----------------------------------------------------
    # Login
    # -----------------------------------------------------
    def authenticate(self, email: str, password: str) -> Usuario:
        """
        Mismo error para email inexistente y contraseña incorrecta.
        """
        usuario = get_usuario_by_email(self.db, email)
        hashed = usuario.password_hash if usuario else None

        if not self.hasher.verify_password(password, hashed) or usuario is None:
            logger.warning("Intento de login fallido para: %s", email)
            raise InvalidCredentials()

        logger.info("Usuario autenticado", extra={"id": usuario.id})
        return usuario

    # -----------------------------------------------------
    # Perfil por ID
    # -----------------------------------------------------
    def get_user_by_id(self, raw_id: Any) -> Usuario:
        usuario_id = parse_id(raw_id, "usuario")
        usuario = get_usuario(self.db, usuario_id)
        if not usuario:
            raise NotFound("Usuario no encontrado")
        return usuario
