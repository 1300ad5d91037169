# reembolso/models/usuario.py
import enum

from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Enum, Index
from sqlalchemy.dialects import mysql
from sqlalchemy.sql import func

from reembolso.db.base import Base


class RolUsuario(str, enum.Enum):
    funcionario = "funcionario"
    socio = "socio"
    financeiro = "financeiro"


class Usuario(Base):
    __tablename__ = "users"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    # Colación binaria en MySQL: el email distingue mayúsculas, también en el índice único
    email = Column(
        String(255).with_variant(mysql.VARCHAR(255, collation="utf8mb4_bin"), "mysql"),
        nullable=False,
    )
    name = Column(String(150))
    role = Column(Enum(RolUsuario, name="rol_usuario"), nullable=False)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # El índice único cierra la carrera entre la verificación y el insert en el registro
    __table_args__ = (Index("ux_users_email", "email", unique=True),)
