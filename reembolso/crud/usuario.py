# reembolso/crud/usuario.py
from typing import Optional

from sqlalchemy.orm import Session

from reembolso.models.usuario import Usuario, RolUsuario


# -----------------------------------------------------
# Obtener usuario por ID
# -----------------------------------------------------
def get_usuario(db: Session, usuario_id: int) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.id == usuario_id).first()


# -----------------------------------------------------
# Obtener usuario por email (coincidencia exacta)
# -----------------------------------------------------
def get_usuario_by_email(db: Session, email: str) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.email == email).first()


# -----------------------------------------------------
# Crear usuario
# -----------------------------------------------------
def create_usuario(
    db: Session,
    email: str,
    name: Optional[str],
    role: RolUsuario,
    password_hash: str,
) -> Usuario:
    obj = Usuario(email=email, name=name, role=role, password_hash=password_hash)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj
