# reembolso/crud/despesa.py
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from reembolso.models.despesa import Despesa, EstadoDespesa


# -----------------------------------------------------
# Obtener despesa por ID
# -----------------------------------------------------
def get_despesa(db: Session, despesa_id: int) -> Optional[Despesa]:
    return db.query(Despesa).filter(Despesa.id == despesa_id).first()


# -----------------------------------------------------
# Listar despesas (con filtros de igualdad opcionales)
# -----------------------------------------------------
def list_despesas(
    db: Session,
    status: Optional[EstadoDespesa] = None,
    owner_id: Optional[int] = None,
) -> List[Despesa]:
    """Más recientes primero (createdAt DESC, id DESC)."""
    query = db.query(Despesa)

    if status is not None:
        query = query.filter(Despesa.status == status)

    if owner_id is not None:
        query = query.filter(Despesa.owner_id == owner_id)

    return query.order_by(desc(Despesa.created_at), desc(Despesa.id)).all()


# -----------------------------------------------------
# Crear / guardar / eliminar
# -----------------------------------------------------
def create_despesa(db: Session, despesa: Despesa) -> Despesa:
    db.add(despesa)
    db.commit()
    db.refresh(despesa)
    return despesa


def save_despesa(db: Session, despesa: Despesa) -> Despesa:
    db.commit()
    db.refresh(despesa)
    return despesa


def delete_despesa(db: Session, despesa: Despesa) -> None:
    db.delete(despesa)
    db.commit()
