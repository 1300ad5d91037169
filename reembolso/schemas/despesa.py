# reembolso/schemas/despesa.py
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from reembolso.models.despesa import Despesa


class EstadoUpdate(BaseModel):
    """
    Cambio de status de una despesa.

    ``status`` se recibe como texto libre y lo valida el servicio, para
    responder 400 con ``InvalidStatus`` en vez del error genérico de pydantic.
    ``rejection_reason`` y ``approval_notes`` solo se aplican si vienen en
    el body (``model_fields_set``).
    """
    status: str = Field(..., examples=["aprovado"])
    valor_aprovado: Optional[Decimal] = Field(None, examples=[80])
    rejection_reason: Optional[str] = Field(None, max_length=1000)
    approval_notes: Optional[str] = Field(None, max_length=1000)


def _num(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def despesa_to_dict(despesa: Despesa) -> Dict[str, Any]:
    """
    Representación JSON de una despesa: los campos libres de ``dados``
    junto con los campos administrados por el sistema (estos últimos ganan).
    """
    data: Dict[str, Any] = dict(despesa.dados or {})
    data.update({
        "id": despesa.id,
        "userId": despesa.owner_id,
        "amount_requested": _num(despesa.amount_requested),
        "status": despesa.status.value if despesa.status else None,
        "valor_aprovado": _num(despesa.valor_aprovado),
        "rejection_reason": despesa.rejection_reason,
        "approval_notes": despesa.approval_notes,
        "receipt": (
            {"filename": despesa.receipt_filename, "contentType": despesa.receipt_content_type}
            if despesa.tiene_comprovante else None
        ),
        "createdAt": despesa.created_at.isoformat() if despesa.created_at else None,
    })
    return data
