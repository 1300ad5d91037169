# reembolso/services/despesa_service.py
"""
Ciclo de vida de las despesas (solicitudes de reembolso).

Estados: pendente → aprovado / reprovado / parcial.

El grafo de estados es total: cualquier status puede pasar a cualquier
otro, incluso volver a ``pendente``. Quien decide qué transición tiene
sentido es el rol que la ejecuta, no este servicio.

Visibilidad por rol (``list_pending``):
- funcionario: solo sus propias despesas pendientes
- socio / financeiro: todas las despesas pendientes
"""
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from reembolso.core.config import Roles
from reembolso.core.exceptions import (
    InvalidStatus,
    MissingRole,
    NoFileProvided,
    NotFound,
    ValidationError,
)
from reembolso.crud.despesa import (
    create_despesa,
    delete_despesa,
    get_despesa,
    list_despesas,
    save_despesa,
)
from reembolso.models.despesa import Despesa, EstadoDespesa
from reembolso.services.acesso import parse_id
from reembolso.utils.logger import logger

# Nunca se aceptan del cliente al crear
CAMPOS_RESERVADOS_CREACION = frozenset({
    "id", "_id", "status", "valor_aprovado", "rejection_reason",
    "approval_notes", "receipt", "createdAt", "created_at",
})

# No modificables por la actualización directa
CAMPOS_RESERVADOS_UPDATE = frozenset({"id", "_id", "receipt", "createdAt", "created_at"})

CONTENT_TYPE_DEFAULT = "application/octet-stream"

# Largo de las columnas rejection_reason / approval_notes
LARGO_MAX_TEXTO = 1000

# Marca de "campo no enviado" para las actualizaciones parciales
_AUSENTE = object()


def parse_status(value: Any) -> EstadoDespesa:
    try:
        return EstadoDespesa(value)
    except ValueError:
        validos = ", ".join(e.value for e in EstadoDespesa)
        raise InvalidStatus(f"Status inválido. Use uno de: {validos}")


def _parse_valor(value: Any, campo: str) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Valor numérico inválido en '{campo}'")
    try:
        valor = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"Valor numérico inválido en '{campo}'")
    if not valor.is_finite():
        raise ValidationError(f"Valor numérico inválido en '{campo}'")
    return valor


def _parse_texto(value: Any, campo: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{campo}' debe ser texto")
    if len(value) > LARGO_MAX_TEXTO:
        raise ValidationError(f"'{campo}' supera los {LARGO_MAX_TEXTO} caracteres")
    return value


class DespesaService:

    def __init__(self, db: Session):
        self.db = db

    # ============================================================================
    # LECTURA
    # ============================================================================

    def get(self, raw_id: Any) -> Despesa:
        despesa = get_despesa(self.db, parse_id(raw_id, "despesa"))
        if not despesa:
            raise NotFound("Despesa no encontrada")
        return despesa

    def list_all(self) -> List[Despesa]:
        return list_despesas(self.db)

    def list_pending(self, role: Optional[str], user_id: Any = None) -> List[Despesa]:
        """
        Despesas pendientes visibles para ``role``.

        Con rol funcionario y sin ``user_id`` se devuelven todas las
        pendientes, sin filtro de dueño.
        """
        if not role or role not in Roles.TODOS:
            raise MissingRole(
                f"El parámetro 'role' es obligatorio: {', '.join(Roles.TODOS)}"
            )

        if role == Roles.FUNCIONARIO:
            if user_id in (None, ""):
                # TODO: decidir con negocio si un funcionario sin userId debe recibir lista vacía
                logger.warning("listPending de funcionario sin userId: se devuelven todas las pendientes")
                return list_despesas(self.db, status=EstadoDespesa.pendente)
            owner_id = parse_id(user_id, "usuario")
            return list_despesas(self.db, status=EstadoDespesa.pendente, owner_id=owner_id)

        return list_despesas(self.db, status=EstadoDespesa.pendente)

    # ============================================================================
    # CREACIÓN
    # ============================================================================

    def create(self, owner_id: Optional[int], fields: Dict[str, Any]) -> Despesa:
        """
        Crea una despesa con los campos enviados.

        ``status`` y ``valor_aprovado`` del cliente se descartan: toda
        despesa nace pendente y sin valor aprobado.
        """
        dados = {k: v for k, v in fields.items() if k not in CAMPOS_RESERVADOS_CREACION}
        dados.pop("userId", None)
        amount = _parse_valor(dados.pop("amount_requested", None), "amount_requested")

        despesa = Despesa(
            owner_id=owner_id,
            amount_requested=amount,
            status=EstadoDespesa.pendente,
            valor_aprovado=None,
            dados=dados,
            created_at=datetime.now(timezone.utc),
        )
        despesa = create_despesa(self.db, despesa)
        logger.info("Despesa registrada", extra={"despesa_id": despesa.id, "owner_id": owner_id})
        return despesa

    # ============================================================================
    # WORKFLOW DE STATUS
    # ============================================================================

    def transition_status(
        self,
        raw_id: Any,
        new_status: Any,
        valor_aprovado: Any = None,
        rejection_reason: Any = _AUSENTE,
        approval_notes: Any = _AUSENTE,
    ) -> Despesa:
        """
        Cambia el status de una despesa.

        - ``valor_aprovado`` se escribe siempre (None si no se envía).
        - ``rejection_reason`` y ``approval_notes`` solo se escriben si se
          envían; si no, conservan su valor anterior.
        - Un status fuera de los cuatro válidos no modifica nada.
        """
        despesa_id = parse_id(raw_id, "despesa")
        estado = parse_status(new_status)
        valor = _parse_valor(valor_aprovado, "valor_aprovado")
        if rejection_reason is not _AUSENTE:
            rejection_reason = _parse_texto(rejection_reason, "rejection_reason")
        if approval_notes is not _AUSENTE:
            approval_notes = _parse_texto(approval_notes, "approval_notes")

        despesa = get_despesa(self.db, despesa_id)
        if not despesa:
            raise NotFound("Despesa no encontrada")

        estado_anterior = despesa.status
        despesa.status = estado
        despesa.valor_aprovado = valor
        if rejection_reason is not _AUSENTE:
            despesa.rejection_reason = rejection_reason
        if approval_notes is not _AUSENTE:
            despesa.approval_notes = approval_notes

        despesa = save_despesa(self.db, despesa)
        logger.info(
            "Status de despesa %s: %s → %s",
            despesa.id, estado_anterior.value if estado_anterior else None, estado.value,
            extra={"despesa_id": despesa.id, "valor_aprovado": str(valor) if valor is not None else None},
        )
        return despesa

    # ============================================================================
    # ACTUALIZACIÓN DIRECTA / ELIMINACIÓN
    # ============================================================================

    def update(self, raw_id: Any, fields: Dict[str, Any]) -> Despesa:
        """
        Actualización parcial estilo ``$set``: solo cambian los campos enviados.
        No pasa por el workflow, pero un ``status`` enviado debe ser válido.
        """
        despesa_id = parse_id(raw_id, "despesa")
        cambios = {k: v for k, v in fields.items() if k not in CAMPOS_RESERVADOS_UPDATE}

        # Validar todo antes de tocar el registro
        columnas: Dict[str, Any] = {}
        if "status" in cambios:
            columnas["status"] = parse_status(cambios.pop("status"))
        if "valor_aprovado" in cambios:
            columnas["valor_aprovado"] = _parse_valor(cambios.pop("valor_aprovado"), "valor_aprovado")
        if "amount_requested" in cambios:
            columnas["amount_requested"] = _parse_valor(cambios.pop("amount_requested"), "amount_requested")
        if "userId" in cambios:
            owner = cambios.pop("userId")
            columnas["owner_id"] = parse_id(owner, "usuario") if owner is not None else None
        for campo in ("rejection_reason", "approval_notes"):
            if campo in cambios:
                columnas[campo] = _parse_texto(cambios.pop(campo), campo)

        despesa = get_despesa(self.db, despesa_id)
        if not despesa:
            raise NotFound("Despesa no encontrada para actualización")

        for campo, valor in columnas.items():
            setattr(despesa, campo, valor)
        if cambios:
            # Nuevo dict para que SQLAlchemy detecte el cambio en la columna JSON
            despesa.dados = {**(despesa.dados or {}), **cambios}

        return save_despesa(self.db, despesa)

    def delete(self, raw_id: Any) -> None:
        despesa_id = parse_id(raw_id, "despesa")
        despesa = get_despesa(self.db, despesa_id)
        if not despesa:
            raise NotFound("Despesa no encontrada para eliminación")
        delete_despesa(self.db, despesa)
        logger.info("Despesa eliminada", extra={"despesa_id": despesa_id})

    # ============================================================================
    # COMPROVANTE
    # ============================================================================

    def attach_receipt(
        self,
        raw_id: Any,
        payload: Optional[bytes],
        filename: Optional[str],
        content_type: Optional[str],
    ) -> Despesa:
        """Adjunta el comprovante, reemplazando el anterior si existía."""
        if not payload:
            raise NoFileProvided()

        despesa = self.get(raw_id)
        despesa.receipt_data = payload
        despesa.receipt_filename = filename
        despesa.receipt_content_type = content_type or CONTENT_TYPE_DEFAULT

        despesa = save_despesa(self.db, despesa)
        logger.info(
            "Comprovante adjuntado",
            extra={"despesa_id": despesa.id, "bytes": len(payload), "content_type": despesa.receipt_content_type},
        )
        return despesa

    def get_receipt(self, raw_id: Any) -> Tuple[bytes, str, Optional[str]]:
        despesa = self.get(raw_id)
        if not despesa.tiene_comprovante:
            raise NotFound("Comprovante no encontrado")
        return (
            despesa.receipt_data,
            despesa.receipt_content_type or CONTENT_TYPE_DEFAULT,
            despesa.receipt_filename,
        )
