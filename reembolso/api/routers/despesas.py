# reembolso/api/routers/despesas.py
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, File, Query, Response, UploadFile, status

from reembolso.api.dependencies import get_despesa_service
from reembolso.schemas.common import ErrorResponse, InsertedResponse, MessageResponse
from reembolso.schemas.despesa import EstadoUpdate, despesa_to_dict
from reembolso.services.acesso import parse_id
from reembolso.services.despesa_service import DespesaService

router = APIRouter()

_ERRORES_ID = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


# -----------------------------------------------------
# Crear despesa
# -----------------------------------------------------
@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar despesa",
    description="Acepta campos libres. Toda despesa nace con status 'pendente' y sin valor aprobado.",
)
def create_despesa(
    payload: Dict[str, Any] = Body(..., examples=[{"userId": 1, "amount_requested": 100, "description": "Taxi"}]),
    service: DespesaService = Depends(get_despesa_service),
):
    owner_raw = payload.get("userId")
    owner_id = parse_id(owner_raw, "usuario") if owner_raw not in (None, "") else None
    despesa = service.create(owner_id, payload)
    return InsertedResponse(insertedId=despesa.id, message="Despesa registrada con éxito")


# -----------------------------------------------------
# Listar despesas
# -----------------------------------------------------
@router.get("", summary="Listar despesas", description="Todas las despesas, más recientes primero.")
def list_despesas(service: DespesaService = Depends(get_despesa_service)) -> List[Dict[str, Any]]:
    return [despesa_to_dict(d) for d in service.list_all()]


# Declarada antes de /{despesa_id} para que "pendentes" no se tome como ID
@router.get(
    "/pendentes",
    responses={400: {"model": ErrorResponse}},
    summary="Listar despesas pendientes por rol",
    description=(
        "funcionario: solo las propias (userId); socio y financeiro: todas las pendientes."
    ),
)
def list_pendentes(
    role: Optional[str] = Query(None, description="funcionario, socio o financeiro"),
    user_id: Optional[str] = Query(None, alias="userId", description="ID del usuario que consulta"),
    service: DespesaService = Depends(get_despesa_service),
) -> List[Dict[str, Any]]:
    return [despesa_to_dict(d) for d in service.list_pending(role, user_id)]


# -----------------------------------------------------
# Obtener / actualizar / eliminar despesa por ID
# -----------------------------------------------------
@router.get("/{despesa_id}", responses=_ERRORES_ID, summary="Obtener despesa por ID")
def get_despesa(despesa_id: str, service: DespesaService = Depends(get_despesa_service)) -> Dict[str, Any]:
    return despesa_to_dict(service.get(despesa_id))


@router.put(
    "/{despesa_id}",
    response_model=MessageResponse,
    responses=_ERRORES_ID,
    summary="Actualizar despesa",
    description="Actualización parcial de los campos enviados. El campo id se ignora.",
)
def update_despesa(
    despesa_id: str,
    payload: Dict[str, Any] = Body(...),
    service: DespesaService = Depends(get_despesa_service),
):
    service.update(despesa_id, payload)
    return MessageResponse(message="Despesa actualizada con éxito")


@router.delete("/{despesa_id}", response_model=MessageResponse, responses=_ERRORES_ID, summary="Eliminar despesa")
def delete_despesa(despesa_id: str, service: DespesaService = Depends(get_despesa_service)):
    service.delete(despesa_id)
    return MessageResponse(message="Despesa eliminada con éxito")


# -----------------------------------------------------
# Workflow de status
# -----------------------------------------------------
@router.put(
    "/{despesa_id}/status",
    responses=_ERRORES_ID,
    summary="Actualizar status de la despesa",
    description="Aprueba, reprueba o aprueba parcialmente una despesa.",
)
def update_status(
    despesa_id: str,
    payload: EstadoUpdate,
    service: DespesaService = Depends(get_despesa_service),
) -> Dict[str, Any]:
    opcionales = {
        campo: getattr(payload, campo)
        for campo in ("rejection_reason", "approval_notes")
        if campo in payload.model_fields_set
    }
    despesa = service.transition_status(
        despesa_id,
        payload.status,
        valor_aprovado=payload.valor_aprovado,
        **opcionales,
    )
    return {"message": "Status actualizado con éxito", "expense": despesa_to_dict(despesa)}


# -----------------------------------------------------
# Comprovante
# -----------------------------------------------------
@router.post(
    "/{despesa_id}/receipt",
    response_model=MessageResponse,
    responses=_ERRORES_ID,
    summary="Adjuntar comprovante",
    description="Recibe el archivo en el campo multipart 'receipt' y reemplaza el anterior.",
)
def upload_receipt(
    despesa_id: str,
    receipt: Optional[UploadFile] = File(None),
    service: DespesaService = Depends(get_despesa_service),
):
    contenido = receipt.file.read() if receipt is not None else None
    service.attach_receipt(
        despesa_id,
        contenido,
        receipt.filename if receipt is not None else None,
        receipt.content_type if receipt is not None else None,
    )
    return MessageResponse(message="Comprovante enviado con éxito")


@router.get(
    "/{despesa_id}/receipt",
    response_class=Response,
    responses={404: {"model": ErrorResponse}, 200: {"content": {"application/octet-stream": {}}}},
    summary="Descargar comprovante",
)
def get_receipt(despesa_id: str, service: DespesaService = Depends(get_despesa_service)):
    contenido, content_type, filename = service.get_receipt(despesa_id)
    headers = {}
    if filename:
        headers["Content-Disposition"] = f"inline; filename*=UTF-8''{quote(filename)}"
    return Response(content=contenido, media_type=content_type, headers=headers)
