# reembolso/api/routers/usuarios.py
from fastapi import APIRouter, Depends, status

from reembolso.api.dependencies import get_acesso_service
from reembolso.schemas.common import ErrorResponse, InsertedResponse
from reembolso.schemas.usuario import UsuarioCreate, UsuarioRead
from reembolso.services.acesso import AccesoService

router = APIRouter()


# ==================== ENDPOINTS DE USUARIOS ====================

@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Crear usuario",
    description="Registra un usuario nuevo. El email debe ser único.",
)
def create_usuario_endpoint(
    payload: UsuarioCreate,
    service: AccesoService = Depends(get_acesso_service),
):
    usuario = service.register(
        email=payload.email,
        name=payload.name,
        role=payload.role,
        password=payload.password,
    )
    return InsertedResponse(insertedId=usuario.id, message="Usuario creado con éxito")


@router.get(
    "/{usuario_id}",
    response_model=UsuarioRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Obtener usuario por ID",
)
def get_usuario(usuario_id: str, service: AccesoService = Depends(get_acesso_service)):
    return service.get_user_by_id(usuario_id)
