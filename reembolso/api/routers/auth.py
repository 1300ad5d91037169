# reembolso/api/routers/auth.py
from fastapi import APIRouter, Depends

from reembolso.api.dependencies import get_acesso_service
from reembolso.schemas.common import ErrorResponse
from reembolso.schemas.usuario import LoginRequest, UsuarioRead
from reembolso.services.acesso import AccesoService

router = APIRouter()


@router.post(
    "/login",
    response_model=UsuarioRead,
    responses={401: {"model": ErrorResponse}},
    summary="Login con email y contraseña",
    description="Valida las credenciales y devuelve el perfil del usuario, sin la credencial.",
)
def login(credentials: LoginRequest, service: AccesoService = Depends(get_acesso_service)):
    return service.authenticate(credentials.email, credentials.password)
