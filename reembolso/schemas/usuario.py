# reembolso/schemas/usuario.py
from datetime import datetime
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from reembolso.models.usuario import RolUsuario


# "credential" se acepta como alias de "password"
_PASSWORD_ALIAS = AliasChoices("password", "credential")

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


class UsuarioCreate(BaseModel):
    email: str = Field(..., examples=["ana.souza@empresa.com"])
    name: Optional[str] = None
    role: RolUsuario
    password: str = Field(..., min_length=1, validation_alias=_PASSWORD_ALIAS)

    @field_validator("email")
    @classmethod
    def validar_email(cls, value: str) -> str:
        # Solo se valida el formato; se guarda tal cual llegó, igual que se busca en el login
        try:
            _EMAIL_ADAPTER.validate_python(value)
        except ValidationError:
            raise ValueError("Email inválido")
        return value


class UsuarioRead(BaseModel):
    """Perfil público, nunca incluye la credencial."""
    id: int
    email: str
    name: Optional[str] = None
    role: RolUsuario
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    # str y no EmailStr: un email mal formado responde igual que uno inexistente
    email: str
    password: str = Field(..., validation_alias=_PASSWORD_ALIAS)
