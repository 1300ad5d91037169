# reembolso/core/security.py
"""
Hash y verificación de credenciales.

Las contraseñas siempre se guardan como hash bcrypt; nunca se compara
texto plano contra lo almacenado.
"""
from passlib.context import CryptContext

from reembolso.core.config import Settings

# Hash fijo para igualar el tiempo de respuesta cuando el email no existe
_HASH_FICTICIO_SECRETO = "reembolso-usuario-inexistente"


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )
        self._hash_ficticio = self.pwd_context.hash(_HASH_FICTICIO_SECRETO)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.bcrypt_rounds)

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str | None) -> bool:
        if not hashed_password:
            # Consume el mismo tiempo que una verificación real
            self.pwd_context.verify(plain_password, self._hash_ficticio)
            return False
        return self.pwd_context.verify(plain_password, hashed_password)
