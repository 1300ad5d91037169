# reembolso/core/config.py
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Roles del sistema
class Roles:
    """Constantes para roles de usuario."""
    FUNCIONARIO = "funcionario"
    SOCIO = "socio"
    FINANCEIRO = "financeiro"

    TODOS = (FUNCIONARIO, SOCIO, FINANCEIRO)


class Settings(BaseSettings):
    # --- Core ---
    environment: str = Field("development")
    port: int = Field(3000)
    log_level: str = Field("INFO")

    # --- Base de datos ---
    database_url: str = Field(...)
    db_timeout_seconds: int = Field(10, ge=1)

    # --- Seguridad ---
    bcrypt_rounds: int = Field(12, ge=4, le=31)

    # --- CORS ---
    # Lista separada por comas, "*" permite cualquier origen
    backend_cors_origins: str = Field("*")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.backend_cors_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()
