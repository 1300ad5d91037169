from reembolso.db.base import Base

# Importa modelos para que se registren en Base.metadata
from .usuario import Usuario, RolUsuario
from .despesa import Despesa, EstadoDespesa

__all__ = [
    "Usuario",
    "RolUsuario",
    "Despesa",
    "EstadoDespesa",
    "Base",
]
