from fastapi import APIRouter

# Importa cada módulo de rutas
from reembolso.api.routers import (
    health,
    auth,
    usuarios,
    despesas,
)

# Router principal: las rutas viven en la raíz, igual que el contrato HTTP publicado
api_router = APIRouter()

# Registro de módulos de rutas
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(usuarios.router, prefix="/users", tags=["Usuarios"])
api_router.include_router(despesas.router, prefix="/expenses", tags=["Despesas"])
