# reembolso/api/dependencies.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from reembolso.core.database import get_db
from reembolso.services.acesso import AccesoService
from reembolso.services.despesa_service import DespesaService


def get_acesso_service(request: Request, db: Session = Depends(get_db)) -> AccesoService:
    return AccesoService(db, request.app.state.password_hasher)


def get_despesa_service(db: Session = Depends(get_db)) -> DespesaService:
    return DespesaService(db)
