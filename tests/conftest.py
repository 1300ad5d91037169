"""
Fixtures compartidas.

La app se construye con ``create_app(settings, engine)`` sobre un SQLite en
memoria (StaticPool: una única conexión compartida entre hilos), así el
TestClient y la sesión ``db`` de los tests ven los mismos datos.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from reembolso.core.config import Settings
from reembolso.main import create_app
from reembolso.models.usuario import RolUsuario
from reembolso.services.acesso import AccesoService
from reembolso.services.despesa_service import DespesaService


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", bcrypt_rounds=4, environment="development")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine)


@pytest.fixture
def client(app):
    """Cliente con lifespan: conecta el store y crea las tablas."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def acesso(db, app):
    return AccesoService(db, app.state.password_hasher)


@pytest.fixture
def despesas(db):
    return DespesaService(db)


# -----------------------------------------------------
# Usuarios
# -----------------------------------------------------
@pytest.fixture
def funcionario(acesso):
    return acesso.register("ana.souza@empresa.com", "Ana Souza", RolUsuario.funcionario, "segredo123")


@pytest.fixture
def otro_funcionario(acesso):
    return acesso.register("bruno.lima@empresa.com", "Bruno Lima", RolUsuario.funcionario, "segredo456")


@pytest.fixture
def socio(acesso):
    return acesso.register("carla.mendes@empresa.com", "Carla Mendes", RolUsuario.socio, "socio789")


# -----------------------------------------------------
# Despesas
# -----------------------------------------------------
@pytest.fixture
def despesa_pendente(despesas, funcionario):
    return despesas.create(funcionario.id, {"amount_requested": 150, "description": "Táxi aeroporto"})
