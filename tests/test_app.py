"""
Arranque de la aplicación: health check, gate de disponibilidad de la base
de datos y traducción de errores del store.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from reembolso.core.config import Settings
from reembolso.core.database import EstadoConexion, build_engine
from reembolso.core.exceptions import ServiceUnavailable
from reembolso.main import create_app
from reembolso.services.despesa_service import DespesaService


def test_health_check(client, settings):
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["database_status"] == "Conectado"
    assert data["port_used"] == settings.port


def test_sin_startup_responde_503(app):
    # Sin context manager el lifespan no corre: el store nunca queda listo
    client = TestClient(app)

    response = client.get("/expenses")
    assert response.status_code == 503
    assert response.json() == {"detail": ServiceUnavailable.detail}
    assert client.get("/").status_code == 503
    assert app.state.store_gate.estado == EstadoConexion.uninitialized


def test_fallo_de_conexion_al_arrancar_es_fatal(tmp_path):
    settings = Settings(
        database_url=f"sqlite:///{tmp_path / 'no-existe' / 'reembolso.db'}",
        bcrypt_rounds=4,
    )
    app = create_app(settings, build_engine(settings))

    with pytest.raises(SQLAlchemyError):
        with TestClient(app):
            pass

    assert app.state.store_gate.estado == EstadoConexion.failed


def test_shutdown_libera_el_store(app):
    with TestClient(app):
        assert app.state.store_gate.ready

    assert app.state.store_gate.estado == EstadoConexion.uninitialized


def test_store_inaccesible_durante_peticion_responde_503(client, monkeypatch):
    def _caido(self):
        raise OperationalError("SELECT 1", {}, Exception("timeout"))

    monkeypatch.setattr(DespesaService, "list_all", _caido)

    response = client.get("/expenses")

    assert response.status_code == 503
    assert response.json() == {"detail": ServiceUnavailable.detail}


def test_error_inesperado_del_store_responde_500_con_mensaje(client, monkeypatch):
    def _falla(self):
        raise SQLAlchemyError("tabla bloqueada")

    monkeypatch.setattr(DespesaService, "list_all", _falla)

    response = client.get("/expenses")

    assert response.status_code == 500
    assert "tabla bloqueada" in response.json()["detail"]


def test_cors_por_defecto(client):
    response = client.get("/", headers={"Origin": "http://localhost:5173"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_origenes_configurados():
    settings = Settings(
        database_url="sqlite://",
        backend_cors_origins="http://localhost:5173, https://reembolso.empresa.com",
    )
    assert settings.cors_origins == ["http://localhost:5173", "https://reembolso.empresa.com"]
