# reembolso/core/database.py
import enum
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from reembolso.core.config import Settings
from reembolso.utils.logger import logger


def _connect_args(database_url: str, timeout: int) -> dict:
    """Timeouts del driver según el dialecto de la URL."""
    backend = make_url(database_url).get_backend_name()
    if backend == "sqlite":
        return {"timeout": timeout, "check_same_thread": False}
    if backend == "mysql":
        return {"connect_timeout": timeout, "read_timeout": timeout, "write_timeout": timeout}
    if backend == "postgresql":
        return {"connect_timeout": timeout}
    return {}


def build_engine(settings: Settings) -> Engine:
    """Engine de conexión con cada llamada al store acotada por ``db_timeout_seconds``."""
    url = settings.database_url
    kwargs = {
        "pool_pre_ping": True,
        "future": True,
        "connect_args": _connect_args(url, settings.db_timeout_seconds),
    }
    # SQLite en memoria usa un pool sin cola de espera
    if make_url(url).get_backend_name() != "sqlite":
        kwargs["pool_timeout"] = settings.db_timeout_seconds
    return create_engine(url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class EstadoConexion(str, enum.Enum):
    uninitialized = "uninitialized"
    connecting = "connecting"
    ready = "ready"
    failed = "failed"


class StoreGate:
    """
    Estado de la conexión con la base de datos.

    Ningún handler corre contra un store que no está listo: el middleware
    de la aplicación consulta ``ready`` antes de cada petición.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.estado = EstadoConexion.uninitialized
        self.error: Exception | None = None

    @property
    def ready(self) -> bool:
        return self.estado == EstadoConexion.ready

    def connect(self) -> None:
        self.estado = EstadoConexion.connecting
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            self.estado = EstadoConexion.failed
            self.error = e
            raise
        self.estado = EstadoConexion.ready
        self.error = None
        logger.info("Conectado a la base de datos (%s)", self.engine.url.get_backend_name())

    def disconnect(self) -> None:
        self.engine.dispose()
        self.estado = EstadoConexion.uninitialized


def get_db(request: Request) -> Generator[Session, None, None]:
    """Sesión por petición, creada desde la factory registrada en la app."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
