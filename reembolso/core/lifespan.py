# reembolso/core/lifespan.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from reembolso.db.base import Base
import reembolso.models  # noqa: F401  registra los modelos en Base.metadata
from reembolso.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup/shutdown de la app.

    Sin conexión a la base de datos la app no arranca: el error se
    propaga y el servidor termina el proceso.
    """
    settings = app.state.settings
    gate = app.state.store_gate

    # --- Startup ---
    logger.info("🚀 Iniciando Reembolso Backend...")
    try:
        gate.connect()
    except SQLAlchemyError as e:
        logger.critical("❌ Error al conectar a la base de datos: %s", e)
        raise

    if settings.environment == "development":
        Base.metadata.create_all(bind=gate.engine)

    logger.info("✅ Startup completado, puerto configurado: %s", settings.port)

    # La app se levanta aquí
    yield

    # --- Shutdown ---
    logger.info("🛑 Aplicación apagándose...")
    gate.disconnect()
    logger.info("👋 Aplicación cerrada correctamente")
