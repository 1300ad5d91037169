from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from reembolso import __version__
from reembolso.api.routers import api_router
from reembolso.core.config import Settings, get_settings
from reembolso.core.database import StoreGate, build_engine, build_session_factory
from reembolso.core.error_handlers import register_error_handlers
from reembolso.core.lifespan import lifespan
from reembolso.core.logging_middleware import log_requests, require_store_ready
from reembolso.core.security import PasswordHasher
from reembolso.utils.cors import setup_cors
from reembolso.utils.logger import setup_logging


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    engine = engine or build_engine(settings)

    app = FastAPI(
        title="Reembolso Backend",
        version=__version__,
        description="Backend para solicitudes de reembolso de despesas con workflow de aprobación",
        lifespan=lifespan,  # Startup/shutdown moderno
    )

    # --- Estado compartido: handle del store inyectado, no global ---
    app.state.settings = settings
    app.state.store_gate = StoreGate(engine)
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher.from_settings(settings)

    # --- Middlewares (el último agregado es el más externo) ---
    app.middleware("http")(require_store_ready)
    app.middleware("http")(log_requests)
    setup_cors(app, settings)

    # --- Errores ---
    register_error_handlers(app)

    # --- Rutas centralizadas ---
    app.include_router(api_router)

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
