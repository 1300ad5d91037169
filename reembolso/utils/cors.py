from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reembolso.core.config import Settings


def setup_cors(app: FastAPI, settings: Settings) -> None:
    origins = settings.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credenciales solo con orígenes explícitos
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
