from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/", summary="Health check")
def health_check(request: Request):
    gate = request.app.state.store_gate
    return {
        "status": "OK",
        "message": "Servidor Reembolso en ejecución y accesible.",
        "database_status": "Conectado" if gate.ready else "Desconectado",
        "port_used": request.app.state.settings.port,
    }
