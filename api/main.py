from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.dependencies import settings
from api.models.recognize import RelayStatus
from api.routers.recognize import invalid_form_response, router as recognize_router

app = FastAPI(
    title="Recognition Relay",
    description="Proxy de reconocimiento de audio: sube un clip, devuelve título/artista/álbum/portada.",
    version="1.0.0"
)

# ============================
# CORS
# ============================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================
# RUTAS
# ============================
app.include_router(recognize_router, tags=["recognize"])


@app.get("/status", response_model=RelayStatus)
def status():
    return RelayStatus(
        message="Relay de reconocimiento funcionando correctamente",
        provider_url=settings.audd_api_url,
        token_configured=settings.token_configured,
    )


# ============================
# ERRORES DE VALIDACIÓN
# ============================
# En /recognize el cliente siempre recibe el sobre {success, message};
# el resto de rutas conserva el 422 estándar de FastAPI.
@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    if request.url.path == "/recognize":
        return invalid_form_response(exc.errors())
    return await request_validation_exception_handler(request, exc)


# ============================
# ARCHIVOS ESTÁTICOS (opcional)
# ============================

def mount_static(target: FastAPI, directory: Path) -> bool:
    """
    Sirve `directory` en "/" si existe. Debe llamarse al final, para que
    "/" no tape las rutas de la API.
    """
    if not directory.is_dir():
        return False
    target.mount("/", StaticFiles(directory=str(directory), html=True), name="static")
    return True


mount_static(app, settings.static_dir)


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
