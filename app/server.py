"""
Arranque del servidor HTTP.

    python -m app.server

Al recibir SIGINT/SIGTERM uvicorn deja de aceptar conexiones, espera hasta
SHUTDOWN_TIMEOUT segundos a que terminen las requests en curso y después
cierra lo que quede; el lifespan de la app cierra el pool de la DB.
"""
import uvicorn

from app.core.config import settings


def build_config() -> uvicorn.Config:
    return uvicorn.Config(
        "app.main:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT,
    )


def main():
    uvicorn.Server(build_config()).run()


if __name__ == "__main__":
    main()
