from contextlib import asynccontextmanager

from fastapi import FastAPI

from bechapra.config import get_settings
from bechapra.infrastructure.database import engine, initialize_database
from bechapra.interfaces.api.routes import register_routes
from bechapra.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos al arrancar y libera los recursos al cerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    configure_logging(get_settings().log_level)
    app = FastAPI(title="Bechapra Notificaciones", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
