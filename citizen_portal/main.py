import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from citizen_portal import __version__
from citizen_portal.api import create_api_router
from citizen_portal.api.routers import health as health_router
from citizen_portal.core.config import get_settings
from citizen_portal.core.container import get_container
from citizen_portal.core.logging_config import configure_logging
from citizen_portal.infrastructure.database import dispose_engine, init_db
from citizen_portal.interfaces.http.errors import register_exception_handlers

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fails fast when the JWT secret or expiry setting is unusable.
    get_container()
    await init_db()
    logger.info("%s %s started (%s)", settings.project_name, __version__, settings.environment)
    yield
    logger.info("%s shutting down", settings.project_name)
    await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Citizen services portal: accounts, authentication and service applications",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(create_api_router(settings.api_prefix))
    app.include_router(health_router.router, tags=["health"])

    return app


app = create_app()
