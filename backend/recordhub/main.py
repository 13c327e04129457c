"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recordhub.config import Settings, get_settings
from recordhub.infrastructure.dependencies import build_stores
from recordhub.infrastructure.logging.log_config import setup_logging
from recordhub.presentation.api.error_handlers import register_error_handlers
from recordhub.presentation.api.router import router as api_router
from recordhub.presentation.api.router import tasks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and report the active stores."""
    setup_logging(app.state.settings)
    settings: Settings = app.state.settings
    users = await app.state.stores.users.get_all()
    logger.info(
        "%s %s started (%s), %d registered users loaded",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        len(users),
    )

    yield

    logger.info("%s shutting down", settings.app_title)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    Each call builds its own record stores, so separate apps never share state.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.stores = build_stores(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Mount API routes
    app.include_router(api_router)
    app.include_router(tasks_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recordhub.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )
