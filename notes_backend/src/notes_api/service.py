"""Assembly of a FastAPI service with the shared ambient stack."""

import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_database.db import dispose_engine, init_engine
from notes_database.models import Base
from .config import Settings, load_settings
from .errors import install_error_handlers
from .logging_config import configure_logging, request_log_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Binds the store before the first request is served.

    A missing DATABASE_URL raises ConfigurationError here, which aborts
    startup instead of serving traffic without a store.
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    engine = init_engine(settings.require_database_url(), settings.store_timeout_seconds)
    Base.metadata.create_all(bind=engine)
    logger.info("%s starting up...", app.title)
    yield
    logger.info("%s shutting down...", app.title)
    dispose_engine()


def create_service_app(
    title: str,
    description: str,
    settings: Optional[Settings] = None,
    allow_methods: Sequence[str] = ("*",),
    openapi_tags=None,
) -> FastAPI:
    """Create a FastAPI app with CORS, request logging and error handlers."""
    app = FastAPI(
        title=title,
        description=description,
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings if settings is not None else load_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app.state.settings.cors_origins),
        allow_credentials=False,
        allow_methods=list(allow_methods),
        allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token"],
        expose_headers=["Authorization"],
        max_age=300,
    )
    app.middleware("http")(request_log_middleware)
    install_error_handlers(app)

    # Root Health Check
    @app.get("/", summary="Health Check", tags=["General"])
    def health_check():
        """Simple health check endpoint."""
        return {"message": "Healthy"}

    return app
