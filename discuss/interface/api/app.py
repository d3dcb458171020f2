"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from discuss.config import Settings
from discuss.interface.api.routes import comments, health, moderation, targets
from discuss.interface.error import register_error_handlers
from discuss.util.di.container import create_container, setup_di
from discuss.util.logging import setup_logging
from discuss.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, configure in conftest.py if needed.

    Args:
        container: DI container, the production container when omitted

    Returns:
        Configured application
    """
    settings = Settings()
    setup_logging(settings)

    # Instrument httpx for calls to the content service
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Discuss Comments API",
        description="Hierarchical comments, likes and moderation for posts, articles and threads",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(targets.router)
    app_instance.include_router(moderation.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
