"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .errors import register_exception_handlers
from .middleware.headers import CORSHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(service_instance, config, lifespan=None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: LinkService, or None when ``lifespan`` builds it
        config: Configuration instance
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Shorten http(s) URLs and redirect short links",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    register_exception_handlers(app)

    # Last added runs first: logging wraps CORS so preflights are logged too
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router)

    return app
