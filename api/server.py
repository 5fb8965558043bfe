"""
Demo menu backend application factory.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware import (
    RequestLoggingMiddleware,
    general_exception_handler,
    http_exception_handler,
    menuhub_exception_handler,
    validation_exception_handler,
)
from api.models import init_database, make_engine
from api.routes import auth, health, menus
from api.seed import seed_demo_menus
from app.config import Settings, settings as default_settings
from app.exceptions import MenuHubError

_logger = logging.getLogger("menuhub.server")


def create_app(
    config: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    seed: bool = False,
) -> FastAPI:
    """
    Build the demo backend.

    The schema is created here rather than on startup so the app also works
    under transports that skip lifespan events.

    Args:
        config: settings to use, defaults to the global settings
        engine: SQLAlchemy engine, defaults to one built from config.demo_db_url
        seed: store the example menu for today
    """
    config = config or default_settings
    engine = engine or make_engine(config.demo_db_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _logger.info(f"Starting {config.app_name} demo backend in {config.environment.value} mode")
        try:
            yield
        finally:
            _logger.info("Shutting down demo backend")
            engine.dispose()

    app = FastAPI(
        title=config.api_title,
        version=config.app_version,
        description=config.api_description,
        lifespan=lifespan,
        debug=config.debug,
        openapi_url=f"{config.api_prefix}/openapi.json" if not config.is_production() else None,
        docs_url=f"{config.api_prefix}/docs" if not config.is_production() else None,
        redoc_url=f"{config.api_prefix}/redoc" if not config.is_production() else None,
    )

    app.state.settings = config
    app.state.session_factory = init_database(engine)
    app.state.tokens = set()

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=config.cors_allow_methods,
        allow_headers=config.cors_allow_headers,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(MenuHubError, menuhub_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router, prefix=config.api_prefix)
    app.include_router(auth.router, prefix=config.api_prefix)
    app.include_router(menus.router, prefix=config.api_prefix)

    if seed:
        seed_demo_menus(app.state.session_factory)

    return app
