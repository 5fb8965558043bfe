"""
MenuHub demo backend entry point.

Serves the menu API over an in-memory database so the client can be used
without the real backend.
"""

import logging

import uvicorn

from api.server import create_app
from app.config import settings, setup_logging

setup_logging(settings)
_logger = logging.getLogger("menuhub.main")

app = create_app(seed=settings.seed_demo_data)


if __name__ == "__main__":
    _logger.info("Serving demo backend on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
