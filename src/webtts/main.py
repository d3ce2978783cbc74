"""
FastAPI Application Entry Point.

Usage:
    # Run with uvicorn
    WEBTTS_BASE_URL=http://tts.local/api uvicorn webtts.main:app --port 8000

    # Or use the module directly
    python -m uvicorn webtts.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from webtts import __version__
from webtts.api.routes import router
from webtts.core.logging import configure_logging, get_logger, info


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Configures structured logging (WEBTTS_LOG_LEVEL etc.) and registers
    the webtts router.
    """
    configure_logging()

    app = FastAPI(title="webtts", version=__version__)
    app.include_router(router)

    info(get_logger("webtts.main"), "app_created", version=__version__)
    return app


# Global application instance for ASGI servers (uvicorn, gunicorn, etc.)
app = create_app()
