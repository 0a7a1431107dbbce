"""
ASGI entrypoint: builds the VidioVision app and mounts the session API.

Serve with ``uvicorn vidiovision.main:app``. Logging is configured from
``APP_LOG_LEVEL`` before the first request is handled.
"""

from __future__ import annotations

from fastapi import FastAPI

from vidiovision.api.routes import router as api_router
from vidiovision.core.config import get_settings
from vidiovision.core.logging import configure_logging

API_PREFIX = "/api"


def create_app() -> FastAPI:
    """Build the app with the session routes under ``/api``."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="VidioVision AI",
        version="0.1.0",
        description=(
            "Upload a still image, analyze it with Gemini, and read back a "
            "cinematic video prompt plus a short history of past analyses."
        ),
    )
    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()

__all__ = ["API_PREFIX", "app", "create_app"]
