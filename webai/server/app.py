"""FastAPI app creation and the global WebAI instance."""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException

from ..app import WebAI
from ..constants import API_VERSION

logger = logging.getLogger(__name__)

_config_path = os.getenv("WEBAI_CONFIG", "config.yaml")

_app: Optional[WebAI] = None


def _try_load_app() -> None:
    """Load WebAI from the config file if present, else from environment variables."""
    global _app
    try:
        if os.path.exists(_config_path):
            _app = WebAI.from_config_file(_config_path)
            logger.info(f"WebAI loaded from {_config_path}")
        else:
            _app = WebAI()
            logger.info("WebAI loaded from environment")
    except Exception as e:
        logger.error(f"Failed to load WebAI: {e}", exc_info=True)
        _app = None


def require_app() -> WebAI:
    """Raise 503 if the app cannot be configured. Lazy-loads on first call."""
    global _app
    if _app is None:
        _try_load_app()
    if _app is None:
        raise HTTPException(503, "Service not configured.")
    return _app


def set_app(new_app: Optional[WebAI]) -> None:
    """Replace the global WebAI instance (tests, hot reload)."""
    global _app
    _app = new_app


@asynccontextmanager
async def _lifespan(api: FastAPI):
    yield
    # Flush background telemetry and alerts on shutdown
    if _app is not None:
        await _app.aclose()


def create_api() -> FastAPI:
    """Create and configure the FastAPI app with routes."""
    api = FastAPI(title="WebAI", version=str(API_VERSION), lifespan=_lifespan)

    from .routes import register_routes
    register_routes(api)
    return api


api = create_api()
