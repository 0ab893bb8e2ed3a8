"""FastAPI application entrypoint for the management API."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from faultline.api.users import router as users_router
from faultline.core.config import Settings
from faultline.core.config import get_settings
from faultline.core.errors import register_error_handlers
from faultline.core.logging import configure_logging
from faultline.db import models as _models  # noqa: F401
from faultline.handling.translator import ErrorTranslator

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, translator: ErrorTranslator | None = None) -> FastAPI:
    """Build the API with its error contract wired in."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting management API with settings=%s", settings.safe_for_logging())

    app = FastAPI(title="faultline")
    register_error_handlers(app, translator or ErrorTranslator.from_settings(settings))
    app.include_router(users_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint for service readiness."""
        return {"status": "ok"}

    return app


app = create_app()
