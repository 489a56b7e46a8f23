"""Global exception handlers that keep failures inside the response envelope.

Every failure is reported as HTTP 400 with ``success: false``; the service
never answers with a 5xx.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .routes import send_response

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the validation and catch-all handlers on the app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
        return send_response(False, "Invalid request body.")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return send_response(False, "Internal server error.")
