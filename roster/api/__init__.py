"""
API components

FastAPI routes, dependencies and error handlers for the roster relay.
"""

from .routes import router, send_response
from .dependencies import AppContext, get_context
from .error_handlers import register_error_handlers

__all__ = ["router", "send_response", "AppContext", "get_context", "register_error_handlers"]
