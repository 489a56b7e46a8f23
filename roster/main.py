from contextlib import asynccontextmanager
from typing import Optional
import logging

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roster import __version__
from roster.api import AppContext, register_error_handlers, router
from roster.config import Settings, get_settings

logger = logging.getLogger(__name__)


def resolve_log_level(name: str) -> int:
    """Map a level name to its number; an unknown name falls back to INFO."""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the FastAPI app.
    The transport argument replaces the network layer of the shared HTTP client (used by tests).

    """
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(level=resolve_log_level(settings.log_level))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.context = AppContext.create(settings, transport=transport)
        logger.info(f"Roster relay started, store at {settings.store_rest_url}")
        try:
            yield
        finally:
            await app.state.context.close()

    app = FastAPI(
        title="Roster Relay API",
        description="Student roster CRUD over Supabase and a WhatsApp message relay",
        version=__version__,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include API routes
    app.include_router(router, prefix=settings.api_prefix)

    prefix = settings.api_prefix

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "message": "Roster Relay API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "list_students": f"GET {prefix}/students",
                "add_student": f"POST {prefix}/student",
                "update_student": f"PUT {prefix}/student/{{roll}}",
                "delete_student": f"DELETE {prefix}/student/{{roll}}",
                "whatsapp_send": f"POST {prefix}/whatsapp/send",
                "whatsapp_bulk_send": f"POST {prefix}/whatsapp/bulk-send"
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


# ASGI entry point for uvicorn and serverless hosts
app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
