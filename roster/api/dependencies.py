"""Application context shared by every request.

Built once in the application lifespan and stored on ``app.state``; route
handlers receive it through ``Depends(get_context)``.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from roster.config import Settings
from roster.services import MessagingClient, StudentStore


@dataclass
class AppContext:
    """Settings plus the clients for the two external services."""

    settings: Settings
    http: httpx.AsyncClient
    store: StudentStore
    messaging: MessagingClient

    @classmethod
    def create(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppContext":
        http = httpx.AsyncClient(transport=transport)
        return cls(
            settings=settings,
            http=http,
            store=StudentStore(
                http,
                settings.store_rest_url,
                settings.supabase_anon_key,
                table=settings.students_table,
            ),
            messaging=MessagingClient(
                http, settings.whatsapp_api_url, settings.whatsapp_api_token
            ),
        )

    async def close(self) -> None:
        await self.http.aclose()


def get_context(request: Request) -> AppContext:
    """Return the context created at startup."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError(
            "Application context not initialized. "
            "Ensure the app lifespan has run before serving requests."
        )
    return context
