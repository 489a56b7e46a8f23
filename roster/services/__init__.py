"""
External service clients

The Supabase student table and the WhatsApp Cloud API, plus the models passed between them and the routes.
"""

from .store import StudentStore
from .messaging import MessagingClient, UNSET
from .models import (
    ApiResponse,
    BulkSendRequest,
    BulkSendResult,
    CallResult,
    ErrorKind,
    SendMessageRequest,
    StudentCreate,
    StudentUpdate
)

__all__ = [
    "StudentStore",
    "MessagingClient",
    "ApiResponse",
    "BulkSendRequest",
    "BulkSendResult",
    "CallResult",
    "ErrorKind",
    "SendMessageRequest",
    "StudentCreate",
    "StudentUpdate",
    "UNSET"
]
