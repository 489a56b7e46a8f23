"""
Roster Relay

HTTP glue over a Supabase student table and the WhatsApp Cloud API.
"""

__version__ = "1.0.0"

from .services import StudentStore, MessagingClient, CallResult

__all__ = [
    "StudentStore",
    "MessagingClient",
    "CallResult"
]
