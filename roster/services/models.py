from typing import Any, Dict, Optional
from pydantic import BaseModel
from enum import Enum


class ErrorKind(str, Enum):
    EXTERNAL = "external"      # remote service answered with an error status
    UNEXPECTED = "unexpected"  # the call itself raised


class CallResult(BaseModel):
    """Outcome of one call to the store or the messaging API"""
    data: Any = None
    error: Any = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, data: Any = None) -> "CallResult":
        return cls(data=data)

    @classmethod
    def external(cls, error: Any) -> "CallResult":
        return cls(error=error, error_kind=ErrorKind.EXTERNAL)

    @classmethod
    def unexpected(cls, error: Any) -> "CallResult":
        return cls(error=error, error_kind=ErrorKind.UNEXPECTED)


class ApiResponse(BaseModel):
    """Envelope returned by every relay endpoint"""
    success: bool
    message: str
    data: Any = None


class StudentCreate(BaseModel):
    """Body of POST /student. Fields are forwarded as-is, missing ones as null."""
    name: Any = None
    roll: Any = None
    parentPhone: Any = None
    section: Any = None
    key: Any = None
    fees: Any = None
    performance: Any = None

    def to_row(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "roll": self.roll,
            "parent_phone": self.parentPhone,
            "section": self.section,
            "key": self.key,
            "fees": self.fees,
            "performance": self.performance,
        }


class StudentUpdate(BaseModel):
    """
    Body of PUT /student/{roll}. Only these three columns can change,
    and only the ones present in the body are sent; an explicit null still clears a column.
    """
    name: Any = None
    parentPhone: Any = None
    performance: Any = None

    def to_changes(self) -> Dict[str, Any]:
        columns = {
            "name": "name",
            "parentPhone": "parent_phone",
            "performance": "performance",
        }
        return {
            column: getattr(self, field)
            for field, column in columns.items()
            if field in self.model_fields_set
        }


class SendMessageRequest(BaseModel):
    to: Any = None
    message: Any = None


class BulkSendRequest(BaseModel):
    numbers: Any = None
    message: Any = None


class BulkSendResult(BaseModel):
    """Counters produced by folding sends over a list of numbers"""
    successful: int = 0
    failed: int = 0
