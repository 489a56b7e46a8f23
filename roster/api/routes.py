from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Any, Optional
import logging

from roster.services import (
    ApiResponse,
    BulkSendRequest,
    CallResult,
    ErrorKind,
    SendMessageRequest,
    StudentCreate,
    StudentUpdate,
    UNSET
)
from .dependencies import AppContext, get_context

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error."


def send_response(success: bool, message: str, data: Any = None) -> JSONResponse:
    """Wrap a result in the envelope; 200 on success, 400 on any failure."""
    envelope = ApiResponse(success=success, message=message, data=data)
    return JSONResponse(status_code=200 if success else 400, content=envelope.model_dump())


def store_response(result: CallResult, action: str, success_message: str, failure_message: str) -> JSONResponse:
    """
    Map a store CallResult onto the envelope.
    Error detail only goes to the log; the caller gets the generic message for the failure tier.

    """
    if result.ok:
        return send_response(True, success_message, result.data)

    if result.error_kind == ErrorKind.EXTERNAL:
        logger.error(f"Supabase {action} error: {result.error}")
        return send_response(False, failure_message)

    logger.error(f"API {action} error: {result.error}")
    return send_response(False, INTERNAL_ERROR)


# --- Student directory ---

@router.get("/students")
async def list_students(context: AppContext = Depends(get_context)):
    """Fetch every student row from the store."""
    result = await context.store.select_all()
    return store_response(
        result, "fetch students", "Students fetched successfully.", "Failed to fetch students."
    )


@router.post("/student")
async def add_student(
    request: Optional[StudentCreate] = None,
    context: AppContext = Depends(get_context)
):
    """
    Insert one student.
    No presence, type or duplicate checks; the store decides whether the row is acceptable.
    """
    request = request or StudentCreate()
    result = await context.store.insert(request.to_row())
    return store_response(
        result, "add student", "Student added successfully.", "Failed to add student."
    )


@router.put("/student/{roll}")
async def update_student(
    roll: str,
    request: Optional[StudentUpdate] = None,
    context: AppContext = Depends(get_context)
):
    """
    Change whichever of name, parentPhone and performance the body carries for the student with this roll.
    An unknown roll matches no rows and still reports success.
    """
    request = request or StudentUpdate()
    result = await context.store.update("roll", roll, request.to_changes())
    return store_response(
        result,
        "update student",
        "Student details updated successfully.",
        "Failed to update student details."
    )


@router.delete("/student/{roll}")
async def delete_student(roll: str, context: AppContext = Depends(get_context)):
    """Delete the student with this roll; an unknown roll still reports success."""
    result = await context.store.delete("roll", roll)
    return store_response(
        result, "delete student", "Student deleted successfully.", "Failed to delete student."
    )


# --- WhatsApp relay ---

@router.post("/whatsapp/send")
async def send_whatsapp_message(
    request: Optional[SendMessageRequest] = None,
    context: AppContext = Depends(get_context)
):
    """
    Send one text message.
    Unlike the student endpoints, the provider's error detail is echoed back as data.
    """
    request = request or SendMessageRequest()
    sent = request.model_dump(exclude_unset=True)
    result = await context.messaging.send_text(sent.get("to", UNSET), sent.get("message", UNSET))

    if result.ok:
        return send_response(True, "WhatsApp message sent successfully.", result.data)

    logger.error(f"WhatsApp send error: {result.error}")
    return send_response(False, "Failed to send WhatsApp message.", result.error)


@router.post("/whatsapp/bulk-send")
async def bulk_send_whatsapp_messages(
    request: Optional[BulkSendRequest] = None,
    context: AppContext = Depends(get_context)
):
    """
    Send the same text to every number, sequentially.
    Always reports success with aggregate counts, even when every send failed.
    """
    request = request or BulkSendRequest()
    try:
        sent = request.model_dump(exclude_unset=True)
        result = await context.messaging.send_bulk(request.numbers, sent.get("message", UNSET))
    except Exception as e:
        # numbers missing or not a list
        logger.error(f"API /whatsapp/bulk-send error: {e}")
        return send_response(False, INTERNAL_ERROR)

    logger.info(f"Bulk send finished: {result.successful} sent, {result.failed} failed")
    return send_response(
        True,
        f"Bulk messages sent. Successful: {result.successful}, Failed: {result.failed}."
    )
