"""Pydantic schemas for API requests and responses."""

from app.schemas.common import ApiResponse, ErrorResponse
from app.schemas.note import Note, NoteCreate, NoteUpdate
from app.schemas.reminder import Reminder, ReminderCreate, ReminderUpdate
from app.schemas.invoice import Invoice, InvoiceCreate, InvoiceHeaderUpdate
from app.schemas.panel import PanelEventRequest, PanelState
from app.schemas.assistant import ChatRequest, ChatResponse

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "Note",
    "NoteCreate",
    "NoteUpdate",
    "Reminder",
    "ReminderCreate",
    "ReminderUpdate",
    "Invoice",
    "InvoiceCreate",
    "InvoiceHeaderUpdate",
    "PanelEventRequest",
    "PanelState",
    "ChatRequest",
    "ChatResponse",
]
