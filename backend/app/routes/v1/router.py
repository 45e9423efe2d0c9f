"""API v1 router - aggregates all route modules."""

from fastapi import APIRouter

from app.routes.v1 import assistant, invoices, notes, panel, reminders

api_router = APIRouter()

# Include REST API route modules
api_router.include_router(panel.router, prefix="/panel", tags=["panel"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(assistant.router, prefix="/assistant", tags=["assistant"])
