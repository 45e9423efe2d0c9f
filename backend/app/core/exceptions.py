"""Exception handlers.

ApplicationError 子类按其 category 映射状态码，响应体使用 ErrorResponse:
    {"success": false, "error": "...", "code": "...", "details": {...}, "timestamp": "..."}
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.schemas.common import ErrorResponse
from domains.core import ApplicationError
from domains.workspace_core.logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
    # 5xx 是服务端的问题，其余是调用方的问题
    log = logger.error if exc.http_status_code >= 500 else logger.warning
    log(
        "application_error",
        code=exc.code,
        category=exc.category.value,
        path=request.url.path,
        error=exc.message,
        details=exc.details,
    )
    return _error_response(
        exc.http_status_code,
        ErrorResponse(error=exc.message, code=exc.code, details=exc.details),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return _error_response(
        500,
        ErrorResponse(
            error=f"Internal server error: {type(exc).__name__}",
            code="INTERNAL_ERROR",
            details={"message": str(exc)},
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, handle_application_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "handle_application_error",
    "handle_unexpected_error",
    "register_exception_handlers",
]
