"""Request logging middleware.

每个请求一个 request_id（客户端可通过 X-Request-ID 传入），
同一请求内的日志都带上该字段，并在响应头中回传。
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from domains.workspace_core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, quiet_paths: tuple[str, ...] = ()):
        super().__init__(app)
        # 这些路径前缀不记录访问日志
        self.quiet_paths = quiet_paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path.startswith(self.quiet_paths):
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        bind_request_context(request_id, method=request.method, path=path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "http_request_error",
                duration_ms=_elapsed_ms(started),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        else:
            logger.info(
                "http_request",
                query=str(request.query_params),
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()
