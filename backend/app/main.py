"""DesignersOS API entry point.

    uvicorn app.main:app --app-dir backend --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.events import create_start_handler, create_stop_handler
from app.core.exceptions import register_exception_handlers
from app.core.middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware
from app.routes.v1.router import api_router
from domains.core import get_service_registry
from domains.workspace_core.logging import configure_logging

configure_logging(service_name="designers-os-api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_start_handler()()
    yield
    await create_stop_handler()()


async def health_check():
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "services": get_service_registry().initialized_services,
    }


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="设计师工作台（快捷工具面板 + AI 助手）REST API",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )

    # 后添加的中间件先执行: 访问日志包在 CORS 外层
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(
        RequestLoggingMiddleware,
        quiet_paths=("/health", "/docs", "/redoc", "/favicon.ico", app.openapi_url),
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)
    app.add_api_route("/health", health_check, methods=["GET"], tags=["health"])
    return app


app = create_application()
