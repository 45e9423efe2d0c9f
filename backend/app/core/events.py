"""Startup / shutdown hooks."""

from typing import Awaitable, Callable

from domains.core import ServiceRegistry, get_service_registry, register_core_services
from domains.workspace_core.logging import get_logger

logger = get_logger(__name__)

PERSISTED_STORES = ("note_store", "reminder_store")


def _warm_up(registry: ServiceRegistry) -> None:
    # 首次构造 store 时完成加载或播种，启动日志里能看到数据来源
    for name in PERSISTED_STORES:
        store = registry.get(name)
        logger.info(
            "store_ready",
            store=name,
            count=len(store),
            source=store.load_source,
            storage_warning=store.storage_warning,
        )
    if not registry.get("llm_client").is_configured:
        logger.warning("llm_api_key_missing", hint="set LLM_API_KEY to enable the assistant")


def create_start_handler() -> Callable[[], Awaitable[None]]:
    async def start_app() -> None:
        logger.info("api_starting")
        registry = register_core_services()
        try:
            _warm_up(registry)
        except Exception as e:
            # 服务在首次请求时会再次尝试构建
            logger.error("service_warm_up_failed", error=str(e), error_type=type(e).__name__)
        logger.info("api_started", services=registry.initialized_services)

    return start_app


def create_stop_handler() -> Callable[[], Awaitable[None]]:
    async def stop_app() -> None:
        logger.info("api_stopping")
        await get_service_registry().shutdown()
        logger.info("api_stopped")

    return stop_app
