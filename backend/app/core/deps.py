"""FastAPI dependencies backed by the service registry.

测试在请求之前用 registry.set() 注入替身（内存网关、假 LLM 客户端），
这里只在缺少工作台服务时补登记，不会覆盖替身。
"""

import asyncio
from typing import TYPE_CHECKING, Annotated, Any, Callable

from fastapi import Depends, Path

from domains.core import (
    CORE_SERVICE_ENTRIES,
    NotFoundError,
    ServiceRegistry,
    get_service_registry,
    register_core_services,
)

if TYPE_CHECKING:
    from domains.assistant_hub import AssistantService
    from domains.invoice_hub import InvoiceService
    from domains.note_hub import NoteStore
    from domains.panel_hub import ToolPanelController
    from domains.reminder_hub import ReminderStore

CORE_SERVICES = tuple(entry.name for entry in CORE_SERVICE_ENTRIES)


def _registry() -> ServiceRegistry:
    registry = get_service_registry()
    if any(name not in registry for name in CORE_SERVICES):
        register_core_services()
    return registry


def get_note_store() -> "NoteStore":
    return _registry().get("note_store")


def get_reminder_store() -> "ReminderStore":
    return _registry().get("reminder_store")


def get_panel_controller() -> "ToolPanelController":
    return _registry().get("panel_controller")


def get_invoice_service() -> "InvoiceService":
    return _registry().get("invoice_service")


def get_assistant_service() -> "AssistantService":
    return _registry().get("assistant_service")


async def _get_or_404(getter: Callable[[str], Any], resource_id: str, resource_name: str) -> Any:
    """store.get 放到线程池执行；找不到时返回统一的 404 错误体"""
    resource = await asyncio.to_thread(getter, resource_id)
    if resource is None:
        raise NotFoundError(resource_name, resource_id)
    return resource


async def get_note_or_404(
    note_id: Annotated[str, Path(description="便签ID")],
    store=Depends(get_note_store),
):
    """只用于读取接口；修改和删除接口对不存在的 ID 静默忽略"""
    return await _get_or_404(store.get, note_id, "便签")


async def get_reminder_or_404(
    reminder_id: Annotated[str, Path(description="提醒ID")],
    store=Depends(get_reminder_store),
):
    return await _get_or_404(store.get, reminder_id, "提醒")
