"""
服务装配

工作台是单用户、进程内的应用，所有有状态对象都挂在一个注册表上:

    storage_gateway ─┬─ note_store
                     └─ reminder_store
    panel_controller            （纯内存状态机）
    invoice_service             （会话内的发票草稿）
    llm_client ── assistant_service

实例在首次 get() 时创建，关闭时按创建的逆序 teardown。
测试可以在装配之前用 set() 注入替身，register_core_services() 不会覆盖它们。
"""

import asyncio
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceEntry:
    """如何构建和释放一个服务"""
    name: str
    factory: Callable[[], Any]
    requires: tuple[str, ...] = ()
    teardown: Callable[[Any], None] | None = None


class ServiceRegistry:
    """按名称延迟构建服务，并记录构建顺序以便逆序释放"""

    def __init__(self):
        self._entries: dict[str, ServiceEntry] = {}
        # 字典插入顺序即构建顺序
        self._instances: dict[str, Any] = {}
        self._building: set[str] = set()
        self._lock = threading.RLock()

    def register(
        self,
        name: str,
        factory: Callable[[], Any],
        dependencies: list[str] | None = None,
        cleanup: Callable[[Any], None] | None = None,
    ) -> "ServiceRegistry":
        if name in self._entries:
            logger.warning(f"service_overridden: {name}")
        self._entries[name] = ServiceEntry(
            name=name,
            factory=factory,
            requires=tuple(dependencies or ()),
            teardown=cleanup,
        )
        return self

    def get(self, name: str) -> Any:
        """
        取服务实例，必要时先构建它依赖的服务

        Raises:
            KeyError: 服务未注册
            RuntimeError: 依赖成环
        """
        with self._lock:
            if name in self._instances:
                return self._instances[name]
            entry = self._entries.get(name)
            if entry is None:
                raise KeyError(f"服务未注册: {name}")
            if name in self._building:
                raise RuntimeError(f"服务依赖成环: {name}")

            self._building.add(name)
            try:
                for required in entry.requires:
                    self.get(required)
                instance = entry.factory()
            except Exception as e:
                logger.error(f"service_build_failed: {name}: {e}")
                raise
            finally:
                self._building.discard(name)

            self._instances[name] = instance
            logger.debug(f"service_built: {name}")
            return instance

    def set(self, name: str, instance: Any) -> None:
        """放入现成的实例（测试替身或外部创建的对象）"""
        with self._lock:
            if name not in self._entries:
                self._entries[name] = ServiceEntry(name=name, factory=lambda: instance)
            self._instances.pop(name, None)
            self._instances[name] = instance

    @contextmanager
    def override(self, name: str, instance: Any) -> Iterator[Any]:
        """临时替换一个服务，退出时恢复原实例（或恢复为未构建）"""
        with self._lock:
            had_instance = name in self._instances
            previous = self._instances.get(name)
            previous_entry = self._entries.get(name)
        self.set(name, instance)
        try:
            yield instance
        finally:
            with self._lock:
                self._instances.pop(name, None)
                if previous_entry is None:
                    self._entries.pop(name, None)
                else:
                    self._entries[name] = previous_entry
                if had_instance:
                    self._instances[name] = previous

    def reset(self, name: str) -> None:
        """释放单个服务，下次 get() 时重新构建"""
        with self._lock:
            if name not in self._instances:
                return
            instance = self._instances.pop(name)
        self._release(name, instance)

    def reset_all(self) -> None:
        for name in reversed(self.initialized_services):
            self.reset(name)

    async def shutdown(self) -> None:
        """按构建的逆序释放所有服务"""
        names = list(reversed(self.initialized_services))
        logger.info(f"services_shutdown_started: {names}")
        for name in names:
            with self._lock:
                instance = self._instances.pop(name, None)
            if instance is not None:
                await asyncio.to_thread(self._release, name, instance)
        logger.info("services_shutdown_completed")

    def _release(self, name: str, instance: Any) -> None:
        entry = self._entries.get(name)
        if entry is not None and entry.teardown is not None:
            teardown = entry.teardown
        else:
            close = getattr(instance, "close", None)
            if close is None:
                return
            teardown = lambda _instance: close()
        try:
            teardown(instance)
        except Exception as e:
            # 释放失败不影响其余服务的关闭
            logger.warning(f"service_release_failed: {name}: {e}")

    @property
    def registered_services(self) -> list[str]:
        return list(self._entries)

    @property
    def initialized_services(self) -> list[str]:
        with self._lock:
            return list(self._instances)

    def __contains__(self, name: str) -> bool:
        return name in self._entries


_registry: ServiceRegistry | None = None


def get_service_registry() -> ServiceRegistry:
    global _registry
    if _registry is None:
        _registry = ServiceRegistry()
    return _registry


def reset_service_registry() -> None:
    """释放并替换全局注册表（测试用）"""
    global _registry
    if _registry is not None:
        _registry.reset_all()
    _registry = ServiceRegistry()


# ==================== 工作台服务 ====================

def _build_storage_gateway():
    from domains.workspace_core.storage import create_gateway
    return create_gateway()


def _build_note_store():
    from domains.note_hub import create_note_store
    return create_note_store(get_service_registry().get("storage_gateway"))


def _build_reminder_store():
    from domains.reminder_hub import create_reminder_store
    return create_reminder_store(get_service_registry().get("storage_gateway"))


def _build_panel_controller():
    from domains.panel_hub import ToolPanelController
    return ToolPanelController()


def _build_invoice_service():
    from domains.invoice_hub import InvoiceService
    return InvoiceService()


def _build_llm_client():
    from domains.workspace_core.llm import LLMClient
    return LLMClient()


def _build_assistant_service():
    from domains.assistant_hub import AssistantService
    return AssistantService(get_service_registry().get("llm_client"))


CORE_SERVICE_ENTRIES: tuple[ServiceEntry, ...] = (
    ServiceEntry("storage_gateway", _build_storage_gateway, teardown=lambda g: g.close()),
    ServiceEntry("note_store", _build_note_store, requires=("storage_gateway",)),
    ServiceEntry("reminder_store", _build_reminder_store, requires=("storage_gateway",)),
    ServiceEntry("panel_controller", _build_panel_controller),
    ServiceEntry("invoice_service", _build_invoice_service),
    ServiceEntry("llm_client", _build_llm_client),
    ServiceEntry("assistant_service", _build_assistant_service, requires=("llm_client",)),
)


def register_core_services() -> ServiceRegistry:
    """把工作台服务登记到全局注册表，已存在的名称（含 set() 注入的替身）保持不变"""
    registry = get_service_registry()
    added = []
    for entry in CORE_SERVICE_ENTRIES:
        if entry.name in registry:
            continue
        registry.register(
            entry.name,
            entry.factory,
            dependencies=list(entry.requires),
            cleanup=entry.teardown,
        )
        added.append(entry.name)
    logger.info(f"core_services_registered: {added}")
    return registry


__all__ = [
    "ServiceRegistry",
    "ServiceEntry",
    "CORE_SERVICE_ENTRIES",
    "get_service_registry",
    "reset_service_registry",
    "register_core_services",
]
