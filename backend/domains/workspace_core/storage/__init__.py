"""
持久化存储模块

- KeyValueBackend: 键值存储后端（文件 / 内存）
- PersistenceGateway: 具名集合的整体读写，带 schema 版本信封与种子回退
"""

import logging
from typing import Optional

from .backends import JsonFileBackend, KeyValueBackend, MemoryBackend
from .config import StorageSettings, get_storage_settings
from .gateway import SCHEMA_VERSION, LoadResult, LoadSource, PersistenceGateway

logger = logging.getLogger(__name__)


def create_gateway(settings: Optional[StorageSettings] = None) -> PersistenceGateway:
    """按配置创建持久化网关"""
    settings = settings or get_storage_settings()

    if settings.backend == "memory":
        backend: KeyValueBackend = MemoryBackend()
    else:
        backend = JsonFileBackend(settings.data_dir, lock_timeout=settings.lock_timeout)

    logger.info(f"storage_gateway_created: backend={backend.name}, namespace={settings.namespace}")
    return PersistenceGateway(backend, namespace=settings.namespace)


__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "PersistenceGateway",
    "LoadResult",
    "LoadSource",
    "SCHEMA_VERSION",
    "StorageSettings",
    "get_storage_settings",
    "create_gateway",
]
