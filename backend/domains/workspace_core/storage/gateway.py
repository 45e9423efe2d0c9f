"""
持久化网关

把一个具名实体集合（如 notes、reminders）整体读写到键值存储。

持久化格式（JSON）:
    {"schema_version": 1, "items": [{...}, {...}]}

旧版本直接存储 JSON 数组（视为版本 0），读取时兼容，下一次写入时升级为信封格式。
比当前版本更新的 schema_version 无法安全解析，按格式错误处理。

加载分两阶段: 先读取并校验结构，失败（不存在 / 存储不可用 / 格式错误）
则返回种子集合，由调用方决定是否立即回写。
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from domains.core.exceptions import MalformedDataError, StorageUnavailableError

from .backends import KeyValueBackend
from .lock import KeyLockRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEMA_VERSION = 1


class LoadSource:
    """集合的来源"""
    STORED = "stored"            # 持久化数据校验通过
    ABSENT = "absent"            # 未存储过
    UNAVAILABLE = "unavailable"  # 存储不可用
    MALFORMED = "malformed"      # 持久化数据格式错误


@dataclass
class LoadResult(Generic[T]):
    """集合加载结果"""
    items: list[T]
    source: str = LoadSource.STORED

    @property
    def seeded(self) -> bool:
        """是否回退到了种子集合"""
        return self.source != LoadSource.STORED


class PersistenceGateway:
    """
    持久化网关

    同一个存储键的读写在进程内串行执行，保证 "写后读" 一致；
    不同键之间互不阻塞。
    """

    def __init__(self, backend: KeyValueBackend, namespace: str = "designers_os"):
        """
        Args:
            backend: 键值存储后端
            namespace: 存储键前缀，键格式为 "<namespace>.<collection>"
        """
        self.backend = backend
        self.namespace = namespace
        self._locks = KeyLockRegistry()

    def storage_key(self, collection: str) -> str:
        return f"{self.namespace}.{collection}" if self.namespace else collection

    # ==================== 读写 ====================

    def read(self, collection: str) -> Optional[list[dict[str, Any]]]:
        """
        读取集合的原始记录

        Returns:
            记录列表；未存储过返回 None

        Raises:
            StorageUnavailableError: 存储不可读
            MalformedDataError: 值不是预期的集合结构
        """
        key = self.storage_key(collection)
        with self._locks.hold(key):
            raw = self.backend.get(key)

        if raw is None:
            return None
        return self._decode(key, raw)

    def write(self, collection: str, records: list[dict[str, Any]]) -> None:
        """
        整体写入集合（同步完成后返回）

        Raises:
            StorageUnavailableError: 存储不可写
        """
        key = self.storage_key(collection)
        payload = json.dumps(
            {"schema_version": SCHEMA_VERSION, "items": records},
            ensure_ascii=False,
        )
        with self._locks.hold(key):
            self.backend.set(key, payload)
        logger.debug(f"collection_written: {key}, count={len(records)}")

    def clear(self, collection: str) -> None:
        """删除集合"""
        key = self.storage_key(collection)
        with self._locks.hold(key):
            self.backend.remove(key)

    def load_collection(
        self,
        collection: str,
        parse: Callable[[list[dict[str, Any]]], list[T]],
        seed: Callable[[], list[T]],
    ) -> LoadResult[T]:
        """
        加载集合，任何失败都回退到种子集合

        Args:
            collection: 集合名
            parse: 记录列表 -> 实体列表，结构不符时抛出 MalformedDataError
            seed: 种子集合工厂

        Returns:
            LoadResult，source 标明数据来源
        """
        key = self.storage_key(collection)
        try:
            records = self.read(collection)
            if records is None:
                logger.info(f"collection_absent_using_seed: {key}")
                return LoadResult(seed(), LoadSource.ABSENT)
            return LoadResult(parse(records), LoadSource.STORED)
        except StorageUnavailableError as e:
            logger.warning(f"collection_unavailable_using_seed: {key}, {e.message}")
            return LoadResult(seed(), LoadSource.UNAVAILABLE)
        except MalformedDataError as e:
            logger.warning(f"collection_malformed_using_seed: {key}, {e.message}")
            return LoadResult(seed(), LoadSource.MALFORMED)

    def close(self) -> None:
        self.backend.close()

    # ==================== 解码 ====================

    @staticmethod
    def _decode(key: str, raw: str) -> list[dict[str, Any]]:
        try:
            value = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise MalformedDataError(key, f"JSON 解析失败: {e}", cause=e) from e

        if isinstance(value, list):
            records = value
        elif isinstance(value, dict):
            version = value.get("schema_version")
            if not isinstance(version, int) or isinstance(version, bool):
                raise MalformedDataError(key, "缺少 schema_version")
            if version > SCHEMA_VERSION:
                raise MalformedDataError(key, f"不支持的 schema_version: {version}")
            records = value.get("items")
            if not isinstance(records, list):
                raise MalformedDataError(key, "items 不是数组")
        else:
            raise MalformedDataError(key, f"不支持的顶层类型: {type(value).__name__}")

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise MalformedDataError(key, f"第 {index} 条记录不是对象")
        return records
