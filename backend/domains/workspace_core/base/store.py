"""
实体存储基类

在内存中维护一个有序的实体集合（最新创建的在最前），
每次修改后通过 PersistenceGateway 整体写回。

子类需要实现：
- collection: 集合名（决定存储键）
- mutable_fields: 允许 update 修改的字段白名单
- _record_to_entity: 持久化记录转实体（结构不符时抛 KeyError/TypeError/ValueError）
- _new_entity: 用新 ID 和初始字段构造实体
- _seed: 种子集合

使用示例:
    class NoteStore(EntityStore[Note]):
        collection = "notes"
        mutable_fields = {"content", "color"}

        def _record_to_entity(self, record): return Note.from_dict(record)
        def _new_entity(self, entity_id, **fields): return Note(id=entity_id, **fields)
        def _seed(self): return [...]
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Callable, Dict, Generic, List, Optional, Set, Tuple, TypeVar

from domains.core.exceptions import MalformedDataError, StorageUnavailableError

from ..storage.gateway import LoadSource, PersistenceGateway

logger = logging.getLogger(__name__)

T = TypeVar('T')


def new_entity_id() -> str:
    """随机 ID（uuid4），与时钟精度无关"""
    return uuid.uuid4().hex


class EntityStore(ABC, Generic[T]):
    """
    实体存储基类

    实体必须是带 id 字段的 frozen dataclass；list() 返回的元组即只读视图。
    所有修改都在同一把锁内完成 "修改内存 + 同步写回"，
    调用返回时持久化层已经反映了新的集合（或已记录存储警告）。
    """

    # 子类必须定义
    collection: str = ""
    mutable_fields: Set[str] = set()

    def __init__(
        self,
        gateway: PersistenceGateway,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Args:
            gateway: 持久化网关
            id_factory: ID 生成器，默认 uuid4
        """
        self.gateway = gateway
        self._id_factory = id_factory or new_entity_id
        self._lock = threading.RLock()
        self._items: List[T] = []
        self.storage_warning: Optional[str] = None
        self.load_source: str = LoadSource.ABSENT
        self.reload()

    # ==================== 抽象方法 ====================

    @abstractmethod
    def _record_to_entity(self, record: Dict[str, Any]) -> T:
        """持久化记录 -> 实体"""

    @abstractmethod
    def _new_entity(self, entity_id: str, **fields) -> T:
        """用新 ID 和初始字段构造实体"""

    @abstractmethod
    def _seed(self) -> List[T]:
        """种子集合（无有效持久化数据时使用）"""

    def _entity_to_record(self, entity: T) -> Dict[str, Any]:
        """实体 -> 持久化记录"""
        return entity.to_dict()

    def _coerce_field(self, name: str, value: Any) -> Any:
        """update/create 字段值的类型转换钩子"""
        return value

    # ==================== 加载 ====================

    @property
    def storage_key(self) -> str:
        return self.gateway.storage_key(self.collection)

    def reload(self) -> None:
        """
        两阶段加载：读取并校验，失败则使用种子集合并立即写回
        """
        with self._lock:
            result = self.gateway.load_collection(self.collection, self._parse, self._seed)
            self._items = list(result.items)
            self.load_source = result.source
            if result.seeded:
                logger.info(f"{self.collection}_seeded: source={result.source}, count={len(self._items)}")
                self._persist()

    def _parse(self, records: List[Dict[str, Any]]) -> List[T]:
        items: List[T] = []
        seen: Set[str] = set()
        for index, record in enumerate(records):
            try:
                entity = self._record_to_entity(record)
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedDataError(self.storage_key, f"第 {index} 条记录无效: {e}", cause=e) from e
            if entity.id in seen:
                raise MalformedDataError(self.storage_key, f"重复的 ID: {entity.id}")
            seen.add(entity.id)
            items.append(entity)
        return items

    # ==================== 查询 ====================

    def list(self) -> Tuple[T, ...]:
        """当前集合（最新创建的在最前）"""
        with self._lock:
            return tuple(self._items)

    def get(self, entity_id: str) -> Optional[T]:
        with self._lock:
            index = self._index_of(entity_id)
            return self._items[index] if index is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _index_of(self, entity_id: str) -> Optional[int]:
        for index, entity in enumerate(self._items):
            if entity.id == entity_id:
                return index
        return None

    # ==================== 修改 ====================

    def create(self, **fields) -> T:
        """
        创建实体并插入到集合最前

        只接受 mutable_fields 中的初始字段，其余字段忽略。
        """
        safe_fields = self._filter_fields(fields)
        with self._lock:
            entity = self._new_entity(self._generate_id(), **safe_fields)
            self._items.insert(0, entity)
            self._persist()
        logger.info(f"{self.collection}_created: id={entity.id}")
        return entity

    def update(self, entity_id: str, **patch) -> Optional[T]:
        """
        修改实体的可变字段

        ID 不存在时什么都不做（UI 事件可能晚于删除到达），返回 None。
        """
        safe_fields = self._filter_fields(patch)
        with self._lock:
            index = self._index_of(entity_id)
            if index is None:
                logger.debug(f"{self.collection}_update_skipped: id={entity_id} not found")
                return None
            if not safe_fields:
                return self._items[index]

            entity = replace(self._items[index], **safe_fields)
            self._items[index] = entity
            self._persist()
        return entity

    def delete(self, entity_id: str) -> bool:
        """删除实体；ID 不存在时什么都不做，返回 False"""
        with self._lock:
            index = self._index_of(entity_id)
            if index is None:
                logger.debug(f"{self.collection}_delete_skipped: id={entity_id} not found")
                return False
            del self._items[index]
            self._persist()
        logger.info(f"{self.collection}_deleted: id={entity_id}")
        return True

    # ==================== 内部 ====================

    def _generate_id(self) -> str:
        existing = {entity.id for entity in self._items}
        entity_id = self._id_factory()
        while entity_id in existing:
            entity_id = self._id_factory()
        return entity_id

    def _filter_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        safe_fields = {
            name: self._coerce_field(name, value)
            for name, value in fields.items()
            if name in self.mutable_fields
        }
        ignored = set(fields) - set(safe_fields)
        if ignored:
            logger.warning(f"{self.collection}_fields_ignored: {sorted(ignored)}")
        return safe_fields

    def _persist(self) -> bool:
        """整体写回集合；存储不可用时只记录警告，不回滚内存"""
        records = [self._entity_to_record(entity) for entity in self._items]
        try:
            self.gateway.write(self.collection, records)
        except StorageUnavailableError as e:
            self.storage_warning = f"修改仅在本次会话有效: {e.message}"
            logger.warning(f"{self.collection}_persist_failed: {e.message}")
            return False
        self.storage_warning = None
        return True
