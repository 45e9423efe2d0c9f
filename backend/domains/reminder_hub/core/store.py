"""
提醒事项存储层

继承 EntityStore，集合整体持久化到存储键 "<namespace>.reminders"。
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from domains.core.exceptions import ValidationError
from domains.workspace_core.base import EntityStore
from domains.workspace_core.storage import PersistenceGateway

from .models import Reminder

logger = logging.getLogger(__name__)


class ReminderStore(EntityStore[Reminder]):
    """提醒事项存储层"""

    collection = "reminders"

    mutable_fields = {'text', 'completed', 'due_date'}

    def _record_to_entity(self, record: Dict[str, Any]) -> Reminder:
        return Reminder.from_dict(record)

    def _new_entity(self, entity_id: str, **fields) -> Reminder:
        return Reminder(
            id=entity_id,
            text=fields.get('text', ""),
            completed=fields.get('completed', False),
            due_date=fields.get('due_date'),
        )

    def _coerce_field(self, name: str, value: Any) -> Any:
        if name == 'due_date':
            if value is None or isinstance(value, date):
                return value
            try:
                return date.fromisoformat(str(value))
            except ValueError as e:
                raise ValidationError(f"无效的截止日期: {value}", field='due_date') from e
        if name == 'completed':
            if not isinstance(value, bool):
                raise ValidationError(f"完成状态必须是布尔值: {value!r}", field='completed')
            return value
        return "" if value is None else str(value)

    def _seed(self) -> List[Reminder]:
        return [
            Reminder(id='1', text='Update project status', completed=False),
            Reminder(id='2', text='Review team feedback', completed=True),
        ]

    # ==================== 便捷方法 ====================

    def add_reminder(self, text: str = "", due_date: date | None = None) -> Reminder:
        """新建提醒（插入到最前）"""
        return self.create(text=text, due_date=due_date)

    def toggle(self, reminder_id: str) -> Optional[Reminder]:
        """切换完成状态，ID 不存在时返回 None"""
        with self._lock:
            reminder = self.get(reminder_id)
            if reminder is None:
                logger.debug(f"reminders_toggle_skipped: id={reminder_id} not found")
                return None
            return self.update(reminder_id, completed=not reminder.completed)

    def list_due(self, on_date: date | None = None) -> List[Reminder]:
        """到期未完成的提醒（截止日期不晚于 on_date，默认今天）"""
        on_date = on_date or date.today()
        return [reminder for reminder in self.list() if reminder.is_due(on_date)]

    def clear_completed(self) -> int:
        """删除所有已完成的提醒，返回删除数量（一次写回）"""
        with self._lock:
            remaining = [reminder for reminder in self._items if not reminder.completed]
            removed = len(self._items) - len(remaining)
            if removed:
                self._items = remaining
                self._persist()
        if removed:
            logger.info(f"reminders_completed_cleared: count={removed}")
        return removed


def create_reminder_store(gateway: PersistenceGateway) -> ReminderStore:
    """创建提醒存储（首次构造时完成加载或播种）"""
    store = ReminderStore(gateway)
    logger.info(f"reminder_store_ready: count={len(store)}, source={store.load_source}")
    return store
