"""
提醒事项数据模型定义

与便签相同的创建/排序/删除规则，额外支持完成状态切换和可选的截止日期。
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from domains.workspace_core.base import require_field


@dataclass(frozen=True)
class Reminder:
    """
    提醒事项数据类

    Attributes:
        id: 提醒 ID（集合内唯一，创建后不可变）
        text: 提醒内容
        completed: 是否已完成
        due_date: 截止日期（可选）
    """
    id: str
    text: str = ""
    completed: bool = False
    due_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        """转换为字典（日期使用 ISO 格式）"""
        return {
            'id': self.id,
            'text': self.text,
            'completed': self.completed,
            'due_date': self.due_date.isoformat() if self.due_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Reminder':
        """从持久化记录创建提醒，结构不符时抛出 KeyError/TypeError/ValueError"""
        due_date = require_field(data, 'due_date', str, optional=True)
        return cls(
            id=require_field(data, 'id', str),
            text=require_field(data, 'text', str),
            completed=require_field(data, 'completed', bool),
            due_date=date.fromisoformat(due_date) if due_date else None,
        )

    def is_due(self, on_date: date) -> bool:
        """未完成且截止日期不晚于 on_date"""
        return not self.completed and self.due_date is not None and self.due_date <= on_date
