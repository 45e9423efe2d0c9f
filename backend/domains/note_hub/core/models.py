"""
便签数据模型定义

便签是快捷工具面板中的轻量记录：一段文本、一个颜色标签、一个展示用的创建时间。
新建的便签插入到集合最前；编辑内容不改变顺序。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from domains.workspace_core.base import require_field

DEFAULT_NOTE_COLOR = "bg-primary/10"


def display_timestamp(moment: datetime | None = None) -> str:
    """便签上展示的创建时间"""
    return (moment or datetime.now()).strftime("%Y-%m-%d %H:%M")


@dataclass(frozen=True)
class Note:
    """
    便签数据类

    Attributes:
        id: 便签 ID（集合内唯一，创建后不可变）
        content: 便签内容
        color: 颜色标签（由前端解释，如 "bg-yellow-200/20"）
        created_at: 展示用的创建时间（创建后不可变）
    """
    id: str
    content: str = ""
    color: str = DEFAULT_NOTE_COLOR
    created_at: str = field(default_factory=display_timestamp)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            'id': self.id,
            'content': self.content,
            'color': self.color,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Note':
        """从持久化记录创建便签，字段缺失或类型不符时抛出 KeyError/TypeError"""
        return cls(
            id=require_field(data, 'id', str),
            content=require_field(data, 'content', str),
            color=require_field(data, 'color', str),
            created_at=require_field(data, 'created_at', str),
        )

    @property
    def summary(self) -> str:
        """获取内容摘要（前 80 字符）"""
        content = self.content.strip()
        if len(content) <= 80:
            return content
        return content[:80] + "..."
