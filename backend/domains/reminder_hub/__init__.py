"""
提醒事项领域模块

快捷工具面板中的 "Reminders" 工具：
- 新建的提醒插入到最前，编辑不改变顺序
- 完成状态切换、到期查询
- 集合整体持久化，无有效数据时使用种子提醒
"""

from .core.models import Reminder
from .core.store import ReminderStore, create_reminder_store

__all__ = [
    'Reminder',
    'ReminderStore',
    'create_reminder_store',
]
