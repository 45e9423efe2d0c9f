"""
核心层：数据模型和存储
"""

from .models import Reminder
from .store import ReminderStore, create_reminder_store

__all__ = ['Reminder', 'ReminderStore', 'create_reminder_store']
