"""Reminder-related Pydantic schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ReminderCreate(BaseModel):
    """Reminder create request."""

    text: str = Field("", description="提醒内容")
    due_date: Optional[date] = Field(None, description="截止日期")


class ReminderUpdate(BaseModel):
    """Reminder update request."""

    text: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[date] = None


class Reminder(BaseModel):
    """Complete reminder model for API responses."""

    id: str = Field(..., description="提醒 ID")
    text: str = Field("", description="提醒内容")
    completed: bool = Field(False, description="是否已完成")
    due_date: Optional[date] = Field(None, description="截止日期")


class ClearCompletedResult(BaseModel):
    """清除已完成提醒的结果"""

    removed: int = Field(..., description="删除数量")
