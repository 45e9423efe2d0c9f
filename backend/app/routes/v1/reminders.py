"""Reminder API routes.

快捷工具面板 "Reminders" 工具的接口：CRUD、完成状态切换、到期查询。

修改/删除/切换不存在的 ID 时静默忽略（data 为 null）。
"""

import logging
from datetime import date
from typing import Optional, List

from fastapi import APIRouter, Depends, Path, Query

from app.schemas.common import ApiResponse, model_to_dict
from app.schemas.reminder import (
    ClearCompletedResult,
    Reminder,
    ReminderCreate,
    ReminderUpdate,
)
from app.core.deps import get_reminder_or_404, get_reminder_store
from app.core.async_utils import run_sync

logger = logging.getLogger(__name__)

router = APIRouter()


# 显式 null 对这些字段没有意义，视为未提供；due_date 为 null 表示清除截止日期
NON_NULLABLE_FIELDS = ("text", "completed")


def _to_schema(reminder) -> Reminder:
    return Reminder(**model_to_dict(reminder))


@router.get("/", response_model=ApiResponse[List[Reminder]])
async def list_reminders(
    completed: Optional[bool] = Query(None, description="按完成状态筛选"),
    store=Depends(get_reminder_store),
):
    """获取提醒列表（最新创建的在最前）"""
    reminders = await run_sync(store.list)
    if completed is not None:
        reminders = [r for r in reminders if r.completed == completed]
    return ApiResponse(
        data=[_to_schema(r) for r in reminders],
        message=store.storage_warning,
    )


@router.get("/due", response_model=ApiResponse[List[Reminder]])
async def list_due_reminders(
    on: Optional[date] = Query(None, description="基准日期，默认今天"),
    store=Depends(get_reminder_store),
):
    """到期未完成的提醒"""
    reminders = await run_sync(store.list_due, on)
    return ApiResponse(data=[_to_schema(r) for r in reminders])


@router.post("/clear-completed", response_model=ApiResponse[ClearCompletedResult])
async def clear_completed(store=Depends(get_reminder_store)):
    """删除所有已完成的提醒"""
    removed = await run_sync(store.clear_completed)
    return ApiResponse(
        data=ClearCompletedResult(removed=removed),
        message=store.storage_warning,
    )


@router.get("/{reminder_id}", response_model=ApiResponse[Reminder])
async def get_reminder(reminder=Depends(get_reminder_or_404)):
    """获取提醒详情"""
    return ApiResponse(data=_to_schema(reminder))


@router.post("/", response_model=ApiResponse[Reminder])
async def create_reminder(
    reminder: ReminderCreate,
    store=Depends(get_reminder_store),
):
    """新建提醒"""
    created = await run_sync(store.add_reminder, text=reminder.text, due_date=reminder.due_date)
    return ApiResponse(
        data=_to_schema(created),
        message=store.storage_warning or "提醒创建成功",
    )


@router.patch("/{reminder_id}", response_model=ApiResponse[Optional[Reminder]])
async def update_reminder(
    update: ReminderUpdate,
    reminder_id: str = Path(..., description="提醒 ID"),
    store=Depends(get_reminder_store),
):
    """修改提醒（只修改请求中出现的字段）"""
    patch = {
        name: value
        for name, value in update.model_dump(exclude_unset=True).items()
        if value is not None or name not in NON_NULLABLE_FIELDS
    }
    updated = await run_sync(store.update, reminder_id, **patch)

    if updated is None:
        return ApiResponse(data=None, message=f"提醒不存在，已忽略: {reminder_id}")

    return ApiResponse(data=_to_schema(updated), message=store.storage_warning)


@router.post("/{reminder_id}/toggle", response_model=ApiResponse[Optional[Reminder]])
async def toggle_reminder(
    reminder_id: str = Path(..., description="提醒 ID"),
    store=Depends(get_reminder_store),
):
    """切换完成状态"""
    toggled = await run_sync(store.toggle, reminder_id)

    if toggled is None:
        return ApiResponse(data=None, message=f"提醒不存在，已忽略: {reminder_id}")

    return ApiResponse(data=_to_schema(toggled), message=store.storage_warning)


@router.delete("/{reminder_id}", response_model=ApiResponse[bool])
async def delete_reminder(
    reminder_id: str = Path(..., description="提醒 ID"),
    store=Depends(get_reminder_store),
):
    """删除提醒，data 表示是否实际删除"""
    deleted = await run_sync(store.delete, reminder_id)
    return ApiResponse(
        data=deleted,
        message=store.storage_warning or ("提醒已删除" if deleted else f"提醒不存在，已忽略: {reminder_id}"),
    )
