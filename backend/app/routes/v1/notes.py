"""Note API routes.

快捷工具面板 "Notes" 工具的 CRUD 接口。

- 新建的便签插入到最前
- 修改/删除不存在的 ID 时静默忽略（data 为 null），前端事件可能晚于删除到达
- 存储不可用时修改仍然生效，响应 message 中附带警告

NOTE: 所有同步 store 调用都使用 run_sync 包装，避免阻塞 event loop。
"""

import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, Path

from app.schemas.common import ApiResponse, model_to_dict
from app.schemas.note import Note, NoteCreate, NoteUpdate
from app.core.deps import get_note_or_404, get_note_store
from app.core.async_utils import run_sync

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[Note]])
async def list_notes(
    search: Optional[str] = None,
    store=Depends(get_note_store),
):
    """
    获取便签列表

    按集合顺序返回（最新创建的在最前），可按内容关键词过滤。
    """
    if search:
        notes = await run_sync(store.search, search)
    else:
        notes = await run_sync(store.list)

    return ApiResponse(
        data=[Note(**model_to_dict(n)) for n in notes],
        message=store.storage_warning,
    )


@router.get("/{note_id}", response_model=ApiResponse[Note])
async def get_note(note=Depends(get_note_or_404)):
    """获取便签详情"""
    return ApiResponse(data=Note(**model_to_dict(note)))


@router.post("/", response_model=ApiResponse[Note])
async def create_note(
    note: NoteCreate,
    store=Depends(get_note_store),
):
    """新建便签"""
    created = await run_sync(store.add_note, content=note.content, color=note.color)
    return ApiResponse(
        data=Note(**model_to_dict(created)),
        message=store.storage_warning or "便签创建成功",
    )


@router.patch("/{note_id}", response_model=ApiResponse[Optional[Note]])
async def update_note(
    update: NoteUpdate,
    note_id: str = Path(..., description="便签 ID"),
    store=Depends(get_note_store),
):
    """修改便签（只修改请求中出现的字段）"""
    patch = update.model_dump(exclude_unset=True)
    updated = await run_sync(store.update, note_id, **patch)

    if updated is None:
        return ApiResponse(data=None, message=f"便签不存在，已忽略: {note_id}")

    return ApiResponse(
        data=Note(**model_to_dict(updated)),
        message=store.storage_warning,
    )


@router.delete("/{note_id}", response_model=ApiResponse[bool])
async def delete_note(
    note_id: str = Path(..., description="便签 ID"),
    store=Depends(get_note_store),
):
    """删除便签，data 表示是否实际删除"""
    deleted = await run_sync(store.delete, note_id)
    return ApiResponse(
        data=deleted,
        message=store.storage_warning or ("便签已删除" if deleted else f"便签不存在，已忽略: {note_id}"),
    )
