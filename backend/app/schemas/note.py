"""Note-related Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from domains.note_hub import DEFAULT_NOTE_COLOR


class NoteCreate(BaseModel):
    """Note create request."""

    content: str = Field("", description="便签内容")
    color: str = Field(DEFAULT_NOTE_COLOR, description="颜色标签（如 bg-yellow-200/20）")


class NoteUpdate(BaseModel):
    """Note update request.

    只修改请求中出现的字段；content 传 null 视为清空，color 传 null 恢复默认颜色。
    """

    content: Optional[str] = None
    color: Optional[str] = None


class Note(BaseModel):
    """Complete note model for API responses."""

    id: str = Field(..., description="便签 ID")
    content: str = Field("", description="便签内容")
    color: str = Field(DEFAULT_NOTE_COLOR, description="颜色标签")
    created_at: str = Field(..., description="展示用的创建时间")
