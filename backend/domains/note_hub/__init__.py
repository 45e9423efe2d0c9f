"""
便签领域模块

快捷工具面板中的 "Notes" 工具：
- 新建的便签插入到最前，编辑不改变顺序
- 集合整体持久化，无有效数据时使用种子便签
"""

from .core.models import DEFAULT_NOTE_COLOR, Note
from .core.store import NoteStore, create_note_store

__all__ = [
    'Note',
    'DEFAULT_NOTE_COLOR',
    'NoteStore',
    'create_note_store',
]
