"""
核心层：数据模型和存储
"""

from .models import DEFAULT_NOTE_COLOR, Note, display_timestamp
from .store import NoteStore, create_note_store

__all__ = ['Note', 'DEFAULT_NOTE_COLOR', 'display_timestamp', 'NoteStore', 'create_note_store']
