"""
便签存储层

继承 EntityStore，集合整体持久化到存储键 "<namespace>.notes"。
"""

import logging
from typing import Any, Dict, List, Optional

from domains.workspace_core.base import EntityStore
from domains.workspace_core.storage import PersistenceGateway

from .models import DEFAULT_NOTE_COLOR, Note

logger = logging.getLogger(__name__)


class NoteStore(EntityStore[Note]):
    """便签存储层"""

    collection = "notes"

    # id 和 created_at 创建后不可变
    mutable_fields = {'content', 'color'}

    def _record_to_entity(self, record: Dict[str, Any]) -> Note:
        return Note.from_dict(record)

    def _new_entity(self, entity_id: str, **fields) -> Note:
        return Note(
            id=entity_id,
            content=fields.get('content', ""),
            color=fields.get('color', DEFAULT_NOTE_COLOR),
        )

    def _coerce_field(self, name: str, value: Any) -> Any:
        if value is None:
            # 颜色不能为空，回到默认颜色；内容为 None 视为清空
            return DEFAULT_NOTE_COLOR if name == 'color' else ""
        return str(value)

    def _seed(self) -> List[Note]:
        return [
            Note(
                id='1',
                content='Apple HIG dark mode update complete. Check contrast ratios.',
                color='bg-yellow-200/20',
                created_at='2h ago',
            ),
            Note(
                id='2',
                content='Meeting with Client X at 3PM tomorrow.',
                color='bg-blue-200/20',
                created_at='5h ago',
            ),
        ]

    # ==================== 便捷方法 ====================

    def add_note(self, content: str = "", color: str = DEFAULT_NOTE_COLOR) -> Note:
        """新建便签（插入到最前）"""
        return self.create(content=content, color=color)

    def edit_content(self, note_id: str, content: str) -> Optional[Note]:
        """修改便签内容，ID 不存在时返回 None"""
        return self.update(note_id, content=content)

    def search(self, keyword: str) -> List[Note]:
        """按内容关键词过滤（不区分大小写），保持集合顺序"""
        keyword = keyword.strip().lower()
        if not keyword:
            return list(self.list())
        return [note for note in self.list() if keyword in note.content.lower()]


def create_note_store(gateway: PersistenceGateway) -> NoteStore:
    """创建便签存储（首次构造时完成加载或播种）"""
    store = NoteStore(gateway)
    logger.info(f"note_store_ready: count={len(store)}, source={store.load_source}")
    return store
