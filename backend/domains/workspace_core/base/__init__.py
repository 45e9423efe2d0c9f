from .records import require_field
from .store import EntityStore, new_entity_id

__all__ = ["EntityStore", "new_entity_id", "require_field"]
