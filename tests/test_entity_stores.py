import json
from datetime import date

import pytest

from domains.core import ValidationError
from domains.note_hub import DEFAULT_NOTE_COLOR, NoteStore
from domains.reminder_hub import ReminderStore
from domains.workspace_core.storage import LoadSource, MemoryBackend, PersistenceGateway


def stored_ids(gateway, collection):
    return [record["id"] for record in gateway.read(collection)]


# ==================== 加载 / 播种 ====================

def test_first_run_seeds_and_persists(gateway):
    store = NoteStore(gateway)
    assert [note.id for note in store.list()] == ["1", "2"]
    assert store.load_source == LoadSource.ABSENT
    assert stored_ids(gateway, "notes") == ["1", "2"]


def test_stored_collection_is_loaded(gateway):
    first = NoteStore(gateway)
    created = first.add_note("Pick fonts")

    second = NoteStore(gateway)
    assert second.load_source == LoadSource.STORED
    assert second.list() == first.list()
    assert second.list()[0] == created


@pytest.mark.parametrize(
    "items",
    [
        [{"id": "1", "content": 5, "color": "x", "created_at": "now"}],
        [{"id": "1", "content": "x"}],
        [{"id": "1", "content": "a", "color": "x", "created_at": "now"},
         {"id": "1", "content": "b", "color": "x", "created_at": "now"}],
    ],
)
def test_invalid_records_fall_back_to_seed(items):
    payload = json.dumps({"schema_version": 1, "items": items})
    gateway = PersistenceGateway(MemoryBackend({"designers_os.notes": payload}))

    store = NoteStore(gateway)
    assert store.load_source == LoadSource.MALFORMED
    assert [note.id for note in store.list()] == ["1", "2"]
    assert stored_ids(gateway, "notes") == ["1", "2"]


def test_legacy_records_are_migrated_on_next_write():
    legacy = json.dumps([{"id": "n1", "content": "old", "color": "bg-x", "created_at": "yesterday"}])
    backend = MemoryBackend({"designers_os.notes": legacy})
    store = NoteStore(PersistenceGateway(backend))
    assert store.load_source == LoadSource.STORED

    store.edit_content("n1", "new")
    assert json.loads(backend.get("designers_os.notes"))["schema_version"] == 1


def test_unreadable_storage_uses_seed_and_warns(backend, gateway):
    backend.fail_reads = True
    backend.fail_writes = True
    store = NoteStore(gateway)
    assert store.load_source == LoadSource.UNAVAILABLE
    assert len(store) == 2
    assert store.storage_warning


# ==================== 修改 ====================

def test_create_prepends_and_persists(gateway):
    store = NoteStore(gateway)
    note = store.add_note("Sketch logo")

    assert store.list()[0] == note
    assert note.color == DEFAULT_NOTE_COLOR
    assert stored_ids(gateway, "notes") == [note.id, "1", "2"]


def test_update_keeps_order_and_immutable_fields(gateway):
    store = NoteStore(gateway)
    before = store.get("2")

    updated = store.update("2", content="Moved to 4PM", id="hijack", created_at="never")
    assert updated.id == "2"
    assert updated.created_at == before.created_at
    assert [note.id for note in store.list()] == ["1", "2"]
    assert gateway.read("notes")[1]["content"] == "Moved to 4PM"


def test_null_color_falls_back_to_default(gateway):
    store = NoteStore(gateway)
    updated = store.update("1", color=None, content=None)
    assert updated.color == DEFAULT_NOTE_COLOR
    assert updated.content == ""


def test_update_after_delete_is_ignored(backend, gateway):
    store = NoteStore(gateway)
    assert store.delete("1") is True
    writes = backend.writes

    assert store.update("1", content="late edit") is None
    assert store.delete("1") is False
    assert backend.writes == writes
    assert [note.id for note in store.list()] == ["2"]


def test_write_failure_keeps_change_in_memory(backend, gateway):
    store = NoteStore(gateway)
    backend.fail_writes = True

    note = store.add_note("Offline idea")
    assert store.list()[0] == note
    assert store.storage_warning is not None
    assert stored_ids(gateway, "notes") == ["1", "2"]

    backend.fail_writes = False
    store.edit_content(note.id, "Back online")
    assert store.storage_warning is None
    assert stored_ids(gateway, "notes") == [note.id, "1", "2"]


def test_generated_ids_never_collide(gateway):
    ids = iter(["1", "2", "fresh"])
    store = NoteStore(gateway, id_factory=lambda: next(ids))
    assert store.add_note("x").id == "fresh"


def test_search_is_case_insensitive(gateway):
    store = NoteStore(gateway)
    assert [note.id for note in store.search("client x")] == ["2"]
    assert len(store.search("  ")) == 2


# ==================== 提醒事项 ====================

def test_reminder_seed(gateway):
    store = ReminderStore(gateway)
    assert [(r.text, r.completed) for r in store.list()] == [
        ("Update project status", False),
        ("Review team feedback", True),
    ]


def test_toggle_flips_completion(gateway):
    store = ReminderStore(gateway)
    assert store.toggle("1").completed is True
    assert store.toggle("1").completed is False
    assert store.toggle("missing") is None


def test_completed_must_be_boolean(gateway):
    store = ReminderStore(gateway)
    for raw in (None, "false", 0):
        with pytest.raises(ValidationError):
            store.update("2", completed=raw)
    assert store.get("2").completed is True
    assert store.update("2", completed=False).completed is False


def test_due_reminders(gateway):
    store = ReminderStore(gateway)
    overdue = store.add_reminder("Send invoice", due_date=date(2024, 1, 10))
    store.add_reminder("Later", due_date=date(2024, 3, 1))
    done = store.add_reminder("Done already", due_date=date(2024, 1, 1))
    store.toggle(done.id)

    assert [r.id for r in store.list_due(date(2024, 2, 1))] == [overdue.id]


def test_due_date_accepts_iso_strings(gateway):
    store = ReminderStore(gateway)
    reminder = store.update("1", due_date="2024-05-01")
    assert reminder.due_date == date(2024, 5, 1)
    assert gateway.read("reminders")[0]["due_date"] == "2024-05-01"

    with pytest.raises(ValidationError):
        store.update("1", due_date="next tuesday")


def test_clear_completed(gateway):
    store = ReminderStore(gateway)
    assert store.clear_completed() == 1
    assert [r.id for r in store.list()] == ["1"]
    assert store.clear_completed() == 0
