from decimal import Decimal

API = "/api/v1"


def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ==================== 面板 ====================

def test_panel_event_flow(api_client):
    assert api_client.get(f"{API}/panel/").json()["data"]["expanded_tool"] is None

    api_client.post(f"{API}/panel/events", json={"event": "focus_in", "tool": "notes"})
    state = api_client.post(f"{API}/panel/events", json={"event": "hover_enter", "tool": "invoice"}).json()["data"]
    assert state["expanded_tool"] == "notes"
    assert state["hovered_tool"] == "invoice"

    state = api_client.post(f"{API}/panel/reset").json()["data"]
    assert state["expanded_tool"] is None


def test_panel_rejects_unknown_event(api_client):
    response = api_client.post(f"{API}/panel/events", json={"event": "double_click", "tool": "notes"})
    assert response.status_code == 422


# ==================== 便签 ====================

def test_notes_crud(api_client):
    notes = api_client.get(f"{API}/notes/").json()["data"]
    assert [n["id"] for n in notes] == ["1", "2"]

    created = api_client.post(f"{API}/notes/", json={"content": "Moodboard"}).json()["data"]
    assert created["color"] == "bg-primary/10"
    assert api_client.get(f"{API}/notes/").json()["data"][0]["id"] == created["id"]

    updated = api_client.patch(f"{API}/notes/{created['id']}", json={"content": "Moodboard v2"}).json()["data"]
    assert updated["content"] == "Moodboard v2"
    assert updated["created_at"] == created["created_at"]

    assert api_client.delete(f"{API}/notes/{created['id']}").json()["data"] is True
    missing = api_client.get(f"{API}/notes/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


def test_stale_note_edits_succeed_as_noop(api_client):
    api_client.delete(f"{API}/notes/1")

    response = api_client.patch(f"{API}/notes/1", json={"content": "late"})
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["data"] is None

    response = api_client.delete(f"{API}/notes/1")
    assert response.status_code == 200
    assert response.json()["data"] is False


def test_note_search(api_client):
    notes = api_client.get(f"{API}/notes/", params={"search": "contrast"}).json()["data"]
    assert [n["id"] for n in notes] == ["1"]


def test_note_patch_with_null_color_keeps_a_color(api_client):
    updated = api_client.patch(f"{API}/notes/1", json={"color": None}).json()["data"]
    assert updated["color"] == "bg-primary/10"


# ==================== 提醒 ====================

def test_reminder_toggle_and_due(api_client):
    created = api_client.post(f"{API}/reminders/", json={"text": "Ship files", "due_date": "2024-01-05"}).json()["data"]
    assert created["completed"] is False

    due = api_client.get(f"{API}/reminders/due", params={"on": "2024-01-31"}).json()["data"]
    assert [r["id"] for r in due] == [created["id"]]

    toggled = api_client.post(f"{API}/reminders/{created['id']}/toggle").json()["data"]
    assert toggled["completed"] is True
    assert api_client.get(f"{API}/reminders/due", params={"on": "2024-01-31"}).json()["data"] == []

    assert api_client.post(f"{API}/reminders/missing/toggle").json()["data"] is None


def test_reminder_filters_and_cleanup(api_client):
    done = api_client.get(f"{API}/reminders/", params={"completed": True}).json()["data"]
    assert [r["text"] for r in done] == ["Review team feedback"]

    removed = api_client.post(f"{API}/reminders/clear-completed").json()["data"]["removed"]
    assert removed == 1
    assert len(api_client.get(f"{API}/reminders/").json()["data"]) == 1


def test_reminder_patch_ignores_null_for_required_fields(api_client):
    response = api_client.patch(f"{API}/reminders/2", json={"completed": None, "text": None})
    assert response.status_code == 200
    reminder = response.json()["data"]
    assert reminder["completed"] is True
    assert reminder["text"] == "Review team feedback"

    cleared = api_client.patch(f"{API}/reminders/2", json={"due_date": "2024-01-05"}).json()["data"]
    assert cleared["due_date"] == "2024-01-05"
    cleared = api_client.patch(f"{API}/reminders/2", json={"due_date": None}).json()["data"]
    assert cleared["due_date"] is None


# ==================== 发票 ====================

def test_invoice_editing(api_client):
    invoice = api_client.post(f"{API}/invoices/", json={"client_name": "Acme", "with_default_item": False}).json()["data"]
    invoice_id = invoice["id"]
    assert invoice["items"] == []
    assert invoice["invoice_number"].startswith("INV-")

    first = api_client.post(f"{API}/invoices/{invoice_id}/items", json={"description": "Logo", "quantity": 2, "rate": 100}).json()["data"]
    api_client.post(f"{API}/invoices/{invoice_id}/items", json={"description": "Guide", "quantity": 1, "rate": "150"})

    totals = api_client.get(f"{API}/invoices/{invoice_id}").json()["data"]["totals"]
    assert Decimal(str(totals["subtotal"])) == Decimal("350")
    assert Decimal(str(totals["tax"])) == Decimal("35")
    assert Decimal(str(totals["total"])) == Decimal("385")

    item = api_client.patch(
        f"{API}/invoices/{invoice_id}/items/{first['id']}",
        json={"field": "quantity", "value": "abc"},
    ).json()["data"]
    assert item["quantity"] == 0

    totals = api_client.get(f"{API}/invoices/{invoice_id}").json()["data"]["totals"]
    assert Decimal(str(totals["total"])) == Decimal("165")


def test_invoice_header_and_delete(api_client):
    invoice_id = api_client.post(f"{API}/invoices/", json={}).json()["data"]["id"]

    header = api_client.patch(f"{API}/invoices/{invoice_id}", json={"client_name": "Studio North", "invoice_date": "2024-06-01"}).json()["data"]
    assert header["client_name"] == "Studio North"
    assert header["invoice_date"] == "2024-06-01"
    assert header["items"][0]["description"] == "Design Consultation"

    assert api_client.delete(f"{API}/invoices/{invoice_id}").json()["data"] is True
    response = api_client.get(f"{API}/invoices/{invoice_id}")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_invoice_item_errors(api_client):
    invoice_id = api_client.post(f"{API}/invoices/", json={}).json()["data"]["id"]

    response = api_client.patch(f"{API}/invoices/{invoice_id}/items/gone", json={"field": "rate", "value": 5})
    assert response.status_code == 200
    assert response.json()["data"] is None

    item_id = api_client.get(f"{API}/invoices/{invoice_id}").json()["data"]["items"][0]["id"]
    response = api_client.patch(f"{API}/invoices/{invoice_id}/items/{item_id}", json={"field": "amount", "value": 5})
    assert response.status_code == 400

    response = api_client.patch(f"{API}/invoices/{invoice_id}/items/{item_id}", json={"field": "rate", "value": "1e1000000"})
    assert response.status_code == 200
    assert Decimal(str(response.json()["data"]["rate"])) == 0
    totals = api_client.get(f"{API}/invoices/{invoice_id}").json()["data"]["totals"]
    assert Decimal(str(totals["total"])) == 0


# ==================== AI 助手 ====================

def test_chat_forwards_context(api_client, fake_llm):
    response = api_client.post(
        f"{API}/assistant/chat",
        json={"message": "Summarise", "context": "3 notes", "userMemory": "Prefers bullets"},
    )
    assert response.status_code == 200
    assert response.json() == {"text": "Hello from the assistant", "functionCalls": []}

    messages = fake_llm.calls[0]
    assert "Prefers bullets" in messages[0]["content"]
    assert messages[-1]["content"].startswith("[CURRENT APP STATE CONTEXT]:\n3 notes")


def test_chat_function_callback(api_client, fake_llm):
    response = api_client.post(f"{API}/assistant/chat", json={"functionCalls": [{"name": "createTask"}]})
    assert response.json()["text"] == "Function processed"
    assert fake_llm.calls == []


def test_chat_without_api_key(api_client, fake_llm):
    fake_llm.is_configured = False
    response = api_client.post(f"{API}/assistant/chat", json={"message": "hi"})
    assert response.status_code == 500
    assert response.json()["error"] == "API key not configured"
    assert response.json()["details"]
