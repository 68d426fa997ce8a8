"""
Tests for the HTTP surface.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from repairdesk.api.v1.surfaces import FORM
from repairdesk.application.use_cases.guarded_screen import GuardedScreen
from repairdesk.domain.entities.records import BrandRecord, ClientRecord, ModelRecord
from repairdesk.infrastructure.navigation.memory_history import InMemoryHistoryHost
from repairdesk.infrastructure.notifications.log_notifier import LogNotifier
from repairdesk.infrastructure.records.memory_records import MemoryRecordStore
from repairdesk.infrastructure.store.memory_store import MemoryWorkspaceStore
from repairdesk.main import app
from repairdesk.wiring import dependencies

ATTENDANT = {"X-User-Id": "u1", "X-User-Role": "atendente", "X-Store-Id": "s1"}
ADMIN = {"X-User-Id": "u0", "X-User-Role": "admin"}

DRAFT = {
    "client_id": "c1",
    "brand": "b1",
    "model": "m1",
    "device_color": "AZUL",
    "status": "in_progress",
    "terms": "standard",
    "accessories": "Nenhum",
    "problem_description": "Não carrega",
    "possible_service": "Troca do conector",
    "physical_condition": "Bom",
    "possible_repair": "Sim",
    "service_value": 180,
    "entry_value": 0,
    "estimated_delivery": "2024-03-20",
}


@pytest.fixture
def client(monkeypatch):
    records = MemoryRecordStore(
        clients=[ClientRecord(id="c1", name="ANA SOUZA", phone="11988880001")],
        brands=[BrandRecord(id="b1", name="MOTOROLA")],
        models=[ModelRecord(id="m1", name="MOTO G84", brand_id="b1")],
    )
    monkeypatch.setattr(dependencies, "_record_store", records)
    monkeypatch.setattr(dependencies, "_workspace_store", MemoryWorkspaceStore())
    monkeypatch.setattr(dependencies, "_notifier", LogNotifier())
    return TestClient(app)


def _filled_checklist(client: TestClient, fill: bool = True) -> str:
    checklist = client.post("/api/v1/checklists").json()
    checklist_id = checklist["id"]
    client.post(f"/api/v1/checklists/{checklist_id}/category", json={"category": "android"})
    if fill:
        items = client.get(f"/api/v1/checklists/{checklist_id}").json()["items"]
        for item in items:
            client.post(f"/api/v1/checklists/{checklist_id}/item", json={"item_id": item["id"], "status": "working"})
    client.post(f"/api/v1/checklists/{checklist_id}/complete")
    return checklist_id


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_picker_two_phase_selection(client):
    created = client.post(
        "/api/v1/pickers",
        json={"name": "client", "options": [{"id": "c1", "label": "ANA"}, {"id": "c2", "label": "BRUNO"}]},
    )
    assert created.status_code == 201
    picker_id = created.json()["id"]

    client.post(f"/api/v1/pickers/{picker_id}/open")
    armed = client.post(f"/api/v1/pickers/{picker_id}/activate", json={"item_id": "c2"}).json()
    selected = client.post(f"/api/v1/pickers/{picker_id}/activate", json={"item_id": "c2"}).json()

    assert armed["action"] == "armed"
    assert armed["picker"]["armed_id"] == "c2"
    assert selected["selected"] == {"value": "c2", "is_custom": False}
    assert selected["picker"]["is_open"] is False


def test_free_text_picker_submits_literal(client):
    picker_id = client.post(
        "/api/v1/pickers",
        json={"name": "brand", "mode": "free_text", "options": [{"id": "b1", "label": "MOTOROLA"}]},
    ).json()["id"]
    client.post(f"/api/v1/pickers/{picker_id}/open")
    client.post(f"/api/v1/pickers/{picker_id}/type", json={"text": "Nokia"})

    result = client.post(f"/api/v1/pickers/{picker_id}/submit").json()

    assert result["selected"] == {"value": "Nokia", "is_custom": True}


def test_rejected_transition_is_conflict(client):
    picker_id = client.post("/api/v1/pickers", json={"options": [{"id": "a", "label": "A"}]}).json()["id"]

    response = client.post(f"/api/v1/pickers/{picker_id}/activate", json={"item_id": "a"})

    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "picker_closed"


def test_unknown_surface_is_not_found(client):
    assert client.get("/api/v1/pickers/missing").status_code == 404
    assert client.post("/api/v1/forms/missing/back").status_code == 404


def test_browser_back_on_dirty_form_needs_confirmation(client):
    """Test that back is captured on a dirty form and a confirmed exit redirects."""
    created = client.post("/api/v1/forms", json={"name": "edit-client", "original": {"name": "ANA"}, "redirect_to": "/clients"})
    form = created.json()
    assert form["directives"] == [{"op": "push_guard"}]
    form_id = form["id"]

    changed = client.post(f"/api/v1/forms/{form_id}/change", json={"name": "name", "value": "ANA S."}).json()
    assert changed["form"]["dirty"] is True

    after_back = client.post(f"/api/v1/forms/{form_id}/back").json()
    assert after_back["state"] == "confirming"
    assert after_back["current_path"] == "/edit-client"

    closed = client.post(f"/api/v1/forms/{form_id}/confirm-close").json()
    assert closed["form"]["state"] == "closed"
    assert closed["form"]["current_path"] == "/clients"
    assert closed["form"]["directives"] == [{"op": "drop_guard"}, {"op": "navigate", "path": "/clients"}]


def test_dismiss_ignored_on_dirty_form(client):
    form_id = client.post("/api/v1/forms", json={"original": {"phone": "1"}}).json()["id"]
    client.post(f"/api/v1/forms/{form_id}/change", json={"name": "phone", "value": "2"})

    result = client.post(f"/api/v1/forms/{form_id}/dismiss")

    assert result.status_code == 200
    assert result.json()["action"] == "ignored"
    assert result.json()["form"]["state"] == "idle"


def test_commit_client_then_close_without_prompt(client):
    form_id = client.post(
        "/api/v1/forms",
        json={"original": {"name": "ANA SOUZA", "phone": "11988880001", "address": None}},
    ).json()["id"]
    client.post(f"/api/v1/forms/{form_id}/change", json={"name": "address", "value": "rua b, 5"})

    committed = client.post(f"/api/v1/forms/{form_id}/commit-client", json={"client_id": "c1"})
    assert committed.status_code == 200
    assert committed.json()["form"]["dirty"] is False

    closed = client.post(f"/api/v1/forms/{form_id}/request-close").json()
    assert closed["action"] == "closed"


def test_checklist_rejects_unknown_status(client):
    checklist_id = client.post("/api/v1/checklists").json()["id"]
    client.post(f"/api/v1/checklists/{checklist_id}/category", json={"category": "ios"})

    response = client.post(f"/api/v1/checklists/{checklist_id}/item", json={"item_id": "face_id", "status": "unset"})

    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "unknown_status"


def test_order_blocked_by_incomplete_checklist(client):
    form_id = client.post("/api/v1/forms", json={"original": DRAFT}).json()["id"]
    checklist_id = _filled_checklist(client, fill=False)

    response = client.post("/api/v1/orders", json={"form_id": form_id, "checklist_id": checklist_id}, headers=ATTENDANT)

    assert response.status_code == 422
    assert response.json()["detail"]["action"] == "checklist_incomplete"


def test_order_created_and_listed(client):
    form_id = client.post("/api/v1/forms", json={"original": DRAFT}).json()["id"]
    checklist_id = _filled_checklist(client)

    created = client.post("/api/v1/orders", json={"form_id": form_id, "checklist_id": checklist_id}, headers=ATTENDANT)

    assert created.status_code == 201
    order = created.json()["order"]
    assert order["client_name"] == "ANA SOUZA"
    assert order["store_id"] == "s1"

    listed = client.get("/api/v1/orders", headers=ADMIN).json()
    assert [view["order"]["id"] for view in listed] == [order["id"]]
    assert listed[0]["display"]["is_overdue"] in (True, False)

    other_store = client.get("/api/v1/orders", headers={**ATTENDANT, "X-Store-Id": "s2"}).json()
    assert other_store == []


def test_reading_a_form_keeps_pending_directives(client):
    """Test that GET leaves history directives queued until the next action drains them."""
    screen = GuardedScreen(InMemoryHistoryHost("/edit-client"), {"name": "ANA"}, redirect_to="/clients")
    screen.open()
    form_id = dependencies._workspace_store.add(FORM, screen)

    first = client.get(f"/api/v1/forms/{form_id}").json()
    second = client.get(f"/api/v1/forms/{form_id}").json()
    assert first["directives"] == [{"op": "push_guard"}]
    assert second["directives"] == [{"op": "push_guard"}]

    changed = client.post(f"/api/v1/forms/{form_id}/change", json={"name": "name", "value": "BIA"}).json()
    assert changed["form"]["directives"] == [{"op": "push_guard"}]
    assert client.get(f"/api/v1/forms/{form_id}").json()["directives"] == []


def test_closed_form_is_released(client):
    form_id = client.post("/api/v1/forms", json={"original": {"name": "ANA"}}).json()["id"]

    closed = client.post(f"/api/v1/forms/{form_id}/request-close").json()

    assert closed["form"]["state"] == "closed"
    assert client.get(f"/api/v1/forms/{form_id}").status_code == 404
    assert client.post(f"/api/v1/forms/{form_id}/change", json={"name": "name", "value": "X"}).status_code == 404


def test_discarded_picker_and_checklist_are_gone(client):
    picker_id = client.post("/api/v1/pickers", json={"options": [{"id": "a", "label": "A"}]}).json()["id"]
    checklist_id = _filled_checklist(client)

    assert client.delete(f"/api/v1/pickers/{picker_id}").status_code == 204
    assert client.delete(f"/api/v1/checklists/{checklist_id}").status_code == 204

    assert client.get(f"/api/v1/pickers/{picker_id}").status_code == 404
    assert client.get(f"/api/v1/checklists/{checklist_id}").status_code == 404
    assert client.delete(f"/api/v1/pickers/{picker_id}").status_code == 404


def test_checklist_backs_a_single_order(client):
    """Test that a completed inspection is consumed by the order it was saved with."""
    form_id = client.post("/api/v1/forms", json={"original": DRAFT}).json()["id"]
    checklist_id = _filled_checklist(client)
    payload = {"form_id": form_id, "checklist_id": checklist_id}

    assert client.post("/api/v1/orders", json=payload, headers=ATTENDANT).status_code == 201
    again = client.post("/api/v1/orders", json=payload, headers=ATTENDANT)

    assert again.status_code == 422
    assert again.json()["detail"]["action"] == "checklist_required"
    assert client.get(f"/api/v1/checklists/{checklist_id}").status_code == 404


def test_record_failure_is_bad_gateway(client):
    dependencies._record_store.failing.add("list_service_orders")

    assert client.get("/api/v1/orders", headers=ADMIN).status_code == 502


def test_resolve_status(client):
    response = client.post(
        "/api/v1/orders/resolve-status",
        json={"status": "waiting_part", "estimated_delivery": "2024-03-10", "today": "2024-03-15"},
    )

    assert response.json() == {"status": "delayed", "label": "Em Atraso", "is_overdue": True}


def test_resolve_status_rejects_bad_date(client):
    response = client.post("/api/v1/orders/resolve-status", json={"status": "quote", "estimated_delivery": "soon"})

    assert response.status_code == 422


def test_record_backed_brand_picker(client):
    created = client.post("/api/v1/pickers/records", json={"source": "brand"})

    assert created.status_code == 201
    assert created.json()["mode"] == "free_text"
    assert [o["label"] for o in created.json()["visible_options"]] == ["MOTOROLA"]


def test_record_picker_backend_failure(client):
    dependencies._record_store.failing.add("list_clients")

    response = client.post("/api/v1/pickers/records", json={"source": "client"}, headers=ATTENDANT)

    assert response.status_code == 502
