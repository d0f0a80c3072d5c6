import datetime
import importlib
from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from routine_tracker.core.db import get_db

MORNING_PAYLOAD = {
    "title": "Morning",
    "tasks": [
        {"title": "Exercise", "time": "07:30"},
        {"title": "Wake up", "time": "6:00 AM"},
        {"title": "Tea", "time": "06:45"},
    ],
}


@pytest.fixture()
def application_module(monkeypatch):
    loaded = importlib.import_module("routine_tracker.application")
    monkeypatch.setattr(loaded, "_init_db", lambda: None)
    return loaded


@contextmanager
def _client_with_db(app, db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def client(application_module, db, clock, notifier):
    app = application_module.create_app(clock=clock, notifier=notifier)
    with _client_with_db(app, db) as test_client:
        yield test_client


def _create_morning(client):
    response = client.post("/api/routines", json=MORNING_PAYLOAD)
    assert response.status_code == 200
    return response.json()["routine"]


def test_create_routine_starts_pending(client):
    routine = _create_morning(client)

    assert routine["name"] == "Morning"
    assert routine["status"] == "pending"
    assert routine["start_date"] == "2026-10-20"
    assert [task["title"] for task in routine["tasks"]] == ["Wake up", "Tea", "Exercise"]
    assert [task["time"] for task in routine["tasks"]] == ["06:00", "06:45", "07:30"]

    active = client.get("/api/routines/active").json()
    assert active["routine"]["id"] == routine["id"]
    assert active["visible_dates"][0] == "2026-10-20"
    assert active["visible_dates"][-1] == "2026-11-02"


def test_create_routine_validation_error(client):
    response = client.post("/api/routines", json={"title": "  ", "tasks": MORNING_PAYLOAD["tasks"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a routine title"

    response = client.post("/api/routines", json={"title": "Morning", "tasks": "nope"})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "Morning", "tasks": ["abc"]},
        {"title": "Morning", "tasks": [5]},
        {"title": "Morning", "tasks": [{"title": 5, "time": "06:00"}]},
        {"title": "Morning", "tasks": [{"title": "Wake", "time": 600}]},
        {"title": 42, "tasks": [{"title": "Wake", "time": "06:00"}]},
    ],
)
def test_create_routine_rejects_malformed_tasks(client, payload):
    response = client.post("/api/routines", json=payload)

    assert response.status_code == 400
    assert client.get("/api/routines").json() == {"routines": []}


def test_preset_rejects_malformed_tasks(client):
    response = client.post("/api/routines/preset", json={"name": "Tim Cook", "tasks": [["3:45 AM"]]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid task entry"


def test_day_lifecycle_over_http(client, clock):
    routine = _create_morning(client)
    first_task_id = routine["tasks"][0]["id"]

    # Pending routines are read-only.
    response = client.post(f"/api/tasks/{first_task_id}/toggle")
    assert response.status_code == 409

    clock.advance(days=1)
    assert client.post("/api/lifecycle/midnight-check").json() == {"status": "ran", "today": "2026-10-20"}
    assert client.post("/api/lifecycle/midnight-check").json()["status"] == "skipped"

    response = client.post(f"/api/tasks/{first_task_id}/toggle")
    assert response.status_code == 200
    assert response.json() == {"task_id": first_task_id, "date": "2026-10-20", "completed": True}

    today_view = client.get("/api/day/2026-10-20").json()
    assert today_view["is_today"] is True
    assert today_view["status"] == "running"
    assert [task["state"] for task in today_view["tasks"]] == ["completed", "untouched", "untouched"]
    assert all(task["can_toggle"] for task in today_view["tasks"])

    future_view = client.get("/api/day/2026-10-21").json()
    assert [task["state"] for task in future_view["tasks"]] == ["untouched"] * 3
    assert not any(task["can_toggle"] for task in future_view["tasks"])

    clock.advance(days=1)
    assert client.post("/api/lifecycle/midnight-check").json()["status"] == "ran"

    past_view = client.get("/api/day/2026-10-20").json()
    assert [task["state"] for task in past_view["tasks"]] == ["completed", "incomplete", "incomplete"]
    assert not any(task["can_toggle"] for task in past_view["tasks"])

    week = client.get(f"/api/routines/{routine['id']}/week").json()
    assert week["date_range"] == "Oct 18-24"
    assert week["data_points"] == [0, 0, 1, 0, 0, 0, 0]
    assert week["can_navigate_back"] is False
    assert week["can_navigate_forward"] is False


def test_deactivate_and_delete(client, clock, notifier):
    routine = _create_morning(client)
    clock.advance(days=1)

    response = client.post(f"/api/routines/{routine['id']}/deactivate")
    assert response.status_code == 200
    assert response.json()["routine"]["status"] == "retired"
    assert notifier.pending == {}
    assert client.get("/api/routines/active").json() == {"routine": None, "visible_dates": []}

    response = client.delete(f"/api/routines/{routine['id']}")
    assert response.json() == {"status": "deleted", "id": routine["id"]}
    assert client.get("/api/routines").json() == {"routines": []}


def test_restart_returns_to_pending(client, clock):
    first = _create_morning(client)
    second = client.post(
        "/api/routines/preset",
        json={"name": "Tim Cook", "tasks": [{"time": "3:45 AM", "title": "Wake Up"}]},
    ).json()["routine"]
    clock.advance(days=2)

    response = client.post(f"/api/routines/{first['id']}/restart")
    assert response.status_code == 200
    body = response.json()["routine"]
    assert body["status"] == "pending"
    assert body["start_date"] == "2026-10-22"

    routines = client.get("/api/routines").json()["routines"]
    assert [item["id"] for item in routines] == [first["id"], second["id"]]
    assert routines[1]["status"] == "retired"


def test_not_found_and_bad_input(client):
    assert client.get("/api/day/20-10-2026").status_code == 400
    assert client.post("/api/tasks/999/toggle").status_code == 404
    assert client.post("/api/routines/999/restart").status_code == 404
    assert client.delete("/api/routines/999").status_code == 404
    assert client.get("/api/routines/999/week").status_code == 404


def test_notification_settings_and_reset(client, notifier):
    assert client.get("/api/settings/notifications").json() == {"enabled": True}
    _create_morning(client)
    assert len(notifier.pending) == 1

    assert client.post("/api/settings/notifications", json={"enabled": "yes"}).status_code == 400

    response = client.post("/api/reset")
    assert response.json() == {"status": "reset"}
    assert notifier.pending == {}
    assert client.get("/api/routines").json() == {"routines": []}
    assert client.get("/api/settings/notifications").json() == {"enabled": False}
    assert client.get("/api/day/2026-10-19").json() == {
        "date": datetime.date(2026, 10, 19).isoformat(),
        "routine_id": None,
        "tasks": [],
    }
