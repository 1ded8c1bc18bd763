"""Tests for ui/app.py: the JSON HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from ui.app import app, get_tracker
from zenith.inspiration import StaticInspirationProvider
from zenith.session import Tracker

DAY = "2026-02-11"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def tracker(workspace):
    return Tracker(root=workspace, provider=StaticInspirationProvider(("Breathe.",)))


@pytest.fixture
def client(tracker):
    app.dependency_overrides[get_tracker] = lambda: tracker
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": "true"}


def test_get_state(client):
    data = client.get("/api/state").json()
    assert data["state"]["profile"]["name"] == "Sam"
    assert "reminderDue" in data


def test_get_state_recomputes_stale_streak(client, tracker):
    tracker.state.profile.streak = 4
    profile = client.get("/api/state").json()["state"]["profile"]
    # Only 2026-02-10 is complete, so no streak reaches today.
    assert profile["streak"] == 0
    assert profile["totalPoints"] == 30


def test_get_record(client):
    resp = client.get(f"/api/records/{DAY}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["record"]["maxPointsPossible"] == 30
    assert data["stored"] is False
    assert data["dua"]["dua"]


def test_invalid_day(client):
    assert client.get("/api/records/not-a-date").status_code == 400


def test_toggle_and_stats(client, tracker):
    resp = client.post(f"/api/records/{DAY}/tasks/2/toggle")
    data = resp.json()
    assert data["saved"] is True
    assert data["record"]["totalPointsEarned"] == 20
    assert data["profile"]["totalPoints"] == 50
    stats = client.get("/api/stats").json()
    assert stats["totalEnergyHarvest"] == 50
    assert stats["totalDaysTracked"] == 2


def test_add_edit_delete_task(client):
    record = client.post(f"/api/records/{DAY}/tasks", json={"name": "Walk", "points": 5}).json()["record"]
    task_id = record["tasks"][-1]["id"]
    assert record["maxPointsPossible"] == 35

    record = client.patch(f"/api/records/{DAY}/tasks/{task_id}", json={"points": 15}).json()["record"]
    assert record["maxPointsPossible"] == 45

    record = client.delete(f"/api/records/{DAY}/tasks/{task_id}").json()["record"]
    assert record["maxPointsPossible"] == 30


def test_edit_negative_points_rejected(client):
    resp = client.patch(f"/api/records/{DAY}/tasks/1", json={"points": -1})
    assert resp.status_code == 400


def test_prayers(client):
    record = client.post(f"/api/records/{DAY}/prayers/isha").json()["record"]
    assert record["prayers"]["isha"] is True
    record = client.post(f"/api/records/{DAY}/prayers/isha", json={"value": True}).json()["record"]
    assert record["prayers"]["isha"] is True
    assert client.post(f"/api/records/{DAY}/prayers/lunch").status_code == 400


def test_set_quote(client):
    record = client.put(f"/api/records/{DAY}/quote", json={"text": "Mine"}).json()["record"]
    assert record["customQuote"] == "Mine"
    assert client.put(f"/api/records/{DAY}/quote", json={}).status_code == 400


def test_archive(client):
    data = client.get("/api/archive").json()
    assert data["count"] == 1
    assert data["records"][0]["milestone"] is True


def test_templates(client):
    resp = client.put("/api/templates", json=[{"id": "r", "name": "Run", "points": 12}])
    assert resp.json()["templates"] == [{"id": "r", "name": "Run", "points": 12}]
    bad = client.put("/api/templates", json=[{"id": "r", "name": "Run", "points": -2}])
    assert bad.status_code == 400


def test_profile_edits(client):
    assert client.put("/api/profile/name", json={"name": "Noor"}).json()["profile"]["name"] == "Noor"
    assert client.put("/api/profile/name", json={"name": ""}).status_code == 400
    avatar = client.post("/api/profile/avatar", content=PNG).json()["profile"]["avatar"]
    assert avatar.startswith("data:image/png;base64,")
    assert client.post("/api/profile/avatar", content=b"plain text").status_code == 400


def test_dark_mode(client):
    assert client.post("/api/dark_mode").json()["darkMode"] is True
    assert client.post("/api/dark_mode").json()["darkMode"] is False


def test_reset(client, tracker):
    assert client.post("/api/reset", json={}).status_code == 409
    assert tracker.state.records
    resp = client.post("/api/reset", json={"confirm": True})
    assert resp.json()["profile"]["totalPoints"] == 0
    assert tracker.state.records == {}


def test_auth_enforced(client, monkeypatch):
    monkeypatch.setenv("ZENITH_USERNAME", "u")
    monkeypatch.setenv("ZENITH_PASSWORD", "p")
    assert client.get("/api/stats").status_code == 401
    assert client.get("/api/stats", auth=("u", "wrong")).status_code == 401
    assert client.get("/api/stats", auth=("u", "p")).status_code == 200
