from __future__ import annotations

import pytest

from src.checkin_tracker.checkin_tracker.main import create_app


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app()


@pytest.fixture
def client(app):
    client = app.test_client()
    client.post("/login", data={"owner": " Alice "})
    return client


def container_of(app):
    return app.extensions["checkin_container"]


def test_health(app):
    assert app.test_client().get("/health").get_json() == {"status": "ok"}


def test_api_requires_login(app):
    resp = app.test_client().get("/api/students")
    assert resp.status_code == 401


def test_login_rejects_blank_owner(app):
    resp = app.test_client().post("/login", json={"owner": "   "})
    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Owner name is required"}


def test_login_normalizes_owner(app):
    resp = app.test_client().post("/login", json={"owner": " Alice "})
    assert resp.get_json() == {"success": True, "owner": "alice"}


def test_empty_roster_shows_placeholder(client):
    body = client.get("/api/students").get_json()
    assert body == {"students": ["Student 1"], "degraded": False, "error": None}


def test_add_student_then_list(client):
    client.post("/api/students", data={"name": "  Sam "})
    client.post("/api/students", json={"name": ""})

    assert client.get("/api/students").get_json()["students"] == ["Sam"]


def test_checkins_and_week_snapshot(client):
    for _ in range(5):
        resp = client.post("/api/students/Sam/checkins", data={"note": "visit"})
    assert resp.get_json()["count"] == 4

    week = client.get("/api/students/Sam/week").get_json()
    assert week["count"] == 4
    assert week["color"] == "green"
    assert week["annotations"] == ["visit"] * 5


def test_clear_week(client):
    client.post("/api/students/Sam/checkins")
    client.post("/api/students/Sam/clear")

    assert client.get("/api/students/Sam/week").get_json()["count"] == 0


def test_end_week_saves_history_and_resets(client):
    client.post("/api/students/Sam/checkins")
    client.post("/api/students/Sam/checkins")

    body = client.post("/api/students/Sam/end-week").get_json()
    assert body["success"] is True
    assert body["count"] == 2

    history = client.get("/api/students/Sam/history").get_json()
    assert [h["count"] for h in history["history"]] == [2]
    assert history["history"][0]["week_ending"] == body["week_ending"]
    assert client.get("/api/students/Sam/week").get_json()["count"] == 0


def test_end_week_store_failure_keeps_count(app, client):
    container_of(app).ledger_repo.fail_appends = True
    client.post("/api/students/Sam/checkins")

    resp = client.post("/api/students/Sam/end-week")

    assert resp.status_code == 503
    assert resp.get_json()["count"] == 1
    assert client.get("/api/students/Sam/week").get_json()["count"] == 1


def test_history_degraded_banner(app, client):
    container_of(app).ledger_repo.fail_reads = True

    body = client.get("/api/students/Sam/history").get_json()

    assert body["history"] == []
    assert body["degraded"] is True


def test_history_csv_export(client):
    client.post("/api/students/Sam/checkins")
    client.post("/api/students/Sam/end-week")

    resp = client.get("/api/students/Sam/history.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "Week Ending (Friday),Check-Ins,Notes"
    assert lines[1].split(",")[1] == "1"


def test_logout_clears_owner(client):
    client.post("/logout")
    assert client.get("/api/students").status_code == 401
