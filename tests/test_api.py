"""
End-to-end tests for the HTTP gateway
"""
import json

from fastapi.testclient import TestClient

from quizhub.core.errors import PersistenceFailure
from quizhub.core.persistence import SnapshotFile
from quizhub.main import create_app


def register(client, team_id="T1", name="Alpha", leader="Ana", college="North"):
    return client.post("/register-team", json={
        "teamId": team_id, "teamName": name, "leader": leader, "college": college,
    })


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_poll_idle(client):
    assert client.get("/question").json() == {"active": False}


def test_full_round_flow(client, clock):
    assert register(client).status_code == 200
    assert register(client, "T2", "Bravo", "Ben", "South").status_code == 200

    resp = client.post("/admin/start", json={
        "text": "Capital of Peru?", "schema": "one word", "duration": 60, "round": "round1",
    })
    assert resp.status_code == 200
    assert resp.json()["status"] == "started"

    view = client.get("/question").json()
    assert view == {
        "active": True, "text": "Capital of Peru?", "schema": "one word",
        "remainingSeconds": 60, "round": "round1",
    }

    clock.advance(10)
    first = client.post("/submit", json={"teamId": "T1", "answer": "Lima"}).json()
    clock.advance(5)
    second = client.post("/submit", json={"roll": "T2", "answer": "Cusco"}).json()
    assert first["status"] == "submitted"
    assert first["timeTakenSeconds"] == 10

    submissions = client.get("/submissions").json()
    assert [s["teamId"] for s in submissions] == ["T1", "T2"]
    assert submissions[0]["marks"] is None
    assert submissions[0]["roundLabel"] == "round1"

    assert client.post("/update-marks", json={"submissionId": second["id"], "marks": 90}).status_code == 200
    assert client.post("/update-marks", json={"submissionId": first["id"], "marks": "70"}).status_code == 200

    board = client.get("/leaderboard", params={"round": "round1"}).json()
    assert [e["teamName"] for e in board] == ["Bravo", "Alpha"]
    assert board[0]["leader"] == "Ben"
    assert board[0]["rank"] == 1

    shown = client.post("/admin/show-leaderboard").json()
    assert shown == {"status": "shown", "round": "round1"}
    view = client.get("/question").json()
    assert view["leaderboardVisible"] is True
    assert view["round"] == "round1"
    assert [e["teamId"] for e in view["standings"]] == ["T2", "T1"]

    assert client.post("/admin/hide-leaderboard").json() == {"status": "hidden"}
    assert client.get("/question").json()["active"] is True


def test_start_round_uses_default_duration(client):
    resp = client.post("/admin/start", json={"text": "Q"})
    assert resp.status_code == 200
    assert resp.json()["durationSeconds"] == 300
    assert resp.json()["round"] == "round1"


def test_start_round_rejects_non_positive_duration(client):
    resp = client.post("/admin/start", json={"text": "Q", "duration": 0})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    assert client.get("/question").json() == {"active": False}


def test_start_round_rejects_non_numeric_duration(client):
    resp = client.post("/admin/start", json={"text": "Q", "duration": "soon"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_submit_without_round(client):
    register(client)
    resp = client.post("/submit", json={"teamId": "T1", "answer": "x"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "NO_ACTIVE_ROUND"


def test_submit_after_window(client, clock):
    register(client)
    client.post("/admin/start", json={"text": "Q", "duration": 30})
    clock.advance(31)
    resp = client.post("/submit", json={"teamId": "T1", "answer": "x"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "WINDOW_CLOSED"
    assert client.get("/submissions").json() == []


def test_submit_unknown_team(client):
    client.post("/admin/start", json={"text": "Q", "duration": 30})
    resp = client.post("/submit", json={"teamId": "ghost", "answer": "x"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "UNKNOWN_TEAM"


def test_submit_missing_team_id(client):
    resp = client.post("/submit", json={"answer": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_register_duplicate(client):
    register(client)
    resp = register(client, name="Other")
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "DUPLICATE_TEAM"
    teams = client.get("/teams").json()
    assert len(teams) == 1
    assert teams[0]["teamName"] == "Alpha"


def test_register_accepts_outlaw_no(client):
    resp = client.post("/register-team", json={
        "outlawNo": "OL-7", "teamName": "Gamma", "leader": "Gia", "college": "East",
    })
    assert resp.json() == {"status": "registered", "teamId": "OL-7"}
    assert client.get("/teams").json()[0]["leaderName"] == "Gia"


def test_update_marks_unknown_id(client):
    resp = client.post("/update-marks", json={"submissionId": "missing", "marks": 10})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "SUBMISSION_NOT_FOUND"


def test_update_marks_non_numeric(client):
    register(client)
    client.post("/admin/start", json={"text": "Q", "duration": 30})
    sub = client.post("/submit", json={"teamId": "T1", "answer": "x"}).json()
    resp = client.post("/update-marks", json={"submissionId": sub["id"], "marks": "lots"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_clear_submissions(client):
    register(client)
    client.post("/admin/start", json={"text": "Q", "duration": 30})
    client.post("/submit", json={"teamId": "T1", "answer": "x"})
    resp = client.post("/admin/clear-submissions")
    assert resp.json() == {"status": "cleared", "removed": 1}
    assert client.get("/submissions").json() == []


def test_admin_status(client, clock):
    register(client)
    client.post("/admin/start", json={"text": "Q", "duration": 30, "round": "round5"})
    clock.advance(10)
    status = client.get("/admin/status").json()
    assert status["round"] == "round5"
    assert status["isOpen"] is True
    assert status["remainingSeconds"] == 20
    assert status["totalTeams"] == 1


def test_leaderboard_data_endpoint(client):
    data = client.get("/api/leaderboard-data").json()
    assert data == {"round": "round1", "teams": [], "totalTeams": 0}


def test_state_survives_restart(settings, clock):
    app = create_app(settings, clock=clock)
    with TestClient(app) as client:
        register(client)
        client.post("/admin/start", json={"text": "Q", "duration": 30})
        sub = client.post("/submit", json={"teamId": "T1", "answer": "x"}).json()

    on_disk = json.loads(settings.submissions_path.read_text(encoding="utf-8"))
    assert on_disk[0]["id"] == sub["id"]

    with TestClient(create_app(settings, clock=clock)) as client:
        assert [t["teamId"] for t in client.get("/teams").json()] == ["T1"]
        assert [s["id"] for s in client.get("/submissions").json()] == [sub["id"]]


def test_register_blank_team_id_rejected(client):
    resp = client.post("/register-team", json={"teamId": "   ", "teamName": "  "})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    assert client.get("/teams").json() == []


def test_register_strips_whitespace(client):
    register(client, team_id="  T9 ", name=" Nine ")
    assert client.get("/teams").json()[0]["teamId"] == "T9"
    assert client.get("/teams").json()[0]["teamName"] == "Nine"


def test_submit_blank_team_id_rejected(client):
    client.post("/admin/start", json={"text": "Q", "duration": 30})
    resp = client.post("/submit", json={"teamId": "   ", "answer": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    assert client.get("/submissions").json() == []


def test_numeric_team_ids_accepted(client):
    resp = client.post("/register-team", json={"outlawNo": 7, "teamName": "Gamma"})
    assert resp.json() == {"status": "registered", "teamId": "7"}

    client.post("/admin/start", json={"text": "Q", "duration": 30})
    resp = client.post("/submit", json={"roll": 7, "answer": "x"})
    assert resp.status_code == 200
    assert client.get("/submissions").json()[0]["teamId"] == "7"


class FailingSnapshot(SnapshotFile):
    def save(self, records):
        raise PersistenceFailure("disk full")


def test_write_failure_returns_500(client, settings):
    register(client)
    client.post("/admin/start", json={"text": "Q", "duration": 30})
    sub = client.post("/submit", json={"teamId": "T1", "answer": "x"}).json()

    client.app.state.services.submissions._file = FailingSnapshot(settings.submissions_path)

    resp = client.post("/submit", json={"teamId": "T1", "answer": "y"})
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "PERSISTENCE_FAILURE"

    resp = client.post("/update-marks", json={"submissionId": sub["id"], "marks": 50})
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "PERSISTENCE_FAILURE"

    resp = client.post("/admin/clear-submissions")
    assert resp.status_code == 500

    submissions = client.get("/submissions").json()
    assert [s["id"] for s in submissions] == [sub["id"]]
    assert submissions[0]["marks"] is None
