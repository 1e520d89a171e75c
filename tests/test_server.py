"""
Combat Server Tests

Exercises the FastAPI routes with the test client.

Tests cover:
1. Session creation (defaults, options, bad input)
2. Observation and action listing
3. Taking actions, including rejected ones (400)
4. Unknown sessions (404)
5. Incremental event fetching
"""

import pytest
from fastapi.testclient import TestClient

from skyward.server import SESSIONS, app


@pytest.fixture
def client():
    SESSIONS.clear()
    yield TestClient(app)
    SESSIONS.clear()


@pytest.fixture
def session(client):
    response = client.post("/api/combat", json={"seed": 42, "monster_id": "treant"})
    assert response.status_code == 200
    return response.json()["id"]


# =============================================================================
# Sessions
# =============================================================================

class TestCreateSession:
    """Test POST /api/combat."""

    def test_defaults(self, client):
        response = client.post("/api/combat")
        assert response.status_code == 200
        body = response.json()
        assert body["id"] in SESSIONS
        assert body["observation"]["phase"] == "CHOOSE_TURN_ORDER"
        assert len(body["actions"]) == 2

    def test_options(self, client):
        response = client.post("/api/combat", json={
            "classes": ["manipulator", "tracker", "guardian"],
            "room": "final",
            "seed": "SKYWARD",
            "monster_id": "apexus",
            "items": ["minor_potion"],
        })
        body = response.json()
        combat = body["observation"]["combat"]
        assert combat["monster"]["id"] == "apexus"
        assert [h["class"] for h in combat["heroes"]] == ["manipulator", "tracker", "guardian"]
        assert [i["item_id"] for i in combat["inventory"]] == ["minor_potion"]

    def test_bad_room(self, client):
        response = client.post("/api/combat", json={"room": "heart"})
        assert response.status_code == 400
        assert "room" in response.json()["error"]

    def test_bad_class(self, client):
        response = client.post("/api/combat", json={"classes": ["wizard", "tracker", "guardian"]})
        assert response.status_code == 400

    def test_non_object_body(self, client):
        response = client.post("/api/combat", json=[1, 2])
        assert response.status_code == 400
        assert SESSIONS == {}


# =============================================================================
# Reading
# =============================================================================

class TestRead:
    """Test the GET routes."""

    def test_observation(self, client, session):
        response = client.get(f"/api/combat/{session}")
        assert response.status_code == 200
        assert response.json()["combat"]["monster"]["id"] == "treant"

    def test_actions(self, client, session):
        response = client.get(f"/api/combat/{session}/actions")
        ids = {a["id"] for a in response.json()["actions"]}
        assert ids == {"choose_turn_order_left", "choose_turn_order_right"}

    @pytest.mark.parametrize("path", ["", "/actions", "/events"])
    def test_unknown_session(self, client, path):
        response = client.get(f"/api/combat/nope{path}")
        assert response.status_code == 404

    def test_unknown_session_action(self, client):
        response = client.post("/api/combat/nope/action", json={"type": "flip"})
        assert response.status_code == 404


# =============================================================================
# Actions
# =============================================================================

class TestActions:
    """Test POST /api/combat/{id}/action."""

    def test_choose_turn_order(self, client, session):
        response = client.post(
            f"/api/combat/{session}/action",
            json={"type": "choose_turn_order", "params": {"direction": "right"}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"]
        assert body["observation"]["phase"] == "MONSTER_FLIP"
        assert [a["id"] for a in body["actions"]] == ["flip"]

    def test_wrong_phase(self, client, session):
        response = client.post(f"/api/combat/{session}/action", json={"type": "roll"})
        assert response.status_code == 400
        assert not response.json()["success"]

    def test_bad_direction(self, client, session):
        response = client.post(
            f"/api/combat/{session}/action",
            json={"type": "choose_turn_order", "params": {"direction": "sideways"}},
        )
        assert response.status_code == 400

    def test_not_json(self, client, session):
        response = client.post(f"/api/combat/{session}/action", content=b"flip")
        assert response.status_code == 400

    def test_non_object_body(self, client, session):
        response = client.post(f"/api/combat/{session}/action", json=["flip"])
        assert response.status_code == 400
        assert not SESSIONS[session].state.log.contains("flips")

    def test_play_to_the_end(self, client, session):
        body = client.get(f"/api/combat/{session}/actions").json()
        for _ in range(5000):
            if not body["actions"]:
                break
            body = client.post(f"/api/combat/{session}/action", json=body["actions"][0]).json()
        observation = client.get(f"/api/combat/{session}").json()
        assert observation["result"] is not None


# =============================================================================
# Events
# =============================================================================

class TestEvents:
    """Test GET /api/combat/{id}/events."""

    def test_since(self, client, session):
        first = client.get(f"/api/combat/{session}/events").json()
        assert first["events"]
        assert first["next"] == len(first["events"])

        again = client.get(f"/api/combat/{session}/events", params={"since": first["next"]}).json()
        assert again["events"] == []

        client.post(
            f"/api/combat/{session}/action",
            json={"type": "choose_turn_order", "params": {"direction": "left"}},
        )
        later = client.get(f"/api/combat/{session}/events", params={"since": first["next"]}).json()
        assert later["events"]
        assert later["next"] == first["next"] + len(later["events"])


# =============================================================================
# Closing sessions
# =============================================================================

class TestDeleteSession:
    """Test DELETE /api/combat/{id}."""

    def test_unfinished(self, client, session):
        response = client.delete(f"/api/combat/{session}")
        assert response.status_code == 200
        assert response.json() == {"id": session, "result": None}
        assert session not in SESSIONS
        assert client.get(f"/api/combat/{session}").status_code == 404

    def test_finished_returns_result(self, client, session):
        SESSIONS[session].run_to_completion()
        body = client.delete(f"/api/combat/{session}").json()
        assert isinstance(body["result"]["victory"], bool)

    def test_unknown(self, client):
        assert client.delete("/api/combat/nope").status_code == 404
