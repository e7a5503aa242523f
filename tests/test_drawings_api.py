"""Tests for the HTTP API and the websocket gateway."""

import pytest
from fastapi.testclient import TestClient

from backend.app_factory import AppContext, create_app
from core.config.simulation_config import SimulationConfig


def _context(**overrides):
    options = {
        "simulation_config": SimulationConfig(),
        "seed": 7,
        "duplicate_policy": "append",
        "allowed_origins": ["*"],
        "run_simulation": False,
    }
    options.update(overrides)
    return AppContext(**options)


@pytest.fixture
def context():
    return _context()


@pytest.fixture
def test_client(context):
    """Create a test client with a fresh world and no background ticking."""
    app = create_app(context=context)
    with TestClient(app) as client:
        yield client


class TestListDrawings:
    def test_empty_registry(self, test_client):
        response = test_client.get("/api/drawings")
        assert response.status_code == 200
        assert response.json() == []

    def test_reads_are_idempotent(self, test_client, drawing_payload):
        test_client.post("/api/drawings", json=drawing_payload(id="a"))
        test_client.post("/api/drawings", json=drawing_payload(id="b"))

        first = test_client.get("/api/drawings").json()
        second = test_client.get("/api/drawings").json()

        assert first == second
        assert [d["id"] for d in first] == ["a", "b"]


class TestSubmitDrawing:
    def test_submit_returns_id(self, test_client, drawing_payload, context):
        response = test_client.post("/api/drawings", json=drawing_payload())

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert context.engine.has_actor(body["id"])

        stored = test_client.get("/api/drawings").json()
        assert [d["id"] for d in stored] == [body["id"]]
        assert stored[0]["bounds"] == {"minX": 0, "minY": 0, "maxX": 40, "maxY": 40}

    def test_spawned_actor_matches_anchors(self, test_client, drawing_payload, context):
        test_client.post("/api/drawings", json=drawing_payload(id="fish"))

        actor = context.engine.get("fish")
        assert (actor.width, actor.height) == (40, 40)
        assert actor.heading == pytest.approx(0.0)
        assert actor.mouth_offset.x == pytest.approx(15.0)
        assert actor.back_offset.x == pytest.approx(-15.0)

    def test_missing_strokes_is_rejected(self, test_client, drawing_payload, context):
        payload = drawing_payload()
        del payload["strokes"]

        response = test_client.post("/api/drawings", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()
        assert len(context.registry) == 0
        assert context.engine.actor_count == 0

    def test_missing_bounds_is_rejected(self, test_client, drawing_payload):
        payload = drawing_payload()
        del payload["bounds"]
        assert test_client.post("/api/drawings", json=payload).status_code == 400

    def test_invalid_json(self, test_client):
        response = test_client.post(
            "/api/drawings",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400

    def test_empty_body(self, test_client):
        assert test_client.post("/api/drawings").status_code == 400

    def test_duplicate_id_spawns_once(self, test_client, drawing_payload, context):
        assert test_client.post("/api/drawings", json=drawing_payload(id="dup")).status_code == 200
        assert test_client.post("/api/drawings", json=drawing_payload(id="dup")).status_code == 200

        assert len(test_client.get("/api/drawings").json()) == 2
        assert context.engine.actor_count == 1

    def test_payload_too_large(self, drawing_payload):
        app = create_app(context=_context(max_body_bytes=64))
        with TestClient(app) as client:
            response = client.post("/api/drawings", json=drawing_payload())
        assert response.status_code == 413


def test_reject_duplicate_policy(drawing_payload):
    app = create_app(context=_context(duplicate_policy="reject"))
    with TestClient(app) as client:
        assert client.post("/api/drawings", json=drawing_payload(id="dup")).status_code == 200
        response = client.post("/api/drawings", json=drawing_payload(id="dup"))

    assert response.status_code == 409
    assert "dup" in response.json()["error"]


def test_state_endpoint(test_client, drawing_payload):
    test_client.post("/api/drawings", json=drawing_payload(id="fish"))

    state = test_client.get("/api/state").json()

    assert state["world"] == {"w": 1920, "h": 1080}
    assert [a["id"] for a in state["actors"]] == ["fish"]
    assert set(state["actors"][0]) == {
        "id", "x", "y", "vx", "vy", "heading", "scale", "mouthOffset", "backOffset", "w", "h",
    }


def test_health(test_client, drawing_payload):
    test_client.post("/api/drawings", json=drawing_payload())

    body = test_client.get("/health").json()

    assert body["status"] == "ok"
    assert body["actors"] == 1
    assert body["drawings"] == 1
    assert body["clients"] == 0


def test_drawings_survive_into_actors_at_startup(drawing_payload):
    """Drawings already in the registry get actors when the app starts."""
    context = _context()
    context.registry.submit(drawing_payload(id="early"))
    assert context.engine.actor_count == 0

    with TestClient(create_app(context=context)):
        assert context.engine.has_actor("early")


class TestWebsocket:
    def test_initial_snapshot(self, test_client, drawing_payload):
        test_client.post("/api/drawings", json=drawing_payload(id="fish"))

        with test_client.websocket_connect("/ws") as websocket:
            message = websocket.receive_json()

        assert message["type"] == "state"
        assert message["data"]["world"] == {"w": 1920, "h": 1080}
        assert isinstance(message["data"]["t"], int)
        assert [a["id"] for a in message["data"]["actors"]] == ["fish"]

    def test_new_drawing_is_pushed(self, test_client, drawing_payload):
        with test_client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            test_client.post("/api/drawings", json=drawing_payload(id="fresh"))
            message = websocket.receive_json()

        assert message["type"] == "newDrawing"
        assert message["data"]["id"] == "fresh"
        assert message["data"]["strokes"] == [[{"x": 10, "y": 20}, {"x": 30, "y": 20}]]

    def test_rejected_submission_is_not_pushed(self, test_client, drawing_payload):
        with test_client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            bad = drawing_payload(id="bad")
            del bad["strokes"]
            assert test_client.post("/api/drawings", json=bad).status_code == 400
            test_client.post("/api/drawings", json=drawing_payload(id="good"))
            message = websocket.receive_json()

        assert message["type"] == "newDrawing"
        assert message["data"]["id"] == "good"

    def test_ping(self, test_client):
        with test_client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            websocket.send_json({"type": "ping"})
            assert websocket.receive_json()["type"] == "pong"

    def test_invalid_json_gets_error(self, test_client):
        with test_client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            websocket.send_text("{oops")
            message = websocket.receive_json()

        assert message["type"] == "error"

    def test_client_is_tracked(self, test_client, context):
        with test_client.websocket_connect("/ws") as websocket:
            websocket.receive_json()
            assert context.connection_manager.client_count == 1
