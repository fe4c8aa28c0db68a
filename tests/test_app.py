"""Tests for the Flask JSON API."""

from __future__ import annotations

import pytest

from main import create_app
from settings import AppConfig


@pytest.fixture
def app(clock):
    app = create_app(AppConfig(), seed=3, clock=clock)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_list_algorithms(client) -> None:
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    assert len(resp.get_json()["algorithms"]) == 14

    resp = client.get("/api/algorithms?family=searching")
    keys = [a["key"] for a in resp.get_json()["algorithms"]]
    assert keys == ["linear_search", "binary_search", "jump_search", "interpolation_search"]

    assert client.get("/api/algorithms?family=magic").status_code == 400


def test_list_screens(client) -> None:
    data = client.get("/api/screens").get_json()
    assert "tree" in data["screens"]
    assert data["config"]["default_speed"] == 50


def test_unknown_screen_is_404(client) -> None:
    resp = client.get("/api/screens/nowhere/state")
    assert resp.status_code == 404
    assert "nowhere" in resp.get_json()["error"]


def test_record_play_and_poll(client, clock) -> None:
    client.post("/api/screens/sorting/structure", json={"values": [3, 1, 2]})
    resp = client.post("/api/screens/sorting/record", json={"operation": "bubble_sort"})
    assert resp.status_code == 200
    total = resp.get_json()["session"]["total_frames"]

    client.post("/api/screens/sorting/speed", json={"speed": 100})
    assert client.post("/api/screens/sorting/play").get_json()["session"]["status"] == "playing"

    clock.advance_ms(100 * total + 50)
    state = client.get("/api/screens/sorting/state").get_json()
    assert state["session"]["status"] == "completed"
    assert state["session"]["cursor"] == total
    assert state["session"]["frame"]["snapshot"] == [1, 2, 3]


def test_pause_resume_reset(client, clock) -> None:
    client.post("/api/screens/graph/record", json={"operation": "dfs"})
    client.post("/api/screens/graph/play")
    clock.advance_ms(600)

    paused = client.post("/api/screens/graph/pause").get_json()
    assert paused["session"]["status"] == "paused"
    assert paused["session"]["cursor"] == 1

    assert client.post("/api/screens/graph/resume").get_json()["session"]["status"] == "playing"
    reset = client.post("/api/screens/graph/reset").get_json()
    assert reset["session"]["status"] == "idle"
    assert reset["session"]["cursor"] == 0


def test_step(client) -> None:
    client.post("/api/screens/searching/record", json={"operation": "linear_search", "params": {"target": 1000}})
    state = client.post("/api/screens/searching/step").get_json()
    assert state["session"]["cursor"] == 1
    assert state["session"]["highlight"]["compared"] == [0]


def test_invalid_input_is_400(client) -> None:
    resp = client.post("/api/screens/searching/record", json={"operation": "binary_search"})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "target"

    resp = client.post("/api/screens/sorting/play")
    assert resp.status_code == 400

    resp = client.post("/api/screens/sorting/record", json={})
    assert resp.status_code == 400

    resp = client.post("/api/screens/sorting/speed", json={"speed": "fast"})
    assert resp.status_code == 400


def test_mutate_stack(client, clock) -> None:
    resp = client.post("/api/screens/stack/mutate", json={"operation": "push", "params": {"value": 7}})
    assert resp.status_code == 200
    assert resp.get_json()["session"]["status"] == "playing"

    clock.advance_ms(5000)
    state = client.get("/api/screens/stack/state").get_json()
    assert state["structure"]["contents"] == [7]
    assert state["session"]["frame"]["auxiliary"]["message"] == "Pushed 7 to the stack"


def test_mutate_empty_structure_is_400(client) -> None:
    resp = client.post("/api/screens/queue/mutate", json={"operation": "dequeue"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Queue is empty, cannot dequeue"


def test_grid_edits(client) -> None:
    resp = client.post("/api/screens/pathfinding/grid/wall", json={"cell": [0, 0]})
    assert resp.get_json()["changed"] is True
    assert resp.get_json()["structure"]["walls"] == [[0, 0]]

    resp = client.post("/api/screens/pathfinding/grid/start", json={"cell": [0, 0]})
    assert resp.get_json()["changed"] is False

    resp = client.post("/api/screens/pathfinding/grid/weight", json={"cell": [1, 1], "weight": 3})
    assert resp.get_json()["structure"]["weights"] == [{"row": 1, "col": 1, "weight": 3}]

    resp = client.post("/api/screens/pathfinding/grid/clear")
    assert resp.get_json()["structure"]["walls"] == []

    resp = client.post("/api/screens/pathfinding/grid/wall", json={"cell": [99, 0]})
    assert resp.status_code == 400


def test_bfs_state_serializes_queue(client) -> None:
    client.post(
        "/api/screens/graph/structure",
        json={"vertices": ["A", "B", "C"], "edges": [["A", "B"], ["B", "C"]]},
    )
    client.post("/api/screens/graph/record", json={"operation": "bfs", "params": {"start": "A"}})
    client.post("/api/screens/graph/step")

    resp = client.get("/api/screens/graph/state")
    assert resp.status_code == 200
    session = resp.get_json()["session"]
    assert session["frame"]["kind"] == "start"
    assert session["frame"]["auxiliary"]["queue"] == ["A"]
    assert session["highlight"]["queue"] == ["A"]


def test_record_pathfinding(client) -> None:
    resp = client.post("/api/screens/pathfinding/record", json={"operation": "grid_astar"})
    data = resp.get_json()
    assert data["summary"]["outcome"] == "found"


def test_malformed_trace_is_500(client, monkeypatch) -> None:
    from engine.errors import MalformedTrace
    from engine.screen import Screen

    def broken(self, operation, params=None):
        raise MalformedTrace("broken trace")

    monkeypatch.setattr(Screen, "record", broken)
    resp = client.post("/api/screens/sorting/record", json={"operation": "bubble_sort"})
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "broken trace"
