"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from snake_sim.server.app import create_app


@pytest.fixture()
def tc():
    """Starlette sync TestClient. The context manager keeps one event
    loop alive so tick sources outlive the request that started them."""
    with TestClient(create_app(frame_ms=5)) as client:
        yield client


def _create_started(tc, **body):
    resp = tc.post(
        "/sessions",
        json={"initial_interval_ms": 20, "min_interval_ms": 10, **body},
    )
    assert resp.status_code == 201
    session_id = resp.json()["session_id"]
    assert tc.post(f"/sessions/{session_id}/start").status_code == 200
    return session_id


class TestPlayWebSocket:
    def test_connect_and_receive_initial_snapshot(self, tc):
        session_id = _create_started(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            state = json.loads(ws.receive_text())
            assert "segments" in state
            assert "food" in state
            assert state["state"] == "running"

    def test_receives_snapshot_after_move(self, tc):
        session_id = _create_started(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            first = json.loads(ws.receive_text())
            second = json.loads(ws.receive_text())
            third = json.loads(ws.receive_text())
            assert second["tick"] == first["tick"] + 1
            assert third["tick"] == second["tick"] + 1

    def test_send_direction_and_pause(self, tc):
        session_id = _create_started(tc, move_delay_ms=None)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "up"}))
            ws.send_text("not json")
            ws.send_text(json.dumps({"direction": "diagonal"}))
            ws.send_text(json.dumps({"action": "pause"}))
            for _ in range(50):
                state = json.loads(ws.receive_text())
                if state["state"] == "paused":
                    break
            assert state["state"] == "paused"

    def test_resume_after_pause_keeps_moving(self, tc):
        session_id = _create_started(tc)
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "pause"}))
            for _ in range(50):
                paused = json.loads(ws.receive_text())
                if paused["state"] == "paused":
                    break
            assert paused["state"] == "paused"

            ws.send_text(json.dumps({"action": "pause"}))
            resumed = json.loads(ws.receive_text())
            assert resumed["state"] == "running"
            assert resumed["tick"] == paused["tick"]
            moved = json.loads(ws.receive_text())
            assert moved["tick"] == paused["tick"] + 1

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass
