"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_sim.server.app import create_app
from snake_sim.server.session_manager import SessionManager

BASE = "http://test"


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await app.state.session_manager.cleanup()


async def _create(client, **body) -> str:
    resp = await client.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["state"] == "not_started"
        assert data["score"] == 0
        assert data["grid_width"] == 20
        assert "session_id" in data

    @pytest.mark.asyncio
    async def test_create_custom(self, client):
        resp = await client.post("/sessions", json={
            "grid_width": 12,
            "grid_height": 8,
            "wall_mode": "death",
            "move_delay_ms": None,
            "high_score": 120,
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["grid_width"] == 12
        assert data["grid_height"] == 8
        assert data["high_score"] == 120

    @pytest.mark.asyncio
    async def test_invalid_wall_mode(self, client):
        resp = await client.post("/sessions", json={"wall_mode": "bounce"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_inconsistent_config(self, client):
        resp = await client.post("/sessions", json={
            "initial_interval_ms": 10, "min_interval_ms": 50,
        })
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_single_cell_grid_refused(self, client):
        resp = await client.post("/sessions", json={
            "grid_width": 1, "grid_height": 1,
        })
        assert resp.status_code == 422


class TestListAndGet:
    @pytest.mark.asyncio
    async def test_list_empty(self, client):
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_list_after_create(self, client):
        await _create(client)
        resp = await client.get("/sessions")
        assert len(resp.json()) == 1

    @pytest.mark.asyncio
    async def test_get_snapshot(self, client):
        session_id = await _create(client, seed=1)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["segments"] == [[10, 10]]
        assert data["state"] == "not_started"

    @pytest.mark.asyncio
    async def test_get_not_found(self, client):
        resp = await client.get("/sessions/nonexistent")
        assert resp.status_code == 404


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/start")
        assert resp.status_code == 200
        assert resp.json()["state"] == "running"

    @pytest.mark.asyncio
    async def test_start_twice_conflicts(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(f"/sessions/{session_id}/start")
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_start_not_found(self, client):
        resp = await client.post("/sessions/nope/start")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_pause_toggle(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(f"/sessions/{session_id}/pause")
        assert resp.json()["state"] == "paused"
        resp = await client.post(f"/sessions/{session_id}/pause")
        assert resp.json()["state"] == "running"

    @pytest.mark.asyncio
    async def test_restart(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/restart")
        assert resp.status_code == 200
        data = resp.json()
        assert data["state"] == "running"
        assert data["score"] == 0


class TestDirection:
    @pytest.mark.asyncio
    async def test_direction_accepted(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "up"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"session_id": session_id, "accepted": True}

    @pytest.mark.asyncio
    async def test_reversal_not_accepted(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "left"},
        )
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_direction_before_start_not_accepted(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "up"},
        )
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_diagonal_rejected(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "upleft"},
        )
        assert resp.status_code == 422


class TestAppFactory:
    def test_defaults(self):
        application = create_app()
        assert application.title == "Snake Sim"
        manager = application.state.session_manager
        assert isinstance(manager, SessionManager)
        assert manager.frame_ms == 16

    def test_custom_frame_ms(self):
        application = create_app(frame_ms=5)
        assert application.state.session_manager.frame_ms == 5

    def test_invalid_frame_ms_refused(self):
        with pytest.raises(ValueError, match="frame_ms"):
            create_app(frame_ms=0)

    def test_each_app_gets_its_own_manager(self):
        assert (
            create_app().state.session_manager
            is not create_app().state.session_manager
        )
