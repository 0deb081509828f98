"""In-memory session registry and async tick sources."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_sim.config import GameConfig
from snake_sim.engine import SimulationState, SnakeGame
from snake_sim.snake import Direction

logger = logging.getLogger(__name__)

_DEFAULT_FRAME_MS = 16
_MAX_FINISHED_SESSIONS = 100


def monotonic_ms() -> float:
    """Tick-source clock in milliseconds."""
    return time.monotonic() * 1000.0


def _encode(snapshot: dict) -> str:
    return json.dumps(snapshot, separators=(",", ":"))


@dataclass
class GameSession:
    """A hosted game plus the sockets watching it."""

    session_id: str
    game: SnakeGame
    frame_ms: int = _DEFAULT_FRAME_MS
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    running: asyncio.Event = field(default_factory=asyncio.Event)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def state(self) -> SimulationState:
        return self.game.state

    def sync_running(self) -> None:
        """Mirror the game state into :attr:`running`; call under the lock."""
        if self.game.state == SimulationState.RUNNING:
            self.running.set()
        else:
            self.running.clear()

    def summary(self) -> dict:
        return {
            "session_id": self.session_id,
            "state": self.game.state.value,
            "score": self.game.score,
            "high_score": self.game.high_score,
            "grid_width": self.game.grid.width,
            "grid_height": self.game.grid.height,
        }


class SessionManager:
    """Central registry owning every hosted game session."""

    def __init__(
        self,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        frame_ms: int = _DEFAULT_FRAME_MS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if frame_ms < 1:
            raise ValueError("frame_ms must be at least 1.")
        self._sessions: dict[str, GameSession] = {}
        self._max_finished_sessions = max_finished_sessions
        self._frame_ms = frame_ms

    @property
    def frame_ms(self) -> int:
        return self._frame_ms

    def create_session(
        self, config: GameConfig, high_score: int = 0,
    ) -> GameSession:
        """Create a new, not yet started session."""
        session_id = uuid.uuid4().hex[:12]
        session = GameSession(
            session_id=session_id,
            game=SnakeGame(config, high_score=high_score),
            frame_ms=self._frame_ms,
        )
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (%dx%d, %s walls).",
            session_id, config.grid_width, config.grid_height,
            config.wall_mode.value,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[dict]:
        """Return summaries of sessions that are still in play."""
        return [
            s.summary() for s in self._sessions.values()
            if not s.state.is_terminal
        ]

    async def start(self, session_id: str) -> dict:
        session = self.require(session_id)
        async with session.lock:
            if not session.game.start(monotonic_ms()):
                raise ValueError("Session has already started.")
            session.sync_running()
            snapshot = session.game.snapshot()
        self._ensure_tick_source(session)
        return snapshot

    async def restart(self, session_id: str) -> dict:
        session = self.require(session_id)
        async with session.lock:
            session.game.restart(monotonic_ms())
            session.finished_at = None
            session.sync_running()
            snapshot = session.game.snapshot()
        self._ensure_tick_source(session)
        await self._broadcast(session, snapshot)
        return snapshot

    async def toggle_pause(self, session_id: str) -> dict:
        session = self.require(session_id)
        async with session.lock:
            session.game.toggle_pause()
            session.sync_running()
            snapshot = session.game.snapshot()
        await self._broadcast(session, snapshot)
        return snapshot

    async def set_direction(self, session_id: str, direction: Direction) -> bool:
        session = self.require(session_id)
        async with session.lock:
            return session.game.set_direction(direction, monotonic_ms())

    async def snapshot(self, session_id: str) -> dict:
        session = self.require(session_id)
        async with session.lock:
            return session.game.snapshot()

    async def subscribe(self, session_id: str, websocket: WebSocket) -> None:
        """Send the current snapshot to *websocket* and join the broadcast.

        Both happen under the session lock, so no move can land between
        the initial snapshot and the first broadcast.
        """
        session = self.require(session_id)
        async with session.lock:
            await websocket.send_text(_encode(session.game.snapshot()))
            session.sockets.append(websocket)

    def unsubscribe(self, session_id: str, websocket: WebSocket) -> None:
        session = self._sessions.get(session_id)
        if session is not None and websocket in session.sockets:
            session.sockets.remove(websocket)

    def _ensure_tick_source(self, session: GameSession) -> None:
        if session._task is None or session._task.done():
            session._task = asyncio.create_task(self._tick_loop(session))

    async def _tick_loop(self, session: GameSession) -> None:
        """Feed frame timestamps into the game and broadcast each move."""
        frame = session.frame_ms / 1000.0
        try:
            while session.state in (
                SimulationState.RUNNING, SimulationState.PAUSED,
            ):
                if session.state == SimulationState.PAUSED:
                    await session.running.wait()
                    continue
                await asyncio.sleep(frame)
                async with session.lock:
                    before = session.game.tick_count
                    session.game.tick(monotonic_ms())
                    moved = session.game.tick_count != before
                    snapshot = session.game.snapshot() if moved else None
                    session.sync_running()
                    if session.state.is_terminal:
                        session.finished_at = time.monotonic()
                if snapshot is not None:
                    await self._broadcast(session, snapshot)
        except asyncio.CancelledError:
            logger.info("Tick source cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick source error in session %s.", session.session_id)
        finally:
            if session.state.is_terminal:
                self._prune_finished_sessions()

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [s for s in self._sessions.values() if s.state.is_terminal]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow, self._max_finished_sessions,
        )

    async def _broadcast(self, session: GameSession, snapshot: dict) -> None:
        """Send a snapshot to every connected socket."""
        payload = _encode(snapshot)
        dead: list[WebSocket] = []
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick sources."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
