"""In-memory session registry and async frame loops.

Each session wraps one :class:`GameEngine`. Its frame loop is the clock
source: it measures real elapsed time and feeds it into
:meth:`GameEngine.tick`, pushing a fresh snapshot to subscribers
whenever the snake moved.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_core.config import GameConfig
from snake_core.controls import Action
from snake_core.engine import GameEngine, GameState
from snake_core.render import frame_info
from snake_core.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100
_IDLE_TIMEOUT = 300.0  # seconds outside PLAYING before a session expires


@dataclass
class Session:
    """All state for a single hosted game."""

    session_id: str
    engine: GameEngine
    frame_rate: int
    subscribers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    idle_since: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def finished(self) -> bool:
        return self.finished_at is not None

    def summary(self) -> SessionSummary:
        width, height = self.engine.world.size()
        return SessionSummary(
            session_id=self.session_id,
            state=self.engine.state.value,
            score=self.engine.current_score,
            best_score=self.engine.best_score,
            width=width,
            height=height,
            frame_rate=self.frame_rate,
        )


class SessionManager:
    """Central registry managing all hosted sessions."""

    def __init__(
        self,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        idle_timeout: float = _IDLE_TIMEOUT,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if idle_timeout <= 0:
            raise ValueError("idle_timeout must be positive.")
        self._sessions: dict[str, Session] = {}
        self._max_finished_sessions = max_finished_sessions
        self._idle_timeout = idle_timeout

    def create_session(
        self,
        width: int = 32,
        height: int = 32,
        initial_length: int = 10,
        move_interval_ms: int = 50,
        frame_rate: int = 60,
        food_avoids_snake: bool = False,
        tile_size: int = 16,
        seed: int | None = None,
    ) -> Session:
        """Create a session in the menu state.

        The frame loop starts right away when called from inside a
        running event loop.
        """
        config = GameConfig(
            width=width,
            height=height,
            initial_length=initial_length,
            move_interval=move_interval_ms / 1000.0,
            food_avoids_snake=food_avoids_snake,
            tile_size=tile_size,
            seed=seed,
        )
        engine = GameEngine(config=config)

        session_id = uuid.uuid4().hex[:12]
        session = Session(
            session_id=session_id, engine=engine, frame_rate=frame_rate,
        )
        self._sessions[session_id] = session

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            session._task = loop.create_task(self._frame_loop(session))

        logger.info(
            "Session %s created (%dx%d, %d fps).",
            session_id, width, height, frame_rate,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions that have not ended."""
        return [s.summary() for s in self._sessions.values() if not s.finished]

    def frame(self, session_id: str) -> dict:
        """Return the data a renderer needs to draw the current frame."""
        session = self._require(session_id)
        world = session.engine.world
        info = frame_info(world, session.engine.config.tile_size)
        info["cells"] = world.cells.tolist()
        return info

    async def apply_action(
        self, session_id: str, action: Action,
    ) -> tuple[bool, dict]:
        """Feed one input action to the session's engine."""
        session = self._require(session_id)
        async with session.lock:
            accepted = session.engine.process_event(action)
            state = session.engine.get_state()
            if session.engine.state == GameState.ENDED:
                self._mark_finished(session)
        if accepted:
            await self._broadcast(session, state)
        return accepted, state

    async def delete_session(self, session_id: str) -> None:
        """Stop a session's frame loop, close its sockets and forget it."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        self._mark_finished(session)
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(session)
        logger.info("Session %s deleted.", session_id)

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    async def _frame_loop(self, session: Session) -> None:
        """Tick the engine with measured wall time, once per frame."""
        frame_interval = 1.0 / session.frame_rate
        last = time.monotonic()
        try:
            while not session.finished:
                await asyncio.sleep(frame_interval)
                now = time.monotonic()
                delta, last = now - last, now
                async with session.lock:
                    steps = session.engine.tick(delta)
                    state = session.engine.get_state() if steps else None
                    playing = session.engine.state == GameState.PLAYING
                if state is not None:
                    await self._broadcast(session, state)
                self._track_idle(session, playing, now)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            self._mark_finished(session)
        finally:
            if session.finished:
                await self._close_connections(session)
                self._prune_finished_sessions()

    def _track_idle(self, session: Session, playing: bool, now: float) -> None:
        """Expire sessions left outside PLAYING for longer than the timeout."""
        if playing:
            session.idle_since = None
        elif session.idle_since is None:
            session.idle_since = now
        elif now - session.idle_since >= self._idle_timeout:
            logger.info(
                "Session %s idle for %.0fs in %s; expiring.",
                session.session_id,
                now - session.idle_since,
                session.engine.state.value,
            )
            self._mark_finished(session)

    def _mark_finished(self, session: Session) -> None:
        """Flag a session as finished exactly once."""
        if session.finished_at is None:
            session.finished_at = time.monotonic()
            logger.info("Session %s finished.", session.session_id)

    async def _close_connections(self, session: Session) -> None:
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game ended.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.subscribers.clear()

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [s for s in self._sessions.values() if s.finished]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(key=lambda s: s.finished_at)
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def _broadcast(self, session: Session, state: dict) -> None:
        """Send the snapshot to every connected subscriber."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Snapshot the list; disconnect handlers may mutate it meanwhile.
        for ws in list(session.subscribers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.subscribers:
                session.subscribers.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running frame loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
