"""Tests for the in-memory session registry."""

from __future__ import annotations

import asyncio

import pytest

from snake_core.controls import Action
from snake_core.engine import GameState
from snake_core.grid import InvalidDimensions
from snake_core.server.session_manager import SessionManager


class TestRegistry:
    def test_create_outside_event_loop_has_no_task(self):
        manager = SessionManager()
        session = manager.create_session(width=20, height=20)
        assert session._task is None
        assert manager.get_session(session.session_id) is session
        assert session.engine.state == GameState.MENU

    def test_create_propagates_invalid_dimensions(self):
        with pytest.raises(InvalidDimensions):
            SessionManager().create_session(width=4, height=4)

    def test_negative_retention_rejected(self):
        with pytest.raises(ValueError, match=">= 0"):
            SessionManager(max_finished_sessions=-1)

    def test_frame_missing_session(self):
        with pytest.raises(KeyError):
            SessionManager().frame("nope")

    def test_prune_finished_sessions(self):
        manager = SessionManager(max_finished_sessions=1)
        sessions = [manager.create_session(width=20, height=20) for _ in range(3)]
        for s in sessions:
            manager._mark_finished(s)
        manager._prune_finished_sessions()
        assert manager.get_session(sessions[-1].session_id) is not None
        remaining = [s for s in sessions if manager.get_session(s.session_id)]
        assert len(remaining) == 1


class TestApplyAction:
    @pytest.mark.asyncio
    async def test_actions_drive_engine(self):
        manager = SessionManager()
        session = manager.create_session(width=20, height=20, frame_rate=10)
        try:
            accepted, state = await manager.apply_action(
                session.session_id, Action.START,
            )
            assert accepted
            assert state["state"] == "playing"

            accepted, _ = await manager.apply_action(
                session.session_id, Action.MOVE_LEFT,
            )
            assert not accepted

            await manager.apply_action(session.session_id, Action.END)
            assert session.finished
        finally:
            await manager.cleanup()

    @pytest.mark.asyncio
    async def test_missing_session(self):
        with pytest.raises(KeyError):
            await SessionManager().apply_action("nope", Action.START)

    @pytest.mark.asyncio
    async def test_loop_exits_after_end(self):
        manager = SessionManager()
        session = manager.create_session(width=20, height=20, frame_rate=100)
        await manager.apply_action(session.session_id, Action.START)
        await manager.apply_action(session.session_id, Action.END)
        await asyncio.wait_for(session._task, timeout=2.0)
        assert session._task.done()
        await manager.cleanup()


class TestSessionRelease:
    def test_idle_timeout_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            SessionManager(idle_timeout=0)

    @pytest.mark.asyncio
    async def test_game_over_session_expires(self):
        manager = SessionManager(max_finished_sessions=0, idle_timeout=0.05)
        session = manager.create_session(width=20, height=20, frame_rate=100)
        await manager.apply_action(session.session_id, Action.START)
        session.engine._game_over()

        await asyncio.wait_for(session._task, timeout=2.0)

        assert session.engine.state == GameState.GAME_OVER
        assert session.finished
        assert manager.get_session(session.session_id) is None

    @pytest.mark.asyncio
    async def test_menu_session_expires(self):
        manager = SessionManager(idle_timeout=0.05)
        session = manager.create_session(width=20, height=20, frame_rate=100)
        await asyncio.wait_for(session._task, timeout=2.0)
        assert session.finished
        assert manager.list_sessions() == []

    @pytest.mark.asyncio
    async def test_playing_session_does_not_expire(self):
        manager = SessionManager(idle_timeout=0.05)
        session = manager.create_session(width=20, height=20, frame_rate=100)
        await manager.apply_action(session.session_id, Action.START)
        try:
            await asyncio.sleep(0.2)
            assert not session.finished
            assert session.idle_since is None
        finally:
            await manager.cleanup()

    @pytest.mark.asyncio
    async def test_delete_stops_loop_and_forgets(self):
        manager = SessionManager()
        session = manager.create_session(width=20, height=20, frame_rate=100)
        await manager.delete_session(session.session_id)
        assert session.finished
        assert session._task.done()
        assert manager.get_session(session.session_id) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self):
        with pytest.raises(KeyError):
            await SessionManager().delete_session("nope")
