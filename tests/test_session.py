"""Tests for the server-side game session."""

from __future__ import annotations

import asyncio

import pytest

from braille_snake.config import GameConfig
from braille_snake.scores import BestScore, JsonBestScoreStore, MemoryBestScoreStore
from braille_snake.server.session import GameSession


class TestSessionSetup:
    def test_memory_store_by_default(self):
        session = GameSession(seed=0)
        assert isinstance(session.engine.store, MemoryBestScoreStore)
        assert not session.transform.active

    def test_json_store_from_config(self, tmp_path):
        path = tmp_path / "best.json"
        session = GameSession(GameConfig(best_score_path=str(path)), seed=0)
        assert isinstance(session.engine.store, JsonBestScoreStore)
        assert session.engine.store.path == path

    def test_records_reach_outbox(self):
        session = GameSession(seed=0)
        session.engine.on_record(BestScore(score=3, grid_text="⠤"))
        assert session.display.drain() == [{
            "type": "record",
            "score": 3,
            "points": "3 points",
            "grid_text": "⠤",
            "display_text": "⠤",
        }]


class TestOutbox:
    def test_pause_queues_paused_frame(self):
        session = GameSession(seed=0)
        session.pause()
        (payload,) = session.display.drain()
        assert payload["paused"] is True
        assert session.display.drain() == []

    def test_tick_queues_frame(self):
        session = GameSession(seed=0)
        session.scheduler.on_frame(now=session.scheduler.last_tick + 1.0)
        (payload,) = session.display.drain()
        assert payload["type"] == "frame"
        assert payload["grid_text"] == session.engine.grid_text()


class TestFrameLoop:
    @pytest.mark.asyncio
    async def test_loop_ticks_and_closes(self):
        session = GameSession(
            GameConfig(slow_tick_ms=2.0, fast_tick_ms=1.0, frame_interval_ms=1.0),
            seed=0,
        )
        session.start()
        assert session.running
        await asyncio.sleep(0.05)
        assert session.scheduler.running
        await session.close()
        assert not session.running
        assert not session.scheduler.running
        assert session.engine.tick > 0
        # Flushed frames leave nothing behind without sockets.
        assert session.display.outbox == []

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        session = GameSession(seed=0)
        session.start()
        task = session._task
        session.start()
        assert session._task is task
        await session.close()
