"""Tests for tick scheduling."""

from __future__ import annotations

import asyncio

import pytest

from braille_snake.config import GameConfig
from braille_snake.display import DisplaySink
from braille_snake.engine import GameEngine
from braille_snake.scheduler import Scheduler, tick_interval


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class RecordingDisplay(DisplaySink):
    def __init__(self) -> None:
        self.frames = []
        self.pauses = 0
        self.records = []

    def show(self, frame) -> None:
        self.frames.append(frame)

    def paused(self) -> None:
        self.pauses += 1

    def record(self, best) -> None:
        self.records.append(best)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def display():
    return RecordingDisplay()


@pytest.fixture()
def scheduler(clock, display):
    return Scheduler(GameEngine(seed=0), display, clock=clock)


class TestTickInterval:
    def test_endpoints(self):
        assert tick_interval(0, 160) == 125.0
        assert tick_interval(160, 160) == 75.0

    def test_initial_length(self):
        assert tick_interval(4, 160) == pytest.approx(123.75)

    def test_monotonic_and_bounded(self):
        values = [tick_interval(n, 160) for n in range(0, 200)]
        assert all(a >= b for a, b in zip(values, values[1:]))
        assert all(75.0 <= v <= 125.0 for v in values)

    def test_custom_range(self):
        assert tick_interval(50, 100, slow_ms=200, fast_ms=100) == 150.0


class TestOnFrame:
    def test_waits_for_interval(self, scheduler, clock, display):
        clock.now += 0.1
        assert not scheduler.on_frame()
        assert scheduler.engine.tick == 0
        assert display.frames == []

    def test_ticks_after_interval(self, scheduler, clock, display):
        clock.now += 0.124
        assert scheduler.on_frame()
        assert scheduler.engine.tick == 1
        assert len(display.frames) == 1
        assert display.frames[0] == scheduler.engine.frame()
        assert scheduler.last_tick == clock.now

    def test_explicit_timestamp(self, scheduler):
        assert scheduler.on_frame(now=scheduler.last_tick + 1.0)

    def test_one_tick_per_frame(self, scheduler, clock):
        clock.now += 10.0
        assert scheduler.on_frame()
        assert not scheduler.on_frame()
        assert scheduler.engine.tick == 1

    def test_next_tick_at(self, scheduler, clock):
        assert scheduler.next_tick_at == pytest.approx(clock.now + 0.12375)

    def test_ticks_on_every_exact_deadline(self, scheduler, clock):
        for _ in range(300):
            clock.now = scheduler.next_tick_at
            assert scheduler.on_frame()
        assert scheduler.engine.tick == 300

    def test_interval_uses_config(self, clock):
        config = GameConfig(slow_tick_ms=500.0, fast_tick_ms=100.0)
        scheduler = Scheduler(GameEngine(config, seed=0), clock=clock)
        assert scheduler.interval_ms == pytest.approx(500 - 4 * 400 / 160)


class TestPause:
    def test_paused_frames_do_nothing(self, scheduler, clock, display):
        scheduler.pause()
        clock.now += 10.0
        assert not scheduler.on_frame()
        assert scheduler.engine.tick == 0
        assert display.pauses == 1

    def test_pause_is_idempotent(self, scheduler, display):
        scheduler.pause()
        scheduler.pause()
        assert display.pauses == 1

    def test_resume_redraws(self, scheduler, clock, display):
        scheduler.pause()
        scheduler.resume()
        assert not scheduler.paused
        assert len(display.frames) == 1
        clock.now += 10.0
        assert scheduler.on_frame()

    def test_records_routed_to_display(self, scheduler, display):
        assert scheduler.engine.on_record == display.record


class TestRun:
    @pytest.mark.asyncio
    async def test_run_ticks_until_stopped(self):
        display = RecordingDisplay()
        config = GameConfig(slow_tick_ms=2.0, fast_tick_ms=1.0)
        scheduler = Scheduler(GameEngine(config, seed=0), display)
        task = asyncio.create_task(scheduler.run(frame_interval=0.001))
        await asyncio.sleep(0.1)
        assert scheduler.running
        scheduler.stop()
        await asyncio.wait_for(task, timeout=1.0)
        assert not scheduler.running
        assert scheduler.engine.tick > 0
        # Initial draw plus one frame per tick.
        assert len(display.frames) == scheduler.engine.tick + 1

    @pytest.mark.asyncio
    async def test_run_cancellation(self):
        scheduler = Scheduler(GameEngine(seed=0))
        task = asyncio.create_task(scheduler.run(frame_interval=0.001))
        await asyncio.sleep(0.01)
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_after_frame_awaited_each_frame(self):
        scheduler = Scheduler(GameEngine(seed=0))
        calls = []

        async def after_frame():
            calls.append(scheduler.engine.tick)
            if len(calls) == 5:
                scheduler.stop()

        await asyncio.wait_for(
            scheduler.run(frame_interval=0.001, after_frame=after_frame),
            timeout=1.0,
        )
        assert len(calls) == 5
        assert not scheduler.running

    @pytest.mark.asyncio
    async def test_frame_error_logged_and_stops(self, caplog):
        scheduler = Scheduler(GameEngine(seed=0))

        async def after_frame():
            raise RuntimeError("boom")

        await asyncio.wait_for(
            scheduler.run(frame_interval=0.001, after_frame=after_frame),
            timeout=1.0,
        )
        assert not scheduler.running
        assert "Frame loop error." in caplog.text
