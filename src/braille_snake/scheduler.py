"""Frame-driven tick scheduling with pause and resume."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from braille_snake.display import DisplaySink
from braille_snake.engine import GameEngine

logger = logging.getLogger(__name__)


def tick_interval(
    length: int,
    grid_size: int,
    slow_ms: float = 125.0,
    fast_ms: float = 75.0,
) -> float:
    """Milliseconds between ticks for a snake of *length*.

    Interpolates linearly from *slow_ms* at length 0 to *fast_ms* when the
    snake fills the grid, clamped to ``[fast_ms, slow_ms]``.
    """
    interval = slow_ms + length * (fast_ms - slow_ms) / grid_size
    return min(slow_ms, max(fast_ms, interval))


class Scheduler:
    """Advances the engine from a per-frame callback.

    A tick only happens once the interval for the current snake length has
    elapsed since the previous one. Frames are ignored while paused.
    """

    def __init__(
        self,
        engine: GameEngine,
        display: DisplaySink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.engine = engine
        self.display = display if display is not None else DisplaySink()
        self.clock = clock
        self.last_tick = clock()
        self.paused = False
        self._running = False
        if engine.on_record is None:
            engine.on_record = self.display.record

    @property
    def interval_ms(self) -> float:
        config = self.engine.config
        return tick_interval(
            self.engine.length,
            self.engine.grid.size,
            slow_ms=config.slow_tick_ms,
            fast_ms=config.fast_tick_ms,
        )

    @property
    def next_tick_at(self) -> float:
        """Clock time at which the next tick becomes due."""
        return self.last_tick + self.interval_ms / 1000.0

    def on_frame(self, now: float | None = None) -> bool:
        """Handle one frame; returns True if the game ticked."""
        if self.paused:
            return False
        if now is None:
            now = self.clock()
        if now < self.next_tick_at:
            return False
        self.engine.step()
        self.display.show(self.engine.frame())
        self.last_tick = now
        return True

    def pause(self) -> None:
        """Suspend ticking until :meth:`resume`."""
        if self.paused:
            return
        self.paused = True
        self.display.paused()
        logger.debug("Scheduler paused.")

    def resume(self) -> None:
        """Re-enable ticking and redraw the current frame immediately."""
        self.paused = False
        self.display.show(self.engine.frame())
        logger.debug("Scheduler resumed.")

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    async def run(
        self,
        frame_interval: float | None = None,
        after_frame: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        """Call :meth:`on_frame` every *frame_interval* seconds until stopped.

        *after_frame* is awaited once per frame, after the tick check.
        """
        if frame_interval is None:
            frame_interval = self.engine.config.frame_interval_ms / 1000.0
        self._running = True
        self.display.show(self.engine.frame())
        try:
            while self._running:
                self.on_frame()
                if after_frame is not None:
                    await after_frame()
                await asyncio.sleep(frame_interval)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled.")
        except Exception:
            logger.exception("Frame loop error.")
        finally:
            self._running = False
