"""Single-player game session and its asyncio frame loop."""

from __future__ import annotations

import asyncio
import json
import logging

from starlette.websockets import WebSocket, WebSocketState

from braille_snake.config import GameConfig
from braille_snake.display import (
    PAUSED_MARKER,
    DisplaySink,
    TextTransform,
    format_frame,
    format_points,
)
from braille_snake.engine import Frame, GameEngine
from braille_snake.scheduler import Scheduler
from braille_snake.scores import (
    BestScore,
    BestScoreStore,
    JsonBestScoreStore,
    MemoryBestScoreStore,
)
from braille_snake.snake import Direction

logger = logging.getLogger(__name__)


class OutboxDisplay(DisplaySink):
    """Collects display events as JSON-ready payloads until drained."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.outbox: list[dict] = []

    def show(self, frame: Frame) -> None:
        self.outbox.append(self.session.frame_payload(frame))

    def paused(self) -> None:
        self.outbox.append(self.session.frame_payload())

    def record(self, best: BestScore) -> None:
        self.outbox.append(
            {"type": "record", **self.session.best_payload(best)},
        )

    def drain(self) -> list[dict]:
        pending, self.outbox = self.outbox, []
        return pending


class GameSession:
    """Owns the engine and scheduler and fans frames out to websockets."""

    def __init__(
        self,
        config: GameConfig | None = None,
        store: BestScoreStore | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        if store is None:
            store = (
                JsonBestScoreStore(self.config.best_score_path)
                if self.config.best_score_path
                else MemoryBestScoreStore()
            )
        self.transform = TextTransform.blank_replacement(
            self.config.whitespace_replacement,
        )
        self.display = OutboxDisplay(self)
        self.engine = GameEngine(self.config, store=store, seed=seed)
        self.scheduler = Scheduler(self.engine, self.display)
        self.sockets: list[WebSocket] = []
        self._task: asyncio.Task | None = None

    # --- payloads ---

    def frame_payload(self, frame: Frame | None = None) -> dict:
        if frame is None:
            frame = self.engine.frame()
        text = format_frame(frame)
        if self.scheduler.paused:
            text += PAUSED_MARKER
        return {
            "type": "frame",
            "text": text,
            "display_text": self.transform.apply(text),
            "grid_text": frame.grid_text,
            "score": frame.score,
            "length": self.engine.length,
            "episode": self.engine.episode,
            "paused": self.scheduler.paused,
            "tick_interval_ms": self.scheduler.interval_ms,
        }

    def best_payload(self, best: BestScore) -> dict:
        return {
            "score": best.score,
            "points": format_points(best.score),
            "grid_text": best.grid_text,
            "display_text": self.transform.apply(best.grid_text),
        }

    # --- controls ---

    def change_direction(self, direction: Direction) -> bool:
        return self.engine.change_direction(direction)

    def pause(self) -> None:
        self.scheduler.pause()

    def resume(self) -> None:
        self.scheduler.resume()

    # --- loop ---

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the frame loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(
            self.scheduler.run(
                self.config.frame_interval_ms / 1000.0, after_frame=self.flush,
            ),
        )
        logger.info("Game session started.")

    async def flush(self) -> None:
        """Send every pending display event to connected sockets."""
        for payload in self.display.drain():
            await self._broadcast(payload)

    async def _broadcast(self, payload: dict) -> None:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        dead: list[WebSocket] = []
        # Iterate over a snapshot; disconnect handlers may mutate the list.
        for ws in list(self.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(text)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in self.sockets:
                self.sockets.remove(ws)

    async def close(self) -> None:
        """Cancel the frame loop and close any live sockets."""
        self.scheduler.stop()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        for ws in list(self.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1001, reason="Server shutting down.")
            except Exception:
                logger.warning("Failed closing socket during shutdown.")
        self.sockets.clear()
        logger.info("Game session closed.")
