"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from braille_snake.grid import GRID_HEIGHT, GRID_WIDTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunables for a single-player session.

    Supports JSON serialization so a session can be reproduced.
    """

    # Board
    grid_width: int = GRID_WIDTH
    initial_length: int = 4
    start_row: int = 2

    # Pacing
    slow_tick_ms: float = 125.0
    fast_tick_ms: float = 75.0
    frame_interval_ms: float = 16.0

    # Input
    queue_limit: int = 8

    # Persistence / display
    best_score_path: str | None = None
    whitespace_replacement: str | None = None

    def __post_init__(self) -> None:
        if self.grid_width < 2 or self.grid_width % 2:
            raise ValueError("grid_width must be an even number of at least 2.")
        if not 1 <= self.initial_length <= self.grid_width:
            raise ValueError("initial_length must fit within one grid row.")
        if not 0 <= self.start_row < GRID_HEIGHT:
            raise ValueError("start_row must be a valid grid row.")
        if self.fast_tick_ms <= 0 or self.fast_tick_ms > self.slow_tick_ms:
            raise ValueError("Tick range must satisfy 0 < fast <= slow.")
        if self.frame_interval_ms <= 0:
            raise ValueError("frame_interval_ms must be positive.")
        if (
            self.whitespace_replacement is not None
            and len(self.whitespace_replacement) != 1
        ):
            raise ValueError("whitespace_replacement must be one character.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(
            json.dumps(self.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(**raw)
