"""Best-score record persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BestScore:
    """Highest score reached, with the grid text at the moment it was set."""

    score: int
    grid_text: str

    def to_dict(self) -> dict:
        return asdict(self)


class BestScoreStore:
    """Interface for loading and saving the single best-score record."""

    def load(self) -> BestScore | None:
        raise NotImplementedError

    def save(self, score: int, grid_text: str) -> None:
        raise NotImplementedError


class MemoryBestScoreStore(BestScoreStore):
    """Keeps the record in process memory only."""

    def __init__(self, initial: BestScore | None = None) -> None:
        self.record = initial

    def load(self) -> BestScore | None:
        return self.record

    def save(self, score: int, grid_text: str) -> None:
        self.record = BestScore(score=score, grid_text=grid_text)


class JsonBestScoreStore(BestScoreStore):
    """Stores the record as a small JSON document on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> BestScore | None:
        """Read the record; a missing or unreadable file means no record."""
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return BestScore(
                score=int(raw["score"]), grid_text=str(raw["grid_text"]),
            )
        except (OSError, ValueError, KeyError, TypeError):
            logger.warning(
                "Ignoring unreadable best-score file %s.", self.path,
            )
            return None

    def save(self, score: int, grid_text: str) -> None:
        """Write the record, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        record = BestScore(score=score, grid_text=grid_text)
        self.path.write_text(
            json.dumps(record.to_dict(), ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info("Best score %d saved to %s", score, self.path)
