"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from braille_snake.grid import CellType

if TYPE_CHECKING:
    from braille_snake.grid import Grid

logger = logging.getLogger(__name__)


class FoodPlacer:
    """Drops a single food marker onto a non-snake cell.

    Random probing is tried first since it is cheap on a sparse board. When
    every probe lands on the snake, a linear scan picks uniformly among the
    remaining cells, so placement always succeeds if any empty cell exists.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_probes: int | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_probes = (
            max_probes if max_probes is not None else 2 * grid.size
        )

    def drop(self) -> tuple[int, int] | None:
        """Place food and return its ``(x, y)``, or ``None`` on a full grid."""
        if self.grid.empty_count() == 0:
            logger.warning("No empty cells available for food placement.")
            return None

        index = self.probe()
        if index is None:
            logger.debug(
                "All %d food probes hit the snake, scanning.", self.max_probes,
            )
            index = self.scan()
        self.grid.set_cell_at_index(index, CellType.FOOD)
        return self.grid.coords_of(index)

    def probe(self) -> int | None:
        """Return the first randomly probed non-snake index, if any."""
        for _ in range(self.max_probes):
            index = int(self.rng.integers(self.grid.size))
            if self.grid.cell_at_index(index) != CellType.SNAKE:
                return index
        return None

    def scan(self) -> int | None:
        """Pick a uniformly random non-snake index in one linear pass."""
        free = self.grid.size - self.grid.count(CellType.SNAKE)
        if free == 0:
            return None
        counter = int(self.rng.integers(free))
        for index in range(self.grid.size):
            if self.grid.cell_at_index(index) == CellType.SNAKE:
                continue
            if counter == 0:
                return index
            counter -= 1
        return None
