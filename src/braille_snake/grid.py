"""Grid representation for the braille snake game."""

from __future__ import annotations

import enum

import numpy as np

GRID_WIDTH = 40
GRID_HEIGHT = 4


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed cell store, wrapping horizontally.

    Coordinates are ``(x, y)``; the backing array is indexed ``[y, x]``.
    Only the x axis is normalized. Callers are responsible for keeping
    ``y`` inside ``[0, height)``.
    """

    height = GRID_HEIGHT

    def __init__(self, width: int = GRID_WIDTH) -> None:
        if width < 2 or width % 2:
            raise ValueError("Grid width must be an even number of at least 2.")
        self.width = width
        self.cells = np.zeros((self.height, width), dtype=np.int8)

    @property
    def size(self) -> int:
        return self.width * self.height

    def normalize_x(self, x: int) -> int:
        """Map *x* into ``[0, width)``, accepting negative input."""
        return x % self.width

    def in_rows(self, y: int) -> bool:
        """Check whether a row index lies within the grid."""
        return 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> CellType:
        """Return the cell type at ``(x mod width, y)``."""
        return CellType(self.cells[y, self.normalize_x(x)])

    def set_cell_at(self, x: int, y: int, cell_type: CellType) -> None:
        """Set the cell type at ``(x mod width, y)``."""
        self.cells[y, self.normalize_x(x)] = cell_type

    def cell_at_index(self, index: int) -> CellType:
        """Return the cell at a flat row-major index ``x + y * width``."""
        return CellType(self.cells.flat[index])

    def set_cell_at_index(self, index: int, cell_type: CellType) -> None:
        self.cells.flat[index] = cell_type

    def coords_of(self, index: int) -> tuple[int, int]:
        """Convert a flat index into ``(x, y)``."""
        y, x = divmod(index, self.width)
        return x, y

    def count(self, cell_type: CellType) -> int:
        """Count cells holding *cell_type*."""
        return int(np.count_nonzero(self.cells == cell_type))

    def empty_count(self) -> int:
        return self.count(CellType.EMPTY)

    def occupancy(self) -> np.ndarray:
        """Boolean ``(height, width)`` array of non-empty cells."""
        return self.cells != CellType.EMPTY

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": self.cells.tolist(),
        }
