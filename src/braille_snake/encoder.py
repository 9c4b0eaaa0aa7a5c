"""Braille encoding of the grid into a single line of text.

Each character covers a block two cells wide and four cells tall. Dots are
numbered the way the Unicode braille block numbers them, which is not
row-major: the first three dots run down the left column, the next three
down the right column, and the bottom row comes last.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from braille_snake.grid import Grid

BRAILLE_BASE = 0x2800
BRAILLE_BLANK = chr(BRAILLE_BASE)
BLOCK_WIDTH = 2
BLOCK_HEIGHT = 4

# (dx, dy) offset of the cell feeding each bit, indexed by bit number.
DOT_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 0),
    (0, 1),
    (0, 2),
    (1, 0),
    (1, 1),
    (1, 2),
    (0, 3),
    (1, 3),
)


def encode_block(occupancy: np.ndarray, x: int) -> int:
    """Pack the block whose left column is *x* into an 8-bit code."""
    code = 0
    for bit, (dx, dy) in enumerate(DOT_OFFSETS):
        if occupancy[dy, x + dx]:
            code |= 1 << bit
    return code


def encode_occupancy(occupancy: np.ndarray) -> str:
    """Encode a ``(4, width)`` truthy array, scanning blocks left to right."""
    rows, width = occupancy.shape
    if rows != BLOCK_HEIGHT or width % BLOCK_WIDTH:
        raise ValueError(
            f"Expected shape (4, even width), got {occupancy.shape}.",
        )
    return "".join(
        chr(BRAILLE_BASE + encode_block(occupancy, x))
        for x in range(0, width, BLOCK_WIDTH)
    )


def encode_grid(grid: Grid) -> str:
    """Render the grid as ``width / 2`` braille characters."""
    return encode_occupancy(grid.occupancy())


def decode_block(code: int) -> np.ndarray:
    """Unpack an 8-bit code into a ``(4, 2)`` boolean block."""
    if not 0 <= code <= 0xFF:
        raise ValueError(f"Block code out of range: {code}.")
    block = np.zeros((BLOCK_HEIGHT, BLOCK_WIDTH), dtype=bool)
    for bit, (dx, dy) in enumerate(DOT_OFFSETS):
        block[dy, dx] = bool(code >> bit & 1)
    return block


def decode_text(text: str) -> np.ndarray:
    """Invert :func:`encode_occupancy` for a string of braille characters."""
    blocks = []
    for ch in text:
        code = ord(ch) - BRAILLE_BASE
        if not 0 <= code <= 0xFF:
            raise ValueError(f"Not a braille pattern character: {ch!r}.")
        blocks.append(decode_block(code))
    if not blocks:
        return np.zeros((BLOCK_HEIGHT, 0), dtype=bool)
    return np.hstack(blocks)


def render_ascii(text: str, on: str = "#", off: str = ".") -> str:
    """Multi-line debug view of encoded text."""
    occupancy = decode_text(text)
    return "\n".join(
        "".join(on if cell else off for cell in row) for row in occupancy
    )
