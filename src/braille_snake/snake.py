"""Snake body and direction handling."""

from __future__ import annotations

import enum
from collections import deque


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))

    def is_reverse_of(self, other: Direction) -> bool:
        """Check whether turning from *other* to this is a 180° reversal."""
        return self.opposite is other


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. The snake knows
    nothing about the grid; the engine keeps the two consistent.
    """

    def __init__(
        self,
        head_x: int,
        head_y: int,
        direction: Direction = Direction.RIGHT,
        length: int = 4,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[tuple[int, int]] = deque(
            (head_x - dx * i, head_y - dy * i) for i in range(length)
        )

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> tuple[int, int]:
        """Return the tail coordinate."""
        return self.body[-1]

    def push_head(self, cell: tuple[int, int]) -> None:
        self.body.appendleft(cell)

    def pop_tail(self) -> tuple[int, int]:
        return self.body.pop()

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {"body": [list(seg) for seg in self.body]}


class DirectionQueue:
    """Pending turns, applied most-recent-first.

    ``pending[0]`` is the latest request and is the one consumed on the next
    tick; older requests wait for later ticks. When *limit* is reached the
    oldest request is dropped.
    """

    def __init__(self, limit: int = 8) -> None:
        if limit < 1:
            raise ValueError("Direction queue limit must be at least 1.")
        self.pending: deque[Direction] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self.pending)

    def latest(self, current: Direction) -> Direction:
        """Return the most recently queued direction, or *current*."""
        return self.pending[0] if self.pending else current

    def offer(self, direction: Direction, current: Direction) -> bool:
        """Queue *direction* unless it reverses the latest one.

        Returns True if the direction was queued.
        """
        if direction.is_reverse_of(self.latest(current)):
            return False
        self.pending.appendleft(direction)
        return True

    def take(self) -> Direction | None:
        """Consume the most recent request, if any."""
        return self.pending.popleft() if self.pending else None
