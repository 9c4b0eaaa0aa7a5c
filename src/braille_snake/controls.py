"""Mapping of key names onto directions."""

from __future__ import annotations

from braille_snake.snake import Direction

_KEY_DIRECTIONS: dict[str, Direction] = {
    # Plain names and arrow keys.
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    # WASD.
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
    # Vi keys.
    "k": Direction.UP,
    "h": Direction.LEFT,
    "j": Direction.DOWN,
    "l": Direction.RIGHT,
}


def direction_for_key(key: object) -> Direction | None:
    """Return the direction bound to *key*, or ``None`` if it is unbound."""
    if not isinstance(key, str):
        return None
    return _KEY_DIRECTIONS.get(key.strip().lower())
