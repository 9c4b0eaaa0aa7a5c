"""Display collaborators: frame formatting, text substitution and sinks."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from braille_snake.encoder import BRAILLE_BLANK

if TYPE_CHECKING:
    from braille_snake.engine import Frame
    from braille_snake.scores import BestScore

logger = logging.getLogger(__name__)

PAUSED_MARKER = "[paused]"

# Stand-ins for the blank braille cell on hosts that escape or collapse it,
# in order of preference, with a short description for the player.
WHITESPACE_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("\u0adf", "strange symbols"),
    ("\u27cb", "some weird slashes"),
    ("\u2591", 'some kind of "fog"'),
)


def format_frame(frame: Frame) -> str:
    """Render a frame as ``|<grid>|[score:N]``."""
    return f"|{frame.grid_text}|[score:{frame.score}]"


def format_points(points: int) -> str:
    return "1 point" if points == 1 else f"{points} points"


class TextTransform:
    """Character substitution applied to text before it is shown.

    The engine always produces raw braille text; this only derives the
    presentation-safe variant.
    """

    def __init__(self, mapping: dict[str, str] | None = None) -> None:
        self.mapping = dict(mapping or {})
        self._table = str.maketrans(self.mapping)

    @classmethod
    def blank_replacement(cls, char: str | None) -> TextTransform:
        """Transform replacing the blank braille cell with *char*."""
        return cls({BRAILLE_BLANK: char} if char else None)

    @property
    def active(self) -> bool:
        return bool(self.mapping)

    def apply(self, text: str) -> str:
        return text.translate(self._table) if self.mapping else text


class DisplaySink:
    """Receives frames from the scheduler. Default methods do nothing."""

    def show(self, frame: Frame) -> None:
        pass

    def paused(self) -> None:
        pass

    def record(self, best: BestScore) -> None:
        pass


class TerminalDisplay(DisplaySink):
    """Rewrites a single terminal line with each frame."""

    def __init__(
        self,
        stream: TextIO | None = None,
        transform: TextTransform | None = None,
        overwrite: bool = True,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.transform = transform if transform is not None else TextTransform()
        self.overwrite = overwrite
        self.last_text = ""

    def _write(self, text: str) -> None:
        self.last_text = text
        if self.overwrite:
            self.stream.write("\r" + text)
        else:
            self.stream.write(text + "\n")
        self.stream.flush()

    def show(self, frame: Frame) -> None:
        self._write(self.transform.apply(format_frame(frame)))

    def paused(self) -> None:
        self._write(self.last_text + PAUSED_MARKER)

    def record(self, best: BestScore) -> None:
        if self.overwrite:
            self.stream.write("\n")
        self.stream.write(
            f"New best: |{self.transform.apply(best.grid_text)}| "
            f"{format_points(best.score)}\n",
        )
        self.stream.flush()
