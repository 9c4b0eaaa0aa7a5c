"""Tick-based game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from braille_snake.config import GameConfig
from braille_snake.encoder import encode_grid
from braille_snake.food import FoodPlacer
from braille_snake.grid import CellType, Grid
from braille_snake.scores import BestScore, BestScoreStore, MemoryBestScoreStore
from braille_snake.snake import Direction, DirectionQueue, Snake

logger = logging.getLogger(__name__)


class MoveOutcome(enum.Enum):
    """Classification of a single tick."""

    OPEN = "open"
    FOOD = "food"
    OUT_OF_BOUNDS = "out_of_bounds"
    SELF_COLLISION = "self_collision"

    @property
    def terminal(self) -> bool:
        return self in (MoveOutcome.OUT_OF_BOUNDS, MoveOutcome.SELF_COLLISION)


@dataclass(frozen=True)
class Frame:
    """What the display receives after each tick."""

    grid_text: str
    score: int


@dataclass
class GameState:
    """Mutable state of one episode."""

    grid: Grid
    snake: Snake
    direction: Direction
    queue: DirectionQueue
    has_turned: bool = False

    @classmethod
    def fresh(cls, config: GameConfig) -> GameState:
        """Lay out the starting snake on row ``start_row``, facing right."""
        grid = Grid(width=config.grid_width)
        snake = Snake(
            config.initial_length - 1,
            config.start_row,
            Direction.RIGHT,
            length=config.initial_length,
        )
        for x, y in snake.body:
            grid.set_cell_at(x, y, CellType.SNAKE)
        return cls(
            grid=grid,
            snake=snake,
            direction=Direction.RIGHT,
            queue=DirectionQueue(limit=config.queue_limit),
        )


class GameEngine:
    """Single-snake engine that restarts itself after every collision.

    The engine owns the current :class:`GameState`, the food placer and the
    best-score store. Each call to :meth:`step` advances one tick and returns
    how the move was classified.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: BestScoreStore | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        on_record: Callable[[BestScore], None] | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.store = store if store is not None else MemoryBestScoreStore()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.on_record = on_record
        self.best: BestScore | None = self.store.load()
        self.tick = 0
        self.episode = 0
        self.reset()

    # --- episode lifecycle ---

    def reset(self) -> None:
        """Start a fresh episode and drop the first food."""
        self.state = GameState.fresh(self.config)
        self.food = FoodPlacer(self.state.grid, rng=self.rng)
        self.food.drop()
        self.episode += 1

    def _finalize(self, outcome: MoveOutcome) -> None:
        """Record a new best if the finished episode earned one."""
        score = self.score
        best_score = self.best.score if self.best is not None else 0
        logger.info(
            "Episode %d ended (%s) with score %d.",
            self.episode, outcome.value, score,
        )
        if score > 0 and score > best_score and self.state.has_turned:
            grid_text = self.grid_text()
            self.store.save(score, grid_text)
            self.best = BestScore(score=score, grid_text=grid_text)
            logger.info("New best score: %d.", score)
            if self.on_record is not None:
                self.on_record(self.best)

    # --- input ---

    def change_direction(self, direction: Direction) -> bool:
        """Queue a turn unless it reverses the latest queued direction.

        Any request, accepted or not, counts as player input for the
        best-score rule. Returns True if the turn was queued.
        """
        self.state.has_turned = True
        return self.state.queue.offer(direction, self.state.direction)

    # --- simulation ---

    def classify(self, x: int, y: int) -> MoveOutcome:
        """Classify moving the head onto ``(x, y)``; x must be normalized."""
        grid = self.state.grid
        if not grid.in_rows(y):
            return MoveOutcome.OUT_OF_BOUNDS
        cell = grid.cell_at(x, y)
        # The tail vacates this tick, so stepping onto it is legal.
        if cell == CellType.SNAKE and (x, y) != self.state.snake.tail:
            return MoveOutcome.SELF_COLLISION
        if cell == CellType.FOOD:
            return MoveOutcome.FOOD
        return MoveOutcome.OPEN

    def step(self) -> MoveOutcome:
        """Advance the game by one tick."""
        state = self.state
        self.tick += 1

        turn = state.queue.take()
        if turn is not None:
            state.direction = turn

        head_x, head_y = state.snake.head
        dx, dy = state.direction.value
        next_x = state.grid.normalize_x(head_x + dx)
        next_y = head_y + dy

        outcome = self.classify(next_x, next_y)
        if outcome.terminal:
            self._finalize(outcome)
            self.reset()
            return outcome

        if outcome is MoveOutcome.OPEN:
            tail_x, tail_y = state.snake.pop_tail()
            state.grid.set_cell_at(tail_x, tail_y, CellType.EMPTY)

        state.grid.set_cell_at(next_x, next_y, CellType.SNAKE)
        state.snake.push_head((next_x, next_y))

        if outcome is MoveOutcome.FOOD:
            self.food.drop()
        return outcome

    # --- views ---

    @property
    def length(self) -> int:
        return len(self.state.snake)

    @property
    def score(self) -> int:
        return self.length - self.config.initial_length

    @property
    def head(self) -> tuple[int, int]:
        return self.state.snake.head

    @property
    def grid(self) -> Grid:
        return self.state.grid

    def grid_text(self) -> str:
        return encode_grid(self.state.grid)

    def frame(self) -> Frame:
        return Frame(grid_text=self.grid_text(), score=self.score)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "episode": self.episode,
            "score": self.score,
            "direction": self.state.direction.name.lower(),
            "grid_text": self.grid_text(),
            "grid": self.state.grid.to_dict(),
            "snake": self.state.snake.to_dict(),
            "best": self.best.to_dict() if self.best is not None else None,
        }
