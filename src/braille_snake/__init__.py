"""Braille Snake: snake on a 40x4 grid rendered as one line of braille."""

from braille_snake.config import GameConfig
from braille_snake.encoder import decode_text, encode_grid
from braille_snake.engine import Frame, GameEngine, GameState, MoveOutcome
from braille_snake.grid import CellType, Grid
from braille_snake.scheduler import Scheduler, tick_interval
from braille_snake.scores import BestScore, JsonBestScoreStore, MemoryBestScoreStore
from braille_snake.snake import Direction, Snake

__all__ = [
    "BestScore",
    "CellType",
    "Direction",
    "Frame",
    "GameConfig",
    "GameEngine",
    "GameState",
    "Grid",
    "JsonBestScoreStore",
    "MemoryBestScoreStore",
    "MoveOutcome",
    "Scheduler",
    "Snake",
    "decode_text",
    "encode_grid",
    "tick_interval",
]
