"""Command-line tools for Braille Snake."""

from __future__ import annotations

import argparse
import logging
import sys
import time

import numpy as np

from braille_snake.config import GameConfig
from braille_snake.display import (
    WHITESPACE_REPLACEMENTS,
    TerminalDisplay,
    TextTransform,
    format_points,
)
from braille_snake.encoder import BRAILLE_BLANK, render_ascii
from braille_snake.engine import GameEngine
from braille_snake.scheduler import Scheduler
from braille_snake.scores import JsonBestScoreStore, MemoryBestScoreStore
from braille_snake.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


class _VirtualClock:
    """Monotonic clock advanced by hand, for headless runs."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="braille-snake",
        description="Snake on a 40x4 grid rendered as a line of braille.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a seeded headless game with random turns.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--ticks", type=int, default=200)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--turn-prob", type=float, default=0.15,
        help="Chance of requesting a random turn before each tick.",
    )
    sim_p.add_argument("--best-score-path", type=str, default=None)
    sim_p.add_argument(
        "--replacement", type=int, default=None,
        choices=range(len(WHITESPACE_REPLACEMENTS)),
        help="Substitute blank cells with a visible stand-in.",
    )
    sim_p.add_argument(
        "--realtime", action="store_true",
        help="Sleep for each tick interval instead of running flat out.",
    )
    sim_p.add_argument(
        "--lines", action="store_true",
        help="Print each frame on its own line.",
    )

    # --- decode ---
    decode_p = sub.add_parser(
        "decode", help="Print an ASCII view of an encoded grid.",
    )
    decode_p.add_argument("text", help="Braille grid text or a full frame.")

    # --- best ---
    best_p = sub.add_parser("best", help="Show the stored best score.")
    best_p.add_argument("path", help="Path to the best-score JSON file.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    path = args.best_score_path or config.best_score_path
    store = JsonBestScoreStore(path) if path else MemoryBestScoreStore()
    rng = np.random.default_rng(args.seed)

    if args.replacement is not None:
        char = WHITESPACE_REPLACEMENTS[args.replacement][0]
    else:
        char = config.whitespace_replacement
    display = TerminalDisplay(
        transform=TextTransform.blank_replacement(char),
        overwrite=not args.lines,
    )

    clock = _VirtualClock()
    engine = GameEngine(config, store=store, rng=rng)
    scheduler = Scheduler(engine, display, clock=clock)

    for _ in range(args.ticks):
        if rng.random() < args.turn_prob:
            engine.change_direction(_DIRECTIONS[int(rng.integers(4))])
        if args.realtime:
            time.sleep(scheduler.interval_ms / 1000.0)
        clock.now = scheduler.next_tick_at
        scheduler.on_frame(now=clock.now)

    if not args.lines:
        sys.stdout.write("\n")
    logger.info(
        "Simulated %d ticks over %d episodes.", engine.tick, engine.episode,
    )
    return 0


def _strip_frame(text: str) -> str:
    """Pull the grid out of ``|grid|[score:N]`` and undo blank stand-ins."""
    if text.count("|") >= 2:
        text = text.split("|")[1]
    for char, _ in WHITESPACE_REPLACEMENTS:
        text = text.replace(char, BRAILLE_BLANK)
    return text


def _run_decode(args: argparse.Namespace) -> int:
    try:
        art = render_ascii(_strip_frame(args.text))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 2
    print(art)  # noqa: T201
    return 0


def _run_best(args: argparse.Namespace) -> int:
    best = JsonBestScoreStore(args.path).load()
    if best is None:
        print("No best score recorded.")  # noqa: T201
        return 1
    print(f"|{best.grid_text}| {format_points(best.score)}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``braille-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "decode": _run_decode,
        "best": _run_best,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
