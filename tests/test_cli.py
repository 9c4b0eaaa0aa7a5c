"""Tests for the command-line tools."""

from __future__ import annotations

import json

import pytest

from braille_snake.cli import _build_parser, _strip_frame, main
from braille_snake.encoder import BRAILLE_BLANK


class TestParser:
    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.ticks == 200
        assert args.turn_prob == pytest.approx(0.15)
        assert not args.realtime

    def test_replacement_choice_range(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["simulate", "--replacement", "9"])


class TestDecode:
    def test_decode_frame(self, capsys):
        assert main(["decode", "|⠁⢀|[score:0]"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines() == ["#...", "....", "....", "...#"]

    def test_decode_replaced_blanks(self):
        assert _strip_frame("|░⠁|[score:1]") == BRAILLE_BLANK + "⠁"

    def test_decode_invalid(self, capsys):
        assert main(["decode", "hello"]) == 2
        assert "error" in capsys.readouterr().err


class TestBest:
    def test_missing(self, tmp_path, capsys):
        assert main(["best", str(tmp_path / "none.json")]) == 1
        assert "No best score" in capsys.readouterr().out

    def test_present(self, tmp_path, capsys):
        path = tmp_path / "best.json"
        path.write_text(
            json.dumps({"score": 1, "grid_text": "⠤"}), encoding="utf-8",
        )
        assert main(["best", str(path)]) == 0
        assert capsys.readouterr().out.strip() == "|⠤| 1 point"


class TestSimulate:
    def test_prints_one_frame_per_tick(self, capsys):
        assert main(["simulate", "--ticks", "30", "--seed", "1", "--lines"]) == 0
        lines = capsys.readouterr().out.splitlines()
        frames = [line for line in lines if line.startswith("|")]
        assert len(frames) == 30
        assert all("[score:" in line for line in frames)

    def test_long_run_keeps_every_tick(self, capsys):
        assert main(["simulate", "--ticks", "300", "--seed", "7", "--lines"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len([line for line in lines if line.startswith("|")]) == 300

    def test_deterministic(self, capsys):
        main(["simulate", "--ticks", "40", "--seed", "3", "--lines"])
        first = capsys.readouterr().out
        main(["simulate", "--ticks", "40", "--seed", "3", "--lines"])
        assert capsys.readouterr().out == first

    def test_replacement(self, capsys):
        main([
            "simulate", "--ticks", "5", "--seed", "0", "--lines",
            "--replacement", "2",
        ])
        out = capsys.readouterr().out
        assert BRAILLE_BLANK not in out
        assert "░" in out

    def test_existing_best_score_kept(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text(
            json.dumps({"score": 999, "grid_text": "⠤"}), encoding="utf-8",
        )
        main([
            "simulate", "--ticks", "100", "--seed", "2", "--lines",
            "--turn-prob", "0.3", "--best-score-path", str(path),
        ])
        assert json.loads(path.read_text(encoding="utf-8"))["score"] == 999

    def test_config_file(self, tmp_path, capsys):
        cfg = tmp_path / "game.json"
        cfg.write_text(json.dumps({"grid_width": 8}), encoding="utf-8")
        main(["simulate", "--ticks", "3", "--seed", "0", "--lines",
              "--config", str(cfg)])
        frames = [
            line for line in capsys.readouterr().out.splitlines()
            if line.startswith("|")
        ]
        assert frames[0].index("|", 1) == 5
