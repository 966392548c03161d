# tests/test_simulation.py
import asyncio
from collections import Counter

import pytest

from memory_match.simulation import main, pick_symbols, play


def test_simulated_player_finishes():
    stats = asyncio.run(play(pairs=4, seed=1, match_delay_ms=1, mismatch_delay_ms=2, think_ms=0))
    assert stats.matches == 4
    assert stats.total_clicks == 2 * (stats.matches + stats.mismatches)
    assert stats.ignored_clicks == 0

    faces = stats.final_board.split()
    assert len(faces) == 8
    assert "?" not in faces
    assert set(Counter(faces).values()) == {2}


def test_simulation_gives_up():
    with pytest.raises(RuntimeError):
        asyncio.run(play(pairs=8, seed=1, match_delay_ms=0, mismatch_delay_ms=0, think_ms=0, max_clicks=3))


def test_pick_symbols():
    assert pick_symbols(2, ["a", "b", "c"]) == ["a", "b"]
    assert pick_symbols(4, ["a", "b"]) == ["a", "b", "S2", "S3"]
    with pytest.raises(ValueError):
        pick_symbols(0)


def test_pick_symbols_padding_skips_taken_names():
    symbols = pick_symbols(3, ["S2", "x"])
    assert len(symbols) == 3
    assert len(set(symbols)) == 3
    assert symbols[:2] == ["S2", "x"]


def test_main(capsys):
    assert main(["--pairs", "3", "--seed", "5", "--match-delay-ms", "1",
                 "--mismatch-delay-ms", "1", "--think-ms", "0"]) == 0
    out = capsys.readouterr().out
    assert "SIMULATION COMPLETE" in out
    assert "Matches: 3" in out

    lines = out.split("SIMULATION COMPLETE\n", 1)[1].splitlines()
    board = lines[:2]
    faces = " ".join(board).split()
    assert len(faces) == 6
    assert "?" not in faces
    assert lines[2] == ""
