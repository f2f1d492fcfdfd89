import json

import pytest

from hnefatafl import HnefataflEngine
from scripts.play_console import format_board, replay_logged_game, save_log

SHIELDWALL = [
    "R     R",
    "       ",
    "A      ",
    "DA K   ",
    "D      ",
    "A      ",
    "RA    R",
]


def test_format_board_labels_ranks_and_files() -> None:
    engine = HnefataflEngine(SHIELDWALL)
    lines = format_board(engine).splitlines()

    assert lines[0] == " 7 R . . . . . R"
    assert lines[3] == " 4 D A . K . . ."
    assert lines[-1] == "   A B C D E F G"


def test_replay_logged_game(tmp_path) -> None:
    log_path = tmp_path / "game.json"
    save_log({"metadata": {"layout": SHIELDWALL, "first_player": "attacker"}, "moves": ["B1-B3"]}, log_path)

    summary = replay_logged_game(log_path, verbose=False)

    assert summary["status"] == "in_progress"
    assert summary["moves"] == 1
    assert summary["captured"] == {"attacker": 0, "defender": 2}
    assert summary["layout"][3] == " A K   "


def test_replay_rejects_illegal_log(tmp_path) -> None:
    log_path = tmp_path / "bad.json"
    log_path.write_text(json.dumps({"moves": ["F6-F8"]}))

    with pytest.raises(ValueError, match="not legal"):
        replay_logged_game(log_path, verbose=False)
