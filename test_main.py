"""
Tests for the console front end and command line.
"""

import json

import pytest

import main
from shell.config import ShellConfig
from shell.storage import KeyValueStore


def _feed_input(monkeypatch, answers):
    answers = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def _saved_record(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)[ShellConfig.PREFERENCES_KEY]


def test_console_pvp_game_saves_the_win(tmp_path, monkeypatch, capsys):
    path = str(tmp_path / "store.json")
    # X: 1 2 3 across the top, O: 4 5
    _feed_input(monkeypatch, ["1", "4", "2", "5", "3", "n"])

    main.main(["--no-ui", "--mode", "pvp", "--first", "X", "--store", path])

    output = capsys.readouterr().out
    assert "X wins on cells 1, 2, 3!" in output
    assert _saved_record(path) == {
        "scores": {"X": 1, "O": 0, "D": 0},
        "mode": "pvp",
        "first": "X",
    }


def test_console_rejects_bad_input_then_continues(tmp_path, monkeypatch, capsys):
    path = str(tmp_path / "store.json")
    _feed_input(monkeypatch, ["hello", "0", "1", "1", "q"])

    main.main(["--no-ui", "--mode", "pvp", "--store", path])

    output = capsys.readouterr().out
    assert "Please type a number from 1 to 9." in output
    assert "Invalid position -1" in output
    assert "already occupied" in output
    assert "Goodbye!" in output


def test_console_announces_computer_opening(tmp_path, monkeypatch, capsys):
    path = str(tmp_path / "store.json")
    _feed_input(monkeypatch, ["q"])

    main.main(["--no-ui", "--mode", "ai", "--first", "O", "--store", path])

    assert "Computer (O) plays cell 5." in capsys.readouterr().out


def test_reset_scores_flag_zeroes_saved_tally(tmp_path, monkeypatch):
    path = str(tmp_path / "store.json")
    store = KeyValueStore(path)
    store.set(ShellConfig.PREFERENCES_KEY, {"scores": {"X": 4, "O": 2, "D": 1}, "mode": "ai", "first": "X"})
    _feed_input(monkeypatch, ["q"])

    main.main(["--no-ui", "--reset-scores", "--store", path])

    record = _saved_record(path)
    assert record["scores"] == {"X": 0, "O": 0, "D": 0}
    assert record["mode"] == "ai"


def test_parser_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["--mode", "online"])
