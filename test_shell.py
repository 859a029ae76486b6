"""
Tests for the presentation shell: storage, board drawing and keys.
"""

import json

import pytest
from PIL import ImageColor

from engine.game_state import GameOutcome, Mark, new_board, parse_board
from engine.win_checker import evaluate
from shell.config import ShellConfig
from shell.keys import digit_to_index, is_activate_key, move_focus
from shell.render import BoardRenderer
from shell.storage import (
    KeyValueStore,
    load_preferences,
    load_theme,
    save_preferences,
    save_theme,
)


# ==================== STORAGE ====================

def test_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = KeyValueStore(str(path))
    store.set("ttt:theme", "light")
    store.set("count", 3)

    reopened = KeyValueStore(str(path))
    assert reopened.get("ttt:theme") == "light"
    assert reopened.get("count") == 3
    assert sorted(reopened.keys()) == ["count", "ttt:theme"]


def test_store_remove(tmp_path):
    path = tmp_path / "store.json"
    store = KeyValueStore(str(path))
    store.set("a", 1)
    store.remove("a")
    store.remove("missing")

    assert KeyValueStore(str(path)).get("a") is None


@pytest.mark.parametrize("contents", [b"{not json", b"[1, 2, 3]", b"", b"\xff\xfe{bad"])
def test_corrupt_store_loads_empty(tmp_path, contents):
    path = tmp_path / "store.json"
    path.write_bytes(contents)

    store = KeyValueStore(str(path))
    assert store.keys() == []

    store.set("a", 1)
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 1}


def test_preferences_round_trip(tmp_path):
    store = KeyValueStore(str(tmp_path / "store.json"))
    assert load_preferences(store) == {}

    record = {"scores": {"X": 1, "O": 2, "D": 3}, "mode": "ai", "first": "O"}
    save_preferences(store, record)

    raw = json.loads((tmp_path / "store.json").read_text(encoding="utf-8"))
    assert raw[ShellConfig.PREFERENCES_KEY] == record
    assert load_preferences(KeyValueStore(str(tmp_path / "store.json"))) == record


def test_theme_defaults_and_validation(tmp_path):
    store = KeyValueStore(str(tmp_path / "store.json"))
    assert load_theme(store) == "dark"

    store.set(ShellConfig.THEME_KEY, "neon")
    assert load_theme(store) == "dark"

    save_theme(store, "light")
    assert load_theme(store) == "light"

    with pytest.raises(ValueError):
        save_theme(store, "neon")


# ==================== KEYS ====================

def test_digit_keys_map_to_cells():
    assert digit_to_index("1") == 0
    assert digit_to_index("9") == 8
    assert digit_to_index("KP_5") == 4
    assert digit_to_index("0") is None
    assert digit_to_index("a") is None
    assert digit_to_index("Return") is None


@pytest.mark.parametrize("index,key,expected", [
    (4, "Left", 3),
    (4, "Right", 5),
    (4, "Up", 1),
    (4, "Down", 7),
    (0, "Left", 2),
    (0, "Up", 6),
    (8, "Right", 6),
    (8, "Down", 2),
    (4, "Tab", 4),
])
def test_arrow_keys_move_focus_with_wrap_around(index, key, expected):
    assert move_focus(index, key) == expected


def test_activate_keys():
    assert is_activate_key("Return")
    assert is_activate_key("space")
    assert not is_activate_key("x")


# ==================== RENDER ====================

def _cell_pixel(renderer, image, index):
    """Colour near the left edge of a cell, clear of marks and corners."""
    x0, y0, x1, y1 = renderer.cell_bounds(index)
    return image.getpixel((int(x0 + renderer.cell_size * 0.1), int((y0 + y1) / 2)))


def test_render_size_and_background():
    renderer = BoardRenderer()
    image = renderer.render(new_board())

    assert image.size == (ShellConfig.BOARD_PIXELS, ShellConfig.BOARD_PIXELS)
    assert image.getpixel((1, 1)) == ImageColor.getrgb(renderer.palette["background"])


def test_render_highlights_only_the_winning_line():
    renderer = BoardRenderer()
    board = parse_board("OOO/XX_/X__")
    image = renderer.render(board, evaluate(board))

    win = ImageColor.getrgb(renderer.palette["win"])
    cell = ImageColor.getrgb(renderer.palette["cell"])
    assert [_cell_pixel(renderer, image, i) for i in range(3)] == [win] * 3
    assert all(_cell_pixel(renderer, image, i) == cell for i in range(3, 9))


def test_render_draws_marks_in_their_colours():
    renderer = BoardRenderer(theme="light")
    image = renderer.render(parse_board("X___O____"), GameOutcome.in_progress())

    # The X crosses the centre of its cell; the O ring does not
    x0, y0, x1, y1 = renderer.cell_bounds(0)
    assert image.getpixel((int((x0 + x1) / 2), int((y0 + y1) / 2))) == ImageColor.getrgb(renderer.palette["x"])
    x0, y0, x1, y1 = renderer.cell_bounds(4)
    assert image.getpixel((int((x0 + x1) / 2), int((y0 + y1) / 2))) == ImageColor.getrgb(renderer.palette["cell"])


def test_render_outlines_focused_cell():
    renderer = BoardRenderer()
    image = renderer.render(new_board(), focus=4)

    x0, y0, x1, y1 = renderer.cell_bounds(4)
    edge = image.getpixel((int(x0 + 1), int((y0 + y1) / 2)))
    assert edge == ImageColor.getrgb(renderer.palette["focus"])


def test_cell_at_maps_pixels_to_cells():
    renderer = BoardRenderer()
    for index in range(9):
        x0, y0, x1, y1 = renderer.cell_bounds(index)
        assert renderer.cell_at((x0 + x1) / 2, (y0 + y1) / 2) == index

    assert renderer.cell_at(1, 1) is None
    assert renderer.cell_at(-5, 50) is None
    assert renderer.cell_at(ShellConfig.BOARD_PIXELS + 5, 50) is None


def test_unknown_theme_is_rejected():
    renderer = BoardRenderer()
    with pytest.raises(ValueError):
        renderer.set_theme("neon")
    renderer.set_theme("light")
    assert renderer.palette["background"] == ShellConfig.PALETTES["light"]["background"]
