"""Tests for layout tree assembly."""

from collections import Counter
from datetime import datetime

import pytest

from yearprogress.wallpaper.layout import build_wallpaper, compose
from yearprogress.wallpaper.models import Block, Brushstroke, Label, Shape, Sprite, WordFlow
from yearprogress.wallpaper.phones import PHONE_PROFILES
from yearprogress.wallpaper.progress import resolve_progress
from yearprogress.wallpaper.styles import STYLE_RECIPES

NOW = datetime(2025, 5, 20, 10, 0)


def test_squares_half_year_end_to_end():
    phone = PHONE_PROFILES["iphone16"]
    recipe = STYLE_RECIPES["squares"]
    progress = resolve_progress("0.5", now=NOW)

    assert (phone.width, phone.height) == (1170, 2532)
    assert progress.day_of_year == 183
    assert progress.days_left == 182
    assert progress.percentage == 50

    canvas = compose(phone, recipe, progress)
    grid, label = canvas.children
    colors = Counter(cell.color for cell in grid.children)

    assert colors[recipe.past] == 182
    assert colors[recipe.today] == 1
    assert colors[recipe.future] == len(grid.children) - 183
    assert label.text == "182d left · 50%"
    assert canvas.width == 1170 and canvas.height == 2532
    assert canvas.padding_top == 1012


def test_grid_cells_share_size_and_radius():
    wallpaper = build_wallpaper(model="iphonese", style="dots", simulate="0.1", now=NOW)
    grid = wallpaper.canvas.children[0]
    sizes = {(c.width, c.height, c.radius) for c in grid.children}
    assert len(sizes) == 1
    size, _, radius = sizes.pop()
    assert radius == size / 2
    assert grid.width <= wallpaper.phone.width


def test_flowers_use_sprites():
    wallpaper = build_wallpaper(
        style="flowers", simulate="0.5", now=NOW, origin="https://example.com"
    )
    grid = wallpaper.canvas.children[0]
    assert all(isinstance(c, Sprite) for c in grid.children)

    states = Counter(c.name for c in grid.children)
    # Day 183 is in unit 91 (days 183-184)
    assert states["completed"] == 91
    assert states["today"] == 1
    assert grid.children[91].url == "https://example.com/assets/today.png"
    assert wallpaper.canvas.fonts == ("Delius",)
    assert wallpaper.canvas.children[1].font == "Delius"


def test_cloud_layout():
    wallpaper = build_wallpaper(model="iphone16", style="cloud", simulate="0.5", now=NOW)
    board, label = wallpaper.canvas.children
    assert isinstance(board, Block) and board.clip
    assert board.background == STYLE_RECIPES["cloud"].future

    fill = board.children[0]
    assert fill.x == 0 and fill.width == board.width
    assert fill.y + fill.height == board.height
    assert all(s.radius == s.width // 2 for s in board.children[1:])
    assert label.text == "182d left · 50%"
    assert wallpaper.canvas.fonts == ()


def test_cloud_full_is_flush():
    wallpaper = build_wallpaper(style="cloud", simulate="1", now=NOW)
    board = wallpaper.canvas.children[0]
    fill = board.children[0]
    assert fill.y == 0 and fill.height == board.height


def test_cloud_empty_has_no_shapes():
    wallpaper = build_wallpaper(style="cloud", simulate="0", now=NOW)
    assert wallpaper.canvas.children[0].children == ()


def test_ink_layout():
    wallpaper = build_wallpaper(style="ink", text="ink fills slowly", simulate="0.375", now=NOW)
    top_rule, flow, bottom_rule, flourish, label = wallpaper.canvas.children
    recipe = STYLE_RECIPES["ink"]

    assert isinstance(flow, WordFlow)
    assert flow.font == "InkCalligraphy"
    assert [[(s.text, s.color) for s in w] for w in flow.words] == [
        [("ink", recipe.past)],
        [("fi", recipe.past), ("lls", recipe.future)],
        [("slowly", recipe.future)],
    ]
    assert top_rule.background == bottom_rule.background == recipe.rule_color
    assert len(flourish.children) == 3
    assert all(isinstance(s, Brushstroke) for s in flourish.children)
    assert isinstance(label, Label) and label.font == "InkCalligraphy"


def test_ink_uses_default_text():
    wallpaper = build_wallpaper(style="ink", simulate="1", now=NOW)
    flow = wallpaper.canvas.children[1]
    text = " ".join("".join(s.text for s in w) for w in flow.words)
    assert text == "Every day is a fresh page. Write something worth reading."


@pytest.mark.parametrize("style", list(STYLE_RECIPES))
def test_identical_requests_give_identical_trees(style):
    first = build_wallpaper(model="pixel9", style=style, simulate="0.42", now=NOW)
    second = build_wallpaper(model="pixel9", style=style, simulate="0.42", now=NOW)
    assert first == second


def test_unknown_inputs_fall_back():
    wallpaper = build_wallpaper(model="???", style="nope", simulate="abc", now=NOW)
    assert wallpaper.filename == "year-progress-iphone16pro-squares.png"
    assert wallpaper.progress.day_of_year == 0
    grid = wallpaper.canvas.children[0]
    assert {c.color for c in grid.children} == {STYLE_RECIPES["squares"].future}


def test_natural_progress_without_simulate():
    wallpaper = build_wallpaper(style="squares", now=NOW)
    # May 20th 2025 is day 140
    assert wallpaper.progress.day_of_year == 140
    grid = wallpaper.canvas.children[0]
    assert isinstance(grid.children[139], Shape)
    assert grid.children[139].color == STYLE_RECIPES["squares"].today
