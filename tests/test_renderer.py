"""Tests for the Pillow renderer and font loader."""

import asyncio
import time
from io import BytesIO

import pytest
import requests
from PIL import Image, ImageChops

from yearprogress.render.fonts import FontLoader
from yearprogress.render.renderer import WallpaperRenderer, sprite_image, sprite_png
from yearprogress.wallpaper.layout import build_wallpaper
from yearprogress.wallpaper.models import Block, Canvas, Label, Shape, Span, WordFlow
from yearprogress.wallpaper.styles import STYLE_RECIPES


@pytest.fixture
def renderer(tmp_path):
    return WallpaperRenderer(output_dir=str(tmp_path / "images"))


@pytest.mark.parametrize("style", list(STYLE_RECIPES))
def test_png_matches_phone_size(renderer, style):
    wallpaper = build_wallpaper(model="iphonese", style=style, simulate="0.6")
    data = renderer.to_png(wallpaper.canvas)

    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    image = Image.open(BytesIO(data))
    assert image.size == (750, 1334)


def test_render_colors_cells(renderer):
    canvas = Canvas(
        width=100,
        height=100,
        background="#000000",
        padding_top=10,
        children=(
            Block(
                width=40,
                height=20,
                children=(
                    Shape(x=0, y=0, width=20, height=20, color="#FF0000"),
                    Shape(x=20, y=0, width=20, height=20, color="#00FF00"),
                ),
            ),
        ),
    )
    image = renderer.render(canvas)

    assert image.getpixel((0, 0)) == (0, 0, 0)
    assert image.getpixel((35, 15)) == (255, 0, 0)
    assert image.getpixel((65, 15)) == (0, 255, 0)


def test_clipped_block_rounds_corners(renderer):
    canvas = Canvas(
        width=100,
        height=100,
        background="#000000",
        padding_top=0,
        children=(
            Block(width=100, height=100, background="#FFFFFF", radius=30, clip=True),
        ),
    )
    image = renderer.render(canvas)

    assert image.getpixel((0, 0)) == (0, 0, 0)
    assert image.getpixel((50, 50)) == (255, 255, 255)


def test_word_flow_wraps(renderer):
    words = tuple((Span("word", "#000000"),) for _ in range(40))
    flow = WordFlow(width=200, words=words, size=20, word_spacing=8, line_spacing=10)
    canvas = Canvas(
        width=300,
        height=800,
        background="#FFFFFF",
        padding_top=0,
        children=(flow, Label(text="after", color="#000000", size=20)),
    )
    image = renderer.render(canvas)

    # Forty words cannot fit on one 200px line
    ink = ImageChops.difference(image, Image.new("RGB", image.size, "white")).getbbox()
    assert ink is not None
    assert ink[3] > 2 * (32 + 10)


def test_save_writes_file(renderer):
    wallpaper = build_wallpaper(model="iphonese", style="cloud", simulate="0.3")
    path = renderer.save(wallpaper)

    assert path.name == "year-progress-iphonese-cloud.png"
    assert Image.open(path).size == (750, 1334)


def test_bad_font_bytes_fall_back(renderer):
    wallpaper = build_wallpaper(model="iphonese", style="ink", simulate="0.5")
    data = renderer.to_png(wallpaper.canvas, {"InkCalligraphy": b"not a font"})
    assert Image.open(BytesIO(data)).size == (750, 1334)


@pytest.mark.parametrize("name", ["completed", "today", "pending"])
def test_sprites(name):
    tile = sprite_image(name, 32)
    assert tile.size == (32, 32)
    assert tile.mode == "RGBA"
    assert Image.open(BytesIO(sprite_png(name, 64))).size == (64, 64)


def test_font_loader_returns_none_on_error(monkeypatch):
    def fail(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "get", fail)
    loader = FontLoader({"Delius": "https://fonts.invalid/delius.ttf"}, timeout=1)

    assert asyncio.run(loader.fetch("Delius")) is None
    assert asyncio.run(loader.fetch("Unknown")) is None
    assert asyncio.run(loader.fetch_all(("Delius",))) == {}


def test_font_loader_returns_bytes(monkeypatch):
    class FakeResponse:
        content = b"ttf-bytes"

        def raise_for_status(self):
            pass

    monkeypatch.setattr(requests, "get", lambda url, timeout: FakeResponse())
    loader = FontLoader({"Delius": "https://fonts.invalid/delius.ttf"})

    assert asyncio.run(loader.fetch_all(("Delius",))) == {"Delius": b"ttf-bytes"}


def test_font_loader_times_out(monkeypatch):
    def slow(url, timeout):
        time.sleep(0.5)

    monkeypatch.setattr(requests, "get", slow)
    loader = FontLoader({"Delius": "https://fonts.invalid/delius.ttf"}, timeout=0.05)

    assert asyncio.run(loader.fetch("Delius")) is None
    assert asyncio.run(loader.fetch_all(("Delius",))) == {}


def test_font_loader_http_error(monkeypatch):
    class NotFound:
        content = b"<html>404</html>"

        def raise_for_status(self):
            raise requests.HTTPError("404 Client Error")

    monkeypatch.setattr(requests, "get", lambda url, timeout: NotFound())
    loader = FontLoader({"Delius": "https://fonts.invalid/delius.ttf"})

    assert asyncio.run(loader.fetch("Delius")) is None
    assert asyncio.run(loader.fetch_all(("Delius",))) == {}
