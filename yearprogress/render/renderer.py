"""Wallpaper image renderer."""

import logging
import math
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFont

from yearprogress.wallpaper.layout import Wallpaper
from yearprogress.wallpaper.models import (
    Block,
    Brushstroke,
    Canvas,
    Label,
    Shape,
    Sprite,
    WordFlow,
)

logger = logging.getLogger(__name__)

# Sprite art: (petal, centre, ring)
SPRITE_COLORS = {
    "completed": ("#E8A0B0", "#F6D365", None),
    "today": ("#F06C8C", "#F6D365", "#E8A0B0"),
    "pending": ("#C4C4C6", "#DADADC", None),
}

SUPERSAMPLE = 4


def _draw_flower(draw: ImageDraw.ImageDraw, s: int, petal: str, centre: str):
    c = s / 2
    r = s * 0.2
    d = s * 0.2
    for k in range(5):
        a = math.radians(k * 72 - 90)
        px, py = c + d * math.cos(a), c + d * math.sin(a)
        draw.ellipse([px - r, py - r, px + r, py + r], fill=petal)
    cr = s * 0.12
    draw.ellipse([c - cr, c - cr, c + cr, c + cr], fill=centre)


@lru_cache(maxsize=64)
def sprite_image(name: str, size: int, fallback: str = "#C4C4C6") -> Image.Image:
    """
    Draw one flower sprite as an RGBA tile.

    Completed days are full blooms, today is a bloom inside a ring and
    pending days are closed buds. Unknown names become a plain dot.
    """
    s = max(1, size) * SUPERSAMPLE
    tile = Image.new("RGBA", (s, s), (0, 0, 0, 0))
    draw = ImageDraw.Draw(tile)

    if name not in SPRITE_COLORS:
        draw.ellipse([0, 0, s - 1, s - 1], fill=fallback)
    else:
        petal, centre, ring = SPRITE_COLORS[name]
        if name == "pending":
            r = s * 0.2
            c = s / 2
            draw.ellipse([c - r, c - r * 1.2, c + r, c + r * 1.2], fill=petal)
            draw.ellipse([c - r * 0.4, c - r * 0.7, c + r * 0.1, c - r * 0.2], fill=centre)
        else:
            if ring:
                draw.ellipse(
                    [s * 0.02, s * 0.02, s * 0.98, s * 0.98],
                    outline=ring,
                    width=max(1, int(s * 0.06)),
                )
            _draw_flower(draw, s, petal, centre)

    return tile.resize((max(1, size), max(1, size)), Image.Resampling.LANCZOS)


class WallpaperRenderer:
    """Rasterizes a wallpaper layout tree with Pillow."""

    def __init__(self, output_dir: str = "static/images"):
        """
        Initialize renderer.

        Args:
            output_dir: Directory for saved wallpapers
        """
        self.output_dir = Path(output_dir)
        self.system_font = self._find_system_font()

    def _find_system_font(self) -> Optional[str]:
        """Find a TrueType font to use when no custom font is available."""
        font_paths = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/System/Library/Fonts/Helvetica.ttc",  # macOS
        ]
        for path in font_paths:
            if Path(path).exists():
                logger.info(f"Using system font {path}")
                return path
        return None

    def _font(self, name: Optional[str], size: int, fonts: dict[str, bytes]):
        """Load a font at a size, falling back to system then default fonts."""
        if name and name in fonts:
            try:
                return ImageFont.truetype(BytesIO(fonts[name]), size)
            except OSError as e:
                logger.warning(f"Could not load font {name}: {e}, using default")

        if self.system_font:
            try:
                return ImageFont.truetype(self.system_font, size)
            except OSError as e:
                logger.warning(f"Could not load system font: {e}, using default")

        return ImageFont.load_default(size)

    def render(self, canvas: Canvas, fonts: Optional[dict[str, bytes]] = None) -> Image.Image:
        """
        Draw the layout tree.

        Children are stacked top to bottom below the canvas padding and
        centred horizontally.

        Args:
            canvas: Layout tree root
            fonts: Custom font data keyed by font name

        Returns:
            RGB image of canvas.width x canvas.height
        """
        fonts = fonts or {}
        image = Image.new("RGB", (canvas.width, canvas.height), canvas.background)
        draw = ImageDraw.Draw(image)

        y = canvas.padding_top
        for node in canvas.children:
            y += node.margin_top

            if isinstance(node, Block):
                self._draw_block(image, node, (canvas.width - node.width) // 2, y)
                height = node.height
            elif isinstance(node, Label):
                height = self._draw_label(draw, node, canvas.width, y, fonts)
            elif isinstance(node, WordFlow):
                height = self._draw_word_flow(
                    draw, node, (canvas.width - node.width) // 2, y, fonts
                )
            else:
                raise TypeError(f"Unknown layout node: {type(node).__name__}")

            y += height + node.margin_bottom

        return image

    def to_png(self, canvas: Canvas, fonts: Optional[dict[str, bytes]] = None) -> bytes:
        """Render and encode as PNG."""
        buffer = BytesIO()
        self.render(canvas, fonts).save(buffer, "PNG")
        return buffer.getvalue()

    def save(self, wallpaper: Wallpaper, fonts: Optional[dict[str, bytes]] = None) -> Path:
        """Render a wallpaper into the output directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / wallpaper.filename

        self.render(wallpaper.canvas, fonts).save(file_path, "PNG")
        logger.info(f"Saved wallpaper to {file_path}")

        return file_path

    def _draw_block(self, image: Image.Image, block: Block, x: int, y: int):
        """Draw a block; clipped blocks are composed on their own layer."""
        if not block.clip:
            draw = ImageDraw.Draw(image)
            if block.background:
                draw.rectangle(
                    [x, y, x + block.width - 1, y + block.height - 1],
                    fill=block.background,
                )
            self._draw_children(image, block, x, y)
            return

        background = (
            ImageColor.getcolor(block.background, "RGBA") if block.background else (0, 0, 0, 0)
        )
        board = Image.new("RGBA", (block.width, block.height), background)
        self._draw_children(board, block, 0, 0)

        mask = Image.new("L", board.size, 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            [0, 0, block.width - 1, block.height - 1], radius=block.radius, fill=255
        )
        mask = ImageChops.multiply(mask, board.getchannel("A"))
        image.paste(board.convert("RGB"), (x, y), mask)

    def _draw_children(self, image: Image.Image, block: Block, ox: int, oy: int):
        draw = ImageDraw.Draw(image)
        for child in block.children:
            if isinstance(child, Shape):
                self._draw_shape(draw, child, ox, oy)
            elif isinstance(child, Sprite):
                tile = sprite_image(child.name, child.size, child.color)
                image.paste(tile, (ox + child.x, oy + child.y), tile)
            elif isinstance(child, Brushstroke):
                self._draw_brushstroke(draw, child, ox, oy)

    def _draw_shape(self, draw: ImageDraw.ImageDraw, shape: Shape, ox: int, oy: int):
        if shape.width <= 0 or shape.height <= 0:
            return

        box = [
            ox + shape.x,
            oy + shape.y,
            ox + shape.x + shape.width - 1,
            oy + shape.y + shape.height - 1,
        ]
        if shape.radius * 2 >= min(shape.width, shape.height) - 1:
            draw.ellipse(box, fill=shape.color)
        elif shape.radius > 0:
            draw.rounded_rectangle(box, radius=int(shape.radius), fill=shape.color)
        else:
            draw.rectangle(box, fill=shape.color)

    def _draw_brushstroke(
        self, draw: ImageDraw.ImageDraw, stroke: Brushstroke, ox: int, oy: int
    ):
        """Draw a stroke as a rectangle rotated about its centre."""
        cx, cy = ox + stroke.x, oy + stroke.y
        hw, hh = stroke.width / 2, stroke.height / 2
        a = math.radians(stroke.angle)
        cos_a, sin_a = math.cos(a), math.sin(a)

        points = [
            (cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a)
            for dx, dy in [(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)]
        ]
        draw.polygon(points, fill=stroke.color)

    def _draw_label(
        self,
        draw: ImageDraw.ImageDraw,
        label: Label,
        canvas_width: int,
        y: int,
        fonts: dict[str, bytes],
    ) -> int:
        """Draw centred text with letter spacing. Returns the height used."""
        font = self._font(label.font, label.size, fonts)
        spacing = label.letter_spacing * label.size

        widths = [draw.textlength(ch, font=font) for ch in label.text]
        total = sum(widths) + spacing * max(0, len(widths) - 1)

        x = (canvas_width - total) / 2
        for ch, w in zip(label.text, widths):
            draw.text((x, y), ch, fill=label.color, font=font)
            x += w + spacing

        bbox = draw.textbbox((0, 0), label.text, font=font)
        return bbox[3]

    def _draw_word_flow(
        self,
        draw: ImageDraw.ImageDraw,
        flow: WordFlow,
        x: int,
        y: int,
        fonts: dict[str, bytes],
    ) -> int:
        """
        Wrap words into lines and draw each span in its colour.

        Returns:
            Height used by all lines, line spacing included
        """
        font = self._font(flow.font, flow.size, fonts)
        line_px = round(flow.size * flow.line_height)

        # Greedy wrap: a word and its trailing spacing must fit on the line
        lines: list[list[tuple]] = [[]]
        used = 0
        for spans in flow.words:
            width = sum(draw.textlength(span.text, font=font) for span in spans)
            outer = width + flow.word_spacing
            if lines[-1] and used + outer > flow.width:
                lines.append([])
                used = 0
            lines[-1].append(spans)
            used += outer

        if not lines[-1]:
            return 0

        line_top = y
        for line in lines:
            cursor = x
            text_y = line_top + (line_px - flow.size) // 2
            for spans in line:
                for span in spans:
                    draw.text((cursor, text_y), span.text, fill=span.color, font=font)
                    cursor += draw.textlength(span.text, font=font)
                cursor += flow.word_spacing
            line_top += line_px + flow.line_spacing

        return line_top - y


def sprite_png(name: str, size: int) -> bytes:
    """Encode a flower sprite as PNG."""
    buffer = BytesIO()
    sprite_image(name, size).save(buffer, "PNG")
    return buffer.getvalue()


async def demo_render():
    """Demo: Render every style for one phone into the output directory."""
    from dotenv import load_dotenv

    from yearprogress.config import settings
    from yearprogress.render.fonts import FontLoader
    from yearprogress.wallpaper.layout import build_wallpaper
    from yearprogress.wallpaper.styles import STYLE_RECIPES

    load_dotenv()

    loader = FontLoader.from_settings(settings)
    renderer = WallpaperRenderer(settings.output_dir)

    for style in STYLE_RECIPES:
        wallpaper = build_wallpaper(model="iphone16pro", style=style)
        fonts = await loader.fetch_all(wallpaper.canvas.fonts)
        file_path = renderer.save(wallpaper, fonts)
        print(f"{style:>8}: {file_path}")

    print("\nView them with: xdg-open <file>")


if __name__ == "__main__":
    import asyncio

    logging.basicConfig(level=logging.INFO)
    asyncio.run(demo_render())
