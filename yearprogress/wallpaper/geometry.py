"""Layout math for the grid, cloud and ink styles.

All pixel sizes are derived from the phone's width/height and floored to
integers, except where noted as rounded.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from .models import InkWord
from .noise import jitter
from .progress import round_half_up

COLS = 20
EXTRA_ROWS = 2
GAP_RATIO = 0.35
GRID_WIDTH_RATIO = 0.78

TOP_INSET_RATIO = 0.40
LABEL_SIZE_RATIO = 0.03

INK_DEFAULT_TEXT = "Every day is a fresh page. Write something worth reading."
INK_MAX_CHARS = 200

_WORD = re.compile(r"\S+")


@dataclass(frozen=True)
class GridGeometry:
    """Sizes of the dot grid."""
    columns: int
    rows: int
    cell_size: int
    gap: int
    width: int
    height: int

    def position(self, index: int) -> tuple[int, int]:
        """Top-left corner of a cell relative to the grid."""
        step = self.cell_size + self.gap
        return (index % self.columns) * step, (index // self.columns) * step


@dataclass(frozen=True)
class Scallop:
    """One circular bump along the cloud's fill edge."""
    x: int
    size: int
    y_shift: int


@dataclass(frozen=True)
class CloudGeometry:
    board_width: int
    board_height: int
    radius: int
    scallop_diameter: int
    scallop_step: int
    headroom: int
    fill_height: int
    scallops: tuple[Scallop, ...]

    def scallop_top(self, scallop: Scallop) -> int:
        """Top edge of a scallop measured from the top of the board."""
        bottom = self.fill_height - scallop.size // 2 + scallop.y_shift
        return self.board_height - bottom - scallop.size


@dataclass(frozen=True)
class InkGeometry:
    words: tuple[InkWord, ...]
    boundary: int
    font_size: int
    board_width: int
    word_spacing: int
    line_spacing: int
    rule_height: int
    rule_margin: int


def top_inset(height: int) -> int:
    return math.floor(height * TOP_INSET_RATIO)


def label_size(width: int) -> int:
    return round_half_up(width * LABEL_SIZE_RATIO)


def compute_grid(width: int, unit_count: int) -> GridGeometry:
    """
    Size a COLS-wide grid to about 78% of the screen width.

    Args:
        width: Screen width in pixels
        unit_count: Number of cells that carry meaning (days or flowers)

    Returns:
        GridGeometry with EXTRA_ROWS of padding rows at the bottom
    """
    grid_width = math.floor(width * GRID_WIDTH_RATIO)
    cell_size = max(1, math.floor(grid_width / (COLS * (1 + GAP_RATIO) - GAP_RATIO)))
    gap = math.floor(cell_size * GAP_RATIO)
    rows = math.ceil(unit_count / COLS) + EXTRA_ROWS

    return GridGeometry(
        columns=COLS,
        rows=rows,
        cell_size=cell_size,
        gap=gap,
        width=COLS * cell_size + (COLS - 1) * gap,
        height=rows * cell_size + (rows - 1) * gap,
    )


def corner_radius(cell_size: int, shape: str, blob_radius: Optional[float] = None) -> float:
    if shape == "square":
        return 0
    if shape == "blob":
        return math.floor(cell_size * (blob_radius if blob_radius is not None else 0.5))
    return cell_size / 2


def compute_cloud(width: int, height: int, progress: float) -> CloudGeometry:
    """
    Size the cloud board and its fill.

    Below 100% the fill leaves headroom so the scallops stay inside the
    board. At 100% the board is filled flush and the scallops sit on the
    top edge.
    """
    board_width = math.floor(width * 0.72)
    board_height = math.floor(height * 0.36)
    diameter = math.floor(board_width * 0.105)
    step = max(1, math.floor(diameter * 0.58))
    count = math.ceil(board_width / step) + 2
    headroom = math.floor(diameter * 0.65)

    if progress >= 1:
        fill_height = board_height
    else:
        fill_height = max(0, math.floor((board_height - headroom) * progress))

    scallops = []
    if fill_height > 0:
        for i in range(count):
            size = math.floor(diameter * (0.82 + 0.18 * jitter(i)))
            scallops.append(
                Scallop(
                    x=i * step - math.floor(diameter * 0.25),
                    size=size,
                    y_shift=math.floor(size * 0.14 * jitter(i + 101)),
                )
            )

    return CloudGeometry(
        board_width=board_width,
        board_height=board_height,
        radius=math.floor(board_width * 0.018),
        scallop_diameter=diameter,
        scallop_step=step,
        headroom=headroom,
        fill_height=fill_height,
        scallops=tuple(scallops),
    )


def ink_text(raw: Optional[str]) -> str:
    """Truncate and trim the custom text, or use the default sentence."""
    text = (raw or "")[:INK_MAX_CHARS].strip()
    return text or INK_DEFAULT_TEXT


def split_words(text: str, boundary: int) -> tuple[InkWord, ...]:
    """
    Split text into words and mark how much of each lies before the boundary.

    Args:
        text: Full ink text
        boundary: Number of characters of text that are "filled"

    Returns:
        Words with their offsets in text and a split index into the word
    """
    words = []
    for match in _WORD.finditer(text):
        start, end = match.start(), match.end()
        if boundary >= end:
            split = end - start
        elif boundary <= start:
            split = 0
        else:
            split = boundary - start
        words.append(InkWord(text=match.group(), start=start, end=end, split=split))
    return tuple(words)


def compute_ink(width: int, text: str, progress: float) -> InkGeometry:
    """Lay out the ink text; longer texts get a smaller font."""
    boundary = round_half_up(progress * len(text))
    words = split_words(text, boundary)

    if len(words) <= 12:
        size_ratio = 0.065
    elif len(words) <= 30:
        size_ratio = 0.050
    else:
        size_ratio = 0.040

    font_size = round_half_up(width * size_ratio)

    return InkGeometry(
        words=words,
        boundary=boundary,
        font_size=font_size,
        board_width=math.floor(width * 0.82),
        word_spacing=round_half_up(font_size * 0.45),
        line_spacing=round_half_up(font_size * 0.50),
        rule_height=max(2, round_half_up(width * 0.002)),
        rule_margin=math.floor(font_size * 0.9),
    )
