"""Assemble the declarative layout tree for a wallpaper."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from .geometry import (
    compute_cloud,
    compute_grid,
    compute_ink,
    corner_radius,
    ink_text,
    label_size,
    top_inset,
)
from .models import (
    Block,
    Brushstroke,
    Canvas,
    Label,
    PhoneProfile,
    ProgressState,
    Shape,
    ShapeKind,
    Span,
    Sprite,
    StyleRecipe,
    WordFlow,
)
from .noise import brushstroke
from .phones import resolve_phone
from .progress import resolve_progress
from .styles import (
    DAYS_PER_FLOWER,
    color_for_index,
    flower_count,
    flower_state,
    resolve_style,
)

logger = logging.getLogger(__name__)

SPRITE_NAMES = ("completed", "today", "pending")


@dataclass(frozen=True)
class Wallpaper:
    """Everything resolved for one wallpaper request."""
    phone: PhoneProfile
    recipe: StyleRecipe
    progress: ProgressState
    canvas: Canvas

    @property
    def filename(self) -> str:
        return f"year-progress-{self.phone.id}-{self.recipe.id}.png"


def progress_text(progress: ProgressState) -> str:
    return f"{progress.days_left}d left · {progress.percentage}%"


def sprite_url(origin: str, name: str) -> str:
    return f"{origin}/assets/{name}.png"


def compose(
    phone: PhoneProfile,
    recipe: StyleRecipe,
    progress: ProgressState,
    text: Optional[str] = None,
    origin: str = "",
) -> Canvas:
    """
    Build the layout tree for a phone, style and progress.

    Args:
        phone: Target screen
        recipe: Resolved style
        progress: Resolved year progress
        text: Custom text for the ink style
        origin: Base URL used for sprite references

    Returns:
        Canvas describing the whole wallpaper
    """
    if recipe.id == "cloud":
        children = _compose_cloud(phone, recipe, progress)
    elif recipe.id == "ink":
        children = _compose_ink(phone, recipe, progress, text)
    else:
        children = _compose_grid(phone, recipe, progress, origin)

    return Canvas(
        width=phone.width,
        height=phone.height,
        background=recipe.background,
        padding_top=top_inset(phone.height),
        children=children,
        fonts=(recipe.font,) if recipe.font else (),
    )


def _compose_grid(
    phone: PhoneProfile, recipe: StyleRecipe, progress: ProgressState, origin: str
) -> tuple[Union[Block, Label], ...]:
    """Dot grid for square, circle, blob and sprite styles."""
    use_sprites = recipe.shape == ShapeKind.SPRITE
    units = flower_count(progress.total_days) if use_sprites else progress.total_days
    grid = compute_grid(phone.width, units)
    # Cells past this index are padding rows
    colored_cells = units * DAYS_PER_FLOWER if use_sprites else units
    radius = corner_radius(grid.cell_size, recipe.shape.value, recipe.blob_radius)

    cells = []
    for i in range(grid.rows * grid.columns):
        x, y = grid.position(i)

        if i < colored_cells:
            day_index = min(i * DAYS_PER_FLOWER, progress.total_days - 1) if use_sprites else i
            color = color_for_index(day_index, progress.day_of_year, recipe)
        else:
            color = recipe.future

        if use_sprites:
            name = flower_state(i, progress.day_of_year, units)
            cells.append(
                Sprite(
                    x=x,
                    y=y,
                    size=grid.cell_size,
                    name=name,
                    url=sprite_url(origin, name),
                    color=color,
                )
            )
        else:
            cells.append(
                Shape(
                    x=x,
                    y=y,
                    width=grid.cell_size,
                    height=grid.cell_size,
                    color=color,
                    radius=radius,
                )
            )

    return (
        Block(width=grid.width, height=grid.height, children=tuple(cells)),
        Label(
            text=progress_text(progress),
            color=recipe.text,
            size=label_size(phone.width),
            letter_spacing=0.02,
            font=recipe.font,
            margin_top=math.floor(phone.height * 0.035),
        ),
    )


def _compose_cloud(
    phone: PhoneProfile, recipe: StyleRecipe, progress: ProgressState
) -> tuple[Union[Block, Label], ...]:
    """Cloud board that fills from the bottom with a scalloped edge."""
    cloud = compute_cloud(phone.width, phone.height, progress.progress)

    shapes = []
    if cloud.fill_height > 0:
        shapes.append(
            Shape(
                x=0,
                y=cloud.board_height - cloud.fill_height,
                width=cloud.board_width,
                height=cloud.fill_height,
                color=recipe.past,
            )
        )

    for scallop in cloud.scallops:
        shapes.append(
            Shape(
                x=scallop.x,
                y=cloud.scallop_top(scallop),
                width=scallop.size,
                height=scallop.size,
                color=recipe.past,
                radius=scallop.size // 2,
            )
        )

    return (
        Block(
            width=cloud.board_width,
            height=cloud.board_height,
            background=recipe.future,
            radius=cloud.radius,
            clip=True,
            children=tuple(shapes),
        ),
        Label(
            text=progress_text(progress),
            color=recipe.text,
            size=label_size(phone.width),
            letter_spacing=0.04,
            margin_top=math.floor(phone.height * 0.04),
        ),
    )


def _compose_ink(
    phone: PhoneProfile,
    recipe: StyleRecipe,
    progress: ProgressState,
    text: Optional[str],
) -> tuple[Union[Block, Label, WordFlow], ...]:
    """Calligraphy text that darkens character by character."""
    ink = compute_ink(phone.width, ink_text(text), progress.progress)
    rule_color = recipe.rule_color or recipe.future

    words = []
    for word in ink.words:
        spans = []
        if word.filled:
            spans.append(Span(word.filled, recipe.past))
        if word.unfilled:
            spans.append(Span(word.unfilled, recipe.future))
        words.append(tuple(spans))

    # Three strokes centred under the bottom rule
    strokes = [brushstroke(i, ink.font_size) for i in range(3)]
    flourish_height = max(s.height for s in strokes)
    total = sum(s.width for s in strokes) + ink.word_spacing * (len(strokes) - 1)
    x = (ink.board_width - total) // 2
    flourish = []
    for stroke in strokes:
        flourish.append(
            Brushstroke(
                x=x + stroke.width // 2,
                y=flourish_height // 2,
                width=stroke.width,
                height=stroke.height,
                angle=stroke.angle,
                color=rule_color,
            )
        )
        x += stroke.width + ink.word_spacing

    return (
        Block(
            width=ink.board_width,
            height=ink.rule_height,
            background=rule_color,
            margin_bottom=ink.rule_margin,
        ),
        WordFlow(
            width=ink.board_width,
            words=tuple(words),
            size=ink.font_size,
            word_spacing=ink.word_spacing,
            line_spacing=ink.line_spacing,
            font=recipe.font,
        ),
        Block(
            width=ink.board_width,
            height=ink.rule_height,
            background=rule_color,
            margin_top=ink.rule_margin,
        ),
        Block(
            width=ink.board_width,
            height=flourish_height,
            margin_top=ink.rule_margin // 2,
            children=tuple(flourish),
        ),
        Label(
            text=progress_text(progress),
            color=recipe.text,
            size=label_size(phone.width),
            letter_spacing=0.04,
            font=recipe.font,
            margin_top=math.floor(phone.height * 0.035),
        ),
    )


def build_wallpaper(
    model: Optional[str] = None,
    style: Optional[str] = None,
    text: Optional[str] = None,
    simulate: Union[str, float, None] = None,
    now: Optional[datetime] = None,
    origin: str = "",
) -> Wallpaper:
    """
    Resolve raw request parameters into a composed wallpaper.

    Unknown models and styles fall back to defaults; this never raises
    for any parameter values.
    """
    phone = resolve_phone(model)
    recipe = resolve_style(style)
    progress = resolve_progress(simulate, now)

    logger.info(
        f"Composing {recipe.id} wallpaper for {phone.id} "
        f"(day {progress.day_of_year}/{progress.total_days}, {progress.percentage}%)"
    )

    canvas = compose(phone, recipe, progress, text=text, origin=origin)
    return Wallpaper(phone=phone, recipe=recipe, progress=progress, canvas=canvas)
