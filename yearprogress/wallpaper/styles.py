"""Style recipes and per-unit colour rules."""

import math
from typing import Optional

from .models import ShapeKind, StyleRecipe
from .phones import normalize_key

DEFAULT_STYLE = "squares"

# Each flower covers this many days, which keeps the sprite count down
DAYS_PER_FLOWER = 2

FLOWERS_FONT = "Delius"
INK_FONT = "InkCalligraphy"

STYLE_RECIPES: dict[str, StyleRecipe] = {
    recipe.id: recipe
    for recipe in (
        StyleRecipe(
            id="squares",
            name="Squares",
            description="Grid of squares",
            background="#2C2C2E",
            past="#FFFFFF",
            today="#0A84FF",
            future="#48484A",
            text="#0A84FF",
            shape=ShapeKind.SQUARE,
        ),
        StyleRecipe(
            id="dots",
            name="Dots",
            description="Grid of round dots",
            background="#1C1C1E",
            past="#F2F2F7",
            today="#FF9F0A",
            future="#3A3A3C",
            text="#FF9F0A",
            shape=ShapeKind.CIRCLE,
        ),
        StyleRecipe(
            id="blobs",
            name="Blobs",
            description="Soft rounded pebbles",
            background="#F2EFE9",
            past="#3D5A4C",
            today="#E07A5F",
            future="#D8D3C8",
            text="#3D5A4C",
            shape=ShapeKind.BLOB,
            blob_radius=0.32,
        ),
        StyleRecipe(
            id="flowers",
            name="Flowers",
            description="Flowers bloom by progress",
            background="#FAF8F9",
            past="#8E8E93",
            today="#E8A0B0",
            future="#C4C4C6",
            text="#6D6D72",
            shape=ShapeKind.SPRITE,
            font=FLOWERS_FONT,
        ),
        StyleRecipe(
            id="cloud",
            name="Cloud",
            description="Cloud fills by progress",
            background="#B8D8EB",
            past="#7BA7C4",
            today="#7BA7C4",
            future="#FFFFFF",
            text="#4A6D8C",
            shape=ShapeKind.FILL,
        ),
        StyleRecipe(
            id="ink",
            name="Ink",
            description="Calligraphy fills with ink",
            background="#F4F1EA",
            past="#0F0D0A",
            today="#0F0D0A",
            future="#D5D0C7",
            text="#2D2A26",
            shape=ShapeKind.FILL,
            font=INK_FONT,
            rule_color="#B8B0A4",
        ),
    )
}


def resolve_style(style: Optional[str]) -> StyleRecipe:
    """Look up a style recipe, falling back to squares."""
    return STYLE_RECIPES.get(normalize_key(style), STYLE_RECIPES[DEFAULT_STYLE])


def color_for_index(index: int, day_of_year: int, recipe: StyleRecipe) -> str:
    """
    Colour of the unit at a zero-based index.

    Exactly one index (day_of_year - 1) is "today".
    """
    if index < day_of_year - 1:
        return recipe.past
    if index == day_of_year - 1:
        return recipe.today
    return recipe.future


def flower_count(total_days: int) -> int:
    return math.ceil(total_days / DAYS_PER_FLOWER)


def flower_state(unit: int, day_of_year: int, unit_count: int) -> str:
    """
    Classify a flower unit as "pending", "today" or "completed".

    Args:
        unit: Zero-based unit index
        day_of_year: Current day (1-based)
        unit_count: Number of units that represent real days

    Returns:
        Sprite name for the unit
    """
    start = unit * DAYS_PER_FLOWER

    if unit >= unit_count or day_of_year <= start:
        return "pending"
    elif day_of_year <= start + DAYS_PER_FLOWER:
        return "today"
    else:
        return "completed"
