"""Data models for wallpaper composition."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ShapeKind(str, Enum):
    """How a style draws its progress units."""

    CIRCLE = "circle"
    BLOB = "blob"
    SQUARE = "square"
    SPRITE = "sprite"
    FILL = "fill"


@dataclass(frozen=True)
class PhoneProfile:
    """Screen size of a supported phone model."""
    id: str
    name: str
    width: int
    height: int


@dataclass(frozen=True)
class ProgressState:
    """Year progress for a single request."""
    year: int
    day_of_year: int
    total_days: int
    progress: float
    days_left: int
    percentage: int


@dataclass(frozen=True)
class StyleRecipe:
    """Palette and shape policy for a visual style."""
    id: str
    name: str
    description: str
    background: str
    past: str
    today: str
    future: str
    text: str
    shape: ShapeKind
    blob_radius: Optional[float] = None
    font: Optional[str] = None
    rule_color: Optional[str] = None


# Layout tree nodes. Positions of Shape/Sprite/Brushstroke are relative to
# the top-left corner of the Block that contains them.


@dataclass(frozen=True)
class Shape:
    """Filled rectangle; a radius of half the side makes it a circle."""
    x: int
    y: int
    width: int
    height: int
    color: str
    radius: float = 0


@dataclass(frozen=True)
class Sprite:
    """Image cell referencing one of the flower sprites."""
    x: int
    y: int
    size: int
    name: str
    url: str
    color: str


@dataclass(frozen=True)
class Brushstroke:
    """Rotated ink stroke centred on (x, y)."""
    x: int
    y: int
    width: int
    height: int
    angle: float
    color: str


@dataclass(frozen=True)
class Block:
    """Fixed-size box in the canvas stack."""
    width: int
    height: int
    background: Optional[str] = None
    radius: int = 0
    clip: bool = False
    margin_top: int = 0
    margin_bottom: int = 0
    children: tuple[Union[Shape, Sprite, Brushstroke], ...] = ()


@dataclass(frozen=True)
class Label:
    """Single line of centred text."""
    text: str
    color: str
    size: int
    letter_spacing: float = 0.0
    font: Optional[str] = None
    margin_top: int = 0
    margin_bottom: int = 0


@dataclass(frozen=True)
class Span:
    text: str
    color: str


@dataclass(frozen=True)
class InkWord:
    """A word of the ink text and where the progress boundary cuts it."""
    text: str
    start: int
    end: int
    split: int

    @property
    def filled(self) -> str:
        return self.text[: self.split]

    @property
    def unfilled(self) -> str:
        return self.text[self.split :]


@dataclass(frozen=True)
class WordFlow:
    """Words wrapped left to right inside a fixed width."""
    width: int
    words: tuple[tuple[Span, ...], ...]
    size: int
    word_spacing: int
    line_spacing: int
    line_height: float = 1.6
    font: Optional[str] = None
    margin_top: int = 0
    margin_bottom: int = 0


Node = Union[Block, Label, WordFlow]


@dataclass(frozen=True)
class Canvas:
    """Root of the layout tree handed to the renderer."""
    width: int
    height: int
    background: str
    padding_top: int
    children: tuple[Node, ...] = ()
    fonts: tuple[str, ...] = field(default=())
