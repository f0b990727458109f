"""Card, color, value and side types for UNO Flip."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Side(str, Enum):
    """Which face of the deck is in play."""

    LIGHT = "light"
    DARK = "dark"


class Color(str, Enum):
    """Light-side card colors."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"


class DarkColor(str, Enum):
    """Dark-side card colors."""

    ORANGE = "orange"
    PINK = "pink"
    PURPLE = "purple"
    TEAL = "teal"


class LightValue(str, Enum):
    """Light-side card values."""

    ONE = "one"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"
    DRAW_ONE = "draw_one"
    REVERSE = "reverse"
    SKIP = "skip"
    WILD = "wild"
    WILD_DRAW_TWO = "wild_draw_two"
    FLIP = "flip"


class DarkValue(str, Enum):
    """Dark-side card values."""

    ONE = "one"
    TWO = "two"
    THREE = "three"
    FOUR = "four"
    FIVE = "five"
    SIX = "six"
    SEVEN = "seven"
    EIGHT = "eight"
    NINE = "nine"
    FLIP = "flip"
    DRAW_FIVE = "draw_five"
    SKIP_ALL = "skip_all"
    WILD_STACK = "wild_stack"


LIGHT_WILDS = frozenset({LightValue.WILD, LightValue.WILD_DRAW_TWO})
DARK_WILDS = frozenset({DarkValue.WILD_STACK})

AnyColor = Union[Color, DarkColor]
AnyValue = Union[LightValue, DarkValue]


@dataclass
class Card:
    """A double-sided UNO Flip card.

    Both faces exist at once; which one counts depends on the game's side.
    Wild faces (wild / wild_draw_two on light, wild_stack on dark) have no
    color until one is chosen at play time. Every other face needs a color.
    """

    color: Optional[Color]
    value: LightValue
    dark_color: Optional[DarkColor]
    dark_value: DarkValue

    def __post_init__(self) -> None:
        if self.value not in LIGHT_WILDS and self.color is None:
            raise ValueError(f"Non-wild light face needs a color: {self.value.value}")
        if self.dark_value not in DARK_WILDS and self.dark_color is None:
            raise ValueError(f"Non-wild dark face needs a color: {self.dark_value.value}")

    def face(self, side: Side) -> Tuple[AnyValue, Optional[AnyColor]]:
        """Return the (value, color) pair active on ``side``."""
        if side is Side.LIGHT:
            return self.value, self.color
        return self.dark_value, self.dark_color

    def set_color(self, color: Color) -> None:
        """Choose the light-side color (wild plays)."""
        if color is None:
            raise ValueError("A color must be chosen")
        self.color = Color(color)

    def set_dark_color(self, color: DarkColor) -> None:
        """Choose the dark-side color (wild stack plays)."""
        if color is None:
            raise ValueError("A dark color must be chosen")
        self.dark_color = DarkColor(color)

    def __str__(self) -> str:
        light = self.value.value if self.color is None else f"{self.color.value}_{self.value.value}"
        if self.dark_color is None:
            dark = self.dark_value.value
        else:
            dark = f"{self.dark_color.value}_{self.dark_value.value}"
        return f"{light}/{dark}"
