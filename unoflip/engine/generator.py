"""Random card generation.

There is no physical deck: every draw produces a fresh card whose light and
dark faces are chosen independently and uniformly.
"""

import random
from typing import List, Optional

from unoflip.engine.card import DARK_WILDS, LIGHT_WILDS, Card, Color, DarkColor, DarkValue, LightValue

_LIGHT_VALUES = list(LightValue)
_DARK_VALUES = list(DarkValue)
_LIGHT_COLORS = list(Color)
_DARK_COLORS = list(DarkColor)


class CardGenerator:
    """Produces uniformly random cards, optionally from a seeded RNG."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def draw(self) -> Card:
        value = self._rng.choice(_LIGHT_VALUES)
        color = None if value in LIGHT_WILDS else self._rng.choice(_LIGHT_COLORS)
        dark_value = self._rng.choice(_DARK_VALUES)
        dark_color = None if dark_value in DARK_WILDS else self._rng.choice(_DARK_COLORS)
        return Card(color=color, value=value, dark_color=dark_color, dark_value=dark_value)

    def draw_many(self, count: int) -> List[Card]:
        return [self.draw() for _ in range(count)]
