"""UNO Flip rule tables: legality, scoring and card classification.

Every function here is pure and parameterized by the active side.
"""

from typing import Dict, Optional

from unoflip.engine.card import DARK_WILDS, LIGHT_WILDS, Card, DarkValue, LightValue, Side

LIGHT_NUMBERS = frozenset({
    LightValue.ONE, LightValue.TWO, LightValue.THREE,
    LightValue.FOUR, LightValue.FIVE, LightValue.SIX,
    LightValue.SEVEN, LightValue.EIGHT, LightValue.NINE,
})

DARK_NUMBERS = frozenset({
    DarkValue.ONE, DarkValue.TWO, DarkValue.THREE,
    DarkValue.FOUR, DarkValue.FIVE, DarkValue.SIX,
    DarkValue.SEVEN, DarkValue.EIGHT, DarkValue.NINE,
})

LIGHT_SCORES: Dict[LightValue, int] = {
    LightValue.ONE: 1,
    LightValue.TWO: 2,
    LightValue.THREE: 3,
    LightValue.FOUR: 4,
    LightValue.FIVE: 5,
    LightValue.SIX: 6,
    LightValue.SEVEN: 7,
    LightValue.EIGHT: 8,
    LightValue.NINE: 9,
    LightValue.DRAW_ONE: 10,
    LightValue.SKIP: 20,
    LightValue.REVERSE: 20,
    LightValue.WILD: 40,
    LightValue.WILD_DRAW_TWO: 50,
    # A light flip is worth nothing.
    LightValue.FLIP: 0,
}

DARK_SCORES: Dict[DarkValue, int] = {
    DarkValue.ONE: 1,
    DarkValue.TWO: 2,
    DarkValue.THREE: 3,
    DarkValue.FOUR: 4,
    DarkValue.FIVE: 5,
    DarkValue.SIX: 6,
    DarkValue.SEVEN: 7,
    DarkValue.EIGHT: 8,
    DarkValue.NINE: 9,
    DarkValue.DRAW_FIVE: 20,
    DarkValue.FLIP: 20,
    DarkValue.SKIP_ALL: 30,
    DarkValue.WILD_STACK: 60,
}


def is_wild(card: Card, side: Side) -> bool:
    """True if the card's active face is a wild value."""
    if side is Side.LIGHT:
        return card.value in LIGHT_WILDS
    return card.dark_value in DARK_WILDS


def is_number_card(card: Card, side: Side) -> bool:
    """True if the active face is a plain numeral (1-9)."""
    if side is Side.LIGHT:
        return card.value in LIGHT_NUMBERS
    return card.dark_value in DARK_NUMBERS


def is_action_card(card: Card, side: Side) -> bool:
    """True if the active face is an action or wild value."""
    return not is_number_card(card, side)


def is_playable(card: Card, top: Optional[Card], side: Side) -> bool:
    """Check if ``card`` may be played on ``top``.

    Wilds always match. Otherwise the active colors must both be set and equal,
    or the active values must be equal. Before the first round there is no top
    card and anything goes.
    """
    if top is None:
        return True
    if is_wild(card, side):
        return True
    value, color = card.face(side)
    top_value, top_color = top.face(side)
    same_color = color is not None and top_color is not None and color == top_color
    return same_color or value == top_value


def score_value(card: Card, side: Side) -> int:
    """Points a card left in a loser's hand is worth to the round winner."""
    if side is Side.LIGHT:
        return LIGHT_SCORES[card.value]
    return DARK_SCORES[card.dark_value]
