"""Computer agent - deterministic card and color choice."""

from collections import Counter
from typing import Iterable, List, Optional, TypeVar

from unoflip.agent.protocol import Action, DrawCard, PlayCard
from unoflip.engine import Color, DarkColor, GameEngine, Player, Side, is_wild

E = TypeVar("E", Color, DarkColor)


def _most_common(colors: Iterable[Optional[E]], choices: List[E]) -> E:
    """Most frequent color, ties going to the earliest in enum order."""
    counts = Counter(c for c in colors if c is not None)
    best = choices[0]
    for color in choices[1:]:
        if counts[color] > counts[best]:
            best = color
    return best


def choose_color(player: Player) -> Color:
    """The light color the player holds most of."""
    return _most_common((c.color for c in player.hand), list(Color))


def choose_dark_color(player: Player) -> DarkColor:
    """The dark color the player holds most of."""
    return _most_common((c.dark_color for c in player.hand), list(DarkColor))


class ComputerAgent:
    """Plays the engine's preferred card, or draws when nothing fits."""

    def __init__(self, name: str = "computer"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(self, game: GameEngine, player: Player) -> Action:
        if game.wild_stack_active:
            return DrawCard()
        card = game.choose_ai_card(player)
        if card is None:
            return DrawCard()
        color = None
        if is_wild(card, game.side):
            color = choose_color(player) if game.side is Side.LIGHT else choose_dark_color(player)
        return PlayCard(card=card, chosen_color=color)

    def notify(self, message: str) -> None:
        pass
