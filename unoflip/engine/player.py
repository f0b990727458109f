"""Player entity."""

from dataclasses import dataclass, field
from typing import List, Optional

from unoflip.engine.card import Card


@dataclass(eq=False)
class Player:
    """A seat at the table: display name, control type and hand.

    The hand keeps acquisition order, which is also display order.
    Players compare by identity; names are not required to be unique.
    """

    name: str
    is_ai: bool = False
    hand: List[Card] = field(default_factory=list)

    def add_card(self, card: Optional[Card]) -> None:
        if card is not None:
            self.hand.append(card)

    def __str__(self) -> str:
        kind = "AI" if self.is_ai else "human"
        return f"{self.name} ({kind}, {len(self.hand)} cards)"
