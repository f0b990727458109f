"""Mutable game state: the unit that history and save files capture."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from unoflip.engine.card import Card, DarkColor, Side
from unoflip.engine.player import Player
from unoflip.engine.turns import TurnTracker


@dataclass
class GameState:
    """Everything needed to resume a game.

    Snapshots are deep copies of this object; nothing outside it (listeners,
    RNG, history) is captured.
    """

    players: List[Player] = field(default_factory=list)
    turn: TurnTracker = field(default_factory=TurnTracker)
    top_card: Optional[Card] = None
    side: Side = Side.LIGHT
    wild_stack_active: bool = False
    wild_stack_color: Optional[DarkColor] = None
    scores: Dict[str, int] = field(default_factory=dict)  # player name -> match points

    @property
    def current_player_index(self) -> int:
        return self.turn.index

    @property
    def direction(self) -> int:
        return self.turn.direction

    def roster(self) -> List[Tuple[str, bool]]:
        return [(p.name, p.is_ai) for p in self.players]

    def restore(self, other: "GameState") -> None:
        """Overwrite this state in place with ``other``, adopting its objects.

        When the roster is unchanged the existing Player objects are kept and
        only their hands are replaced, so references held by callers stay live.
        ``other`` must not be used afterwards.
        """
        if self.roster() == other.roster():
            for mine, theirs in zip(self.players, other.players):
                mine.hand[:] = theirs.hand
        else:
            self.players = other.players
        self.turn = other.turn
        self.top_card = other.top_card
        self.side = other.side
        self.wild_stack_active = other.wild_stack_active
        self.wild_stack_color = other.wild_stack_color
        self.scores = dict(other.scores)
