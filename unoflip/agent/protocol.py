"""Agent protocol - interface that computer and human agents implement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Union

from unoflip.engine import Card, Color, DarkColor

if TYPE_CHECKING:
    from unoflip.engine import GameEngine, Player


@dataclass
class PlayCard:
    """Action: play a card. Wild faces need chosen_color for the active side."""

    card: Card
    chosen_color: Optional[Union[Color, DarkColor]] = None


@dataclass
class DrawCard:
    """Action: draw (or keep drawing during a wild stack) and pass."""

    pass


@dataclass
class Undo:
    """Action: take back the last turn."""

    pass


@dataclass
class Redo:
    """Action: re-apply an undone turn."""

    pass


@dataclass
class SaveGame:
    """Action: write the game to disk. path=None uses the configured default."""

    path: Optional[str] = None


@dataclass
class Quit:
    """Action: stop the match."""

    pass


Action = Union[PlayCard, DrawCard, Undo, Redo, SaveGame, Quit]


class AgentProtocol(Protocol):
    """Interface for UNO Flip-playing agents."""

    def get_action(self, game: "GameEngine", player: "Player") -> Action:
        """Choose what ``player`` does on their turn.

        Args:
            game: The running engine. Agents must only read from it.
            player: The seat being played, always ``game.current_player``.

        Returns:
            The chosen action. Illegal plays are rejected by the runner and the
            agent is asked again.
        """
        ...

    def notify(self, message: str) -> None:
        """Receive a status line from the runner."""
        ...
