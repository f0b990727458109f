"""Turn pointer and play direction."""

from dataclasses import dataclass

from unoflip.engine.errors import GameStateError

CLOCKWISE = 1
COUNTER_CLOCKWISE = -1


@dataclass
class TurnTracker:
    """Current player index and rotation direction.

    All moves wrap modulo the player count, which callers pass in so the
    tracker never holds a reference to the roster.
    """

    index: int = 0
    direction: int = CLOCKWISE

    def _step(self, steps: int, num_players: int) -> int:
        if num_players <= 0:
            raise GameStateError("No players in the game")
        return (self.index + steps * self.direction) % num_players

    def advance(self, num_players: int) -> None:
        self.index = self._step(1, num_players)

    def skip(self, num_players: int) -> None:
        """Move two seats, skipping exactly one player."""
        self.index = self._step(2, num_players)

    def reverse(self) -> None:
        self.direction = -self.direction

    def peek_next(self, num_players: int) -> int:
        """Index of the next player in the current direction, without moving."""
        return self._step(1, num_players)

    def reset(self) -> None:
        self.index = 0
        self.direction = CLOCKWISE
