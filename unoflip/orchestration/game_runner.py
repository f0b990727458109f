"""Turn loop that drives the engine the way a table controller would."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional

from unoflip.agent.protocol import DrawCard, PlayCard, Quit, Redo, SaveGame, Undo
from unoflip.engine import GameEngine, Player

if TYPE_CHECKING:
    from unoflip.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """Result of one round."""

    winner: Optional[str]
    points: int
    num_turns: int
    match_over: bool = False
    quit: bool = False


@dataclass
class MatchResult:
    """Result of a match (rounds until someone reaches the target score)."""

    winner: Optional[str]
    scores: Dict[str, int]
    rounds: int
    quit: bool = False
    round_results: list = field(default_factory=list)


class GameRunner:
    """Runs rounds of UNO Flip to completion.

    Each completed turn is one undoable user action on the engine. Undo and
    redo skip over computer turns so a human lands back on their own turn.
    """

    def __init__(
        self,
        game: GameEngine,
        agents: Dict[str, "AgentProtocol"],
        save_path: Optional[str] = None,
        max_turns: int = 5000,
        echo: Optional[Callable[[str], None]] = None,
    ):
        missing = [p.name for p in game.players if p.name not in agents]
        if missing:
            raise ValueError(f"No agent for players: {', '.join(missing)}")
        self._game = game
        self._agents = agents
        self._save_path = save_path
        self._max_turns = max_turns
        self._echo = echo or logger.info

    def run(self, deal: bool = True) -> MatchResult:
        """Play rounds until the match ends or a player quits.

        Args:
            deal: Start with a fresh round. Pass False to continue a loaded game.
        """
        game = self._game
        if deal or game.top_card is None:
            game.new_round()
        results = []
        while True:
            result = self.play_round()
            results.append(result)
            if result.quit or result.winner is None:
                return MatchResult(
                    winner=None,
                    scores=game.scores,
                    rounds=len(results),
                    quit=result.quit,
                    round_results=results,
                )
            self._echo(f"Round over: {result.winner} wins the round and gets {result.points} points.")
            if result.match_over:
                self._echo(f"Game over: {result.winner} wins the game.")
                return MatchResult(
                    winner=result.winner,
                    scores=game.scores,
                    rounds=len(results),
                    round_results=results,
                )
            game.new_round()

    def play_round(self) -> RoundResult:
        """Play the current round until someone empties their hand."""
        game = self._game
        num_turns = 0
        attempts = 0
        while num_turns < self._max_turns and attempts < self._max_turns * 4:
            attempts += 1
            player = game.current_player
            agent = self._agents[player.name]
            action = agent.get_action(game, player)

            if isinstance(action, Quit):
                self._echo(f"{player.name} quit the game.")
                return RoundResult(winner=None, points=0, num_turns=num_turns, quit=True)
            if isinstance(action, Undo):
                self._undo(agent)
                continue
            if isinstance(action, Redo):
                self._redo(agent)
                continue
            if isinstance(action, SaveGame):
                self._save(agent, action.path)
                continue
            if isinstance(action, DrawCard):
                if self._draw(agent, player):
                    num_turns += 1
                continue
            if isinstance(action, PlayCard):
                if not self._play(agent, player, action):
                    continue
                num_turns += 1
                if not player.hand:
                    points = game.get_score(player)
                    match_over = game.check_winner(player)
                    return RoundResult(
                        winner=player.name,
                        points=points,
                        num_turns=num_turns,
                        match_over=match_over,
                    )
                continue
            raise TypeError(f"Unknown action: {action!r}")

        logger.warning("Round stopped after %d turns without a winner", num_turns)
        return RoundResult(winner=None, points=0, num_turns=num_turns)

    def _draw(self, agent: "AgentProtocol", player: Player) -> bool:
        game = self._game
        if game.wild_stack_active:
            with game.user_action("wild_stack"):
                resolved = game.wild_stack()
                if resolved:
                    game.advance()
            if resolved:
                self._echo(f"{player.name} drew the color and the wild stack ends.")
                return True
            agent.notify("Keep drawing.")
            return False

        if game.has_playable_card(player):
            agent.notify("You have a card that can be played. Please play it instead of drawing.")
            return False
        with game.user_action("draw"):
            game.draw_card()
            game.advance()
        self._echo(f"{player.name} draws one card.")
        return True

    def _play(self, agent: "AgentProtocol", player: Player, action: PlayCard) -> bool:
        game = self._game
        card = action.card
        if game.wild_stack_active:
            agent.notify(f"Draw until you get {game.wild_stack_color.value}.")
            return False
        if not any(c is card for c in player.hand) or not game.is_playable(card):
            agent.notify("Placing that card is not a valid move. Try again.")
            return False
        try:
            with game.user_action("turn"):
                result = game.play(card, action.chosen_color)
                if player.hand and not result.turn_taken:
                    game.advance()
        except ValueError as e:
            agent.notify(f"Invalid play: {e}")
            return False
        self._echo(f"{player.name} played {card}.")
        return True

    def _undo(self, agent: "AgentProtocol") -> None:
        game = self._game
        if not game.undo():
            agent.notify("Nothing to undo.")
            return
        while game.current_player.is_ai and game.undo():
            pass
        self._echo("Undo performed.")

    def _redo(self, agent: "AgentProtocol") -> None:
        game = self._game
        if not game.redo():
            agent.notify("Nothing to redo.")
            return
        while game.current_player.is_ai and game.redo():
            pass
        self._echo("Redo performed.")

    def _save(self, agent: "AgentProtocol", path: Optional[str]) -> None:
        target = path or self._save_path
        if target is None:
            agent.notify("No save path configured.")
            return
        try:
            self._game.save(target)
        except OSError as e:
            agent.notify(f"Unable to save game: {e}")
            return
        agent.notify(f"Game saved to {target}")
