"""The UNO Flip game engine: commands, effects, scoring and undo/redo."""

from __future__ import annotations

import copy
import functools
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from unoflip.engine import persistence, rules
from unoflip.engine.card import Card, Color, DarkColor, DarkValue, LightValue, Side
from unoflip.engine.errors import GameSetupError, GameStateError
from unoflip.engine.game_state import GameState
from unoflip.engine.generator import CardGenerator
from unoflip.engine.history import History
from unoflip.engine.player import Player

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 4
HAND_SIZE = 7
WINNING_SCORE = 500


@dataclass
class GameEvent:
    """Passed to listeners after a command has fully applied."""

    game: "GameEngine"
    command: str


@dataclass
class PlayResult:
    """Outcome of :meth:`GameEngine.play`.

    ``turn_taken`` is True when the card's effect already moved (or kept) the
    turn pointer, so the caller must not advance it again.
    """

    card: Card
    side: Side
    drawn: List[Card] = field(default_factory=list)
    turn_taken: bool = False


Listener = Callable[[GameEvent], None]


def _command(name: str):
    """Make a method one undoable, notifying command."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            with self.user_action(name):
                return method(self, *args, **kwargs)

        return wrapper

    return decorator


class GameEngine:
    """Aggregate root for one game session.

    Callers issue one command at a time. Undoable commands checkpoint the
    pre-command state; commands issued inside :meth:`user_action` share the
    outer checkpoint, so one user action is always one undo step.
    """

    def __init__(
        self,
        generator: Optional[CardGenerator] = None,
        seed: Optional[int] = None,
        target_score: int = WINNING_SCORE,
        history_limit: Optional[int] = None,
    ):
        self._state = GameState()
        self._generator = generator or CardGenerator(seed=seed)
        self._history = History(limit=history_limit)
        self._listeners: List[Listener] = []
        self._depth = 0
        self.target_score = target_score

    # ---------- Notification ----------

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, command: str) -> None:
        if self._depth:
            return
        event = GameEvent(game=self, command=command)
        for listener in list(self._listeners):
            listener(event)

    @contextmanager
    def user_action(self, name: str = "action") -> Iterator[None]:
        """Group commands into a single checkpoint and notification.

        If the body raises, the live state is rolled back to how it was before
        the action and the exception propagates.
        """
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        before = self._history.snapshot(self._state)
        self._depth = 1
        try:
            yield
        except BaseException:
            self._state.restore(before)
            raise
        finally:
            self._depth = 0
        self._history.push(before)
        logger.debug("Applied %s", name)
        self._notify(name)

    # ---------- Read access ----------

    @property
    def state(self) -> GameState:
        """Live state. Treat as read-only; mutate through commands."""
        return self._state

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._state.players)

    @property
    def current_player(self) -> Player:
        if not self._state.players:
            raise GameStateError("No players in the game")
        return self._state.players[self._state.turn.index]

    @property
    def next_player(self) -> Player:
        players = self._state.players
        return players[self._state.turn.peek_next(len(players))]

    @property
    def current_player_index(self) -> int:
        return self._state.turn.index

    @property
    def direction(self) -> int:
        return self._state.turn.direction

    @property
    def top_card(self) -> Optional[Card]:
        return self._state.top_card

    def set_top_card(self, card: Optional[Card]) -> None:
        self._state.top_card = card

    @property
    def side(self) -> Side:
        return self._state.side

    @property
    def wild_stack_active(self) -> bool:
        return self._state.wild_stack_active

    @property
    def wild_stack_color(self) -> Optional[DarkColor]:
        return self._state.wild_stack_color

    @property
    def scores(self) -> Dict[str, int]:
        """Copy of the cumulative match scores keyed by player name."""
        return dict(self._state.scores)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def is_hand_empty(self) -> bool:
        """True if the current player has no cards left."""
        return not self.current_player.hand

    # ---------- Setup ----------

    def add_player(self, name: str, is_ai: bool = False) -> Player:
        """Seat another player with a zero score. Clears history."""
        if len(self._state.players) >= MAX_PLAYERS:
            raise GameSetupError(f"At most {MAX_PLAYERS} players can join")
        if name in self._state.scores:
            raise GameSetupError(f"Player name {name!r} is already taken")
        player = Player(name=name, is_ai=bool(is_ai))
        self._state.players.append(player)
        self._state.scores[name] = 0
        self._history.clear()
        self._notify("add_player")
        return player

    def new_game(self, names: Sequence[str], ai_flags: Sequence[bool]) -> None:
        """Replace the roster and zero all scores."""
        if len(names) != len(ai_flags):
            raise GameSetupError("Each player needs exactly one AI flag")
        if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
            raise GameSetupError(f"A game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(names)}")
        if len(set(names)) != len(names):
            raise GameSetupError("Player names must be unique")
        self._state.restore(GameState(
            players=[Player(name=n, is_ai=bool(ai)) for n, ai in zip(names, ai_flags)],
            scores={n: 0 for n in names},
        ))
        self._history.clear()
        logger.info("New game: %s", ", ".join(names))
        self._notify("new_game")

    def new_round(self) -> None:
        """Deal fresh hands and turn over a non-wild light starting card."""
        state = self._state
        for player in state.players:
            player.hand.clear()
            for card in self._generator.draw_many(HAND_SIZE):
                player.add_card(card)
        top = self._generator.draw()
        while rules.is_wild(top, Side.LIGHT):
            top = self._generator.draw()
        state.top_card = top
        state.side = Side.LIGHT
        state.turn.reset()
        state.wild_stack_active = False
        state.wild_stack_color = None
        self._history.clear()
        logger.info("New round, starting card %s", top)
        self._notify("new_round")

    # ---------- Basic commands ----------

    @_command("play_card")
    def play_card(self, card: Card) -> None:
        """Move ``card`` from the current player's hand onto the pile.

        The pile gets a copy, so choosing a wild color later never recolors
        the caller's object and it still matches the hand after an undo.

        Legality is the caller's responsibility; see :meth:`is_playable`.
        """
        hand = self.current_player.hand
        if card in hand:
            hand.remove(card)
        else:
            logger.warning("%s played %s which is not in their hand", self.current_player.name, card)
        self._state.top_card = copy.copy(card)

    @_command("draw_card")
    def draw_card(self) -> Card:
        card = self._generator.draw()
        self.current_player.add_card(card)
        return card

    @_command("advance")
    def advance(self) -> None:
        self._state.turn.advance(len(self._state.players))

    @_command("reverse")
    def reverse(self) -> None:
        self._state.turn.reverse()

    @_command("skip")
    def skip(self) -> None:
        """Move the turn two seats, skipping the next player."""
        self._state.turn.skip(len(self._state.players))

    # ---------- Light side effects ----------

    @_command("draw_one")
    def draw_one(self) -> Card:
        """The next player draws one card, which is returned for display."""
        card = self._generator.draw()
        self.next_player.add_card(card)
        return card

    @_command("wild")
    def wild(self, color: Color) -> None:
        self._require_top_card().set_color(color)

    @_command("wild_draw_two")
    def wild_draw_two(self, color: Color) -> List[Card]:
        """Set the wild color, make the next player draw two, then skip them."""
        self._require_top_card().set_color(color)
        drawn = self._generator.draw_many(2)
        victim = self.next_player
        for card in drawn:
            victim.add_card(card)
        self.skip()
        return drawn

    @_command("flip")
    def flip(self) -> None:
        """Turn the deck over.

        A wild on top of the new side is replaced by a brand new random card
        (not just recolored) until the active face is not wild. Leaving the
        dark side ends any wild stack chain.
        """
        state = self._state
        state.side = Side.DARK if state.side is Side.LIGHT else Side.LIGHT
        if state.side is Side.LIGHT and state.wild_stack_active:
            logger.debug("Flip ends the wild stack chain on %s", state.wild_stack_color.value)
            state.wild_stack_active = False
            state.wild_stack_color = None
        while state.top_card is not None and rules.is_wild(state.top_card, state.side):
            state.top_card = self._generator.draw()
        logger.debug("Flipped to %s side", state.side.value)

    # ---------- Dark side effects ----------

    @_command("draw_five")
    def draw_five(self) -> List[Card]:
        """The next player draws five cards and loses their turn."""
        drawn = self._generator.draw_many(5)
        victim = self.next_player
        for card in drawn:
            victim.add_card(card)
        self.skip()
        return drawn

    def skip_all(self) -> None:
        """Everyone else is skipped: the current player simply keeps the turn."""
        self._notify("skip_all")

    @_command("set_init_wild_stack")
    def set_init_wild_stack(self, color: DarkColor) -> None:
        """Start a wild stack chain on ``color`` and hand the turn to the victim."""
        self._require_top_card().set_dark_color(color)
        state = self._state
        state.wild_stack_active = True
        state.wild_stack_color = DarkColor(color)
        state.turn.advance(len(state.players))

    def wild_stack(self) -> bool:
        """Draw one card for the victim of an active wild stack chain.

        Returns:
            True once the drawn card shows the target dark color, which ends
            the chain. The turn pointer stays on the victim either way.
        """
        if not self._state.wild_stack_active:
            return False
        return self._draw_for_wild_stack()

    @_command("wild_stack")
    def _draw_for_wild_stack(self) -> bool:
        state = self._state
        card = self._generator.draw()
        self.current_player.add_card(card)
        if card.dark_color is not None and card.dark_color == state.wild_stack_color:
            state.wild_stack_active = False
            state.wild_stack_color = None
            return True
        return False

    # ---------- Whole-card play ----------

    def play(self, card: Card, color: Optional[Union[Color, DarkColor]] = None) -> PlayResult:
        """Play a card and apply its active-face effect as one user action.

        Wild faces need ``color`` (a light Color on the light side, a
        DarkColor on the dark side). The turn is never advanced here unless
        the effect itself moves it; check ``PlayResult.turn_taken``.
        """
        side = self._state.side
        value, _ = card.face(side)
        if value in (LightValue.WILD, LightValue.WILD_DRAW_TWO) and side is Side.LIGHT:
            if not isinstance(color, Color):
                raise ValueError(f"{value.value} requires a light color")
        if value is DarkValue.WILD_STACK and side is Side.DARK:
            if not isinstance(color, DarkColor):
                raise ValueError("wild_stack requires a dark color")

        result = PlayResult(card=card, side=side)
        with self.user_action("play"):
            self.play_card(card)
            if side is Side.LIGHT:
                self._apply_light_effect(value, color, result)
            else:
                self._apply_dark_effect(value, color, result)
        return result

    def _apply_light_effect(self, value: LightValue, color: Optional[Color], result: PlayResult) -> None:
        if value is LightValue.SKIP:
            self.skip()
            result.turn_taken = True
        elif value is LightValue.REVERSE:
            self.reverse()
        elif value is LightValue.DRAW_ONE:
            result.drawn.append(self.draw_one())
        elif value is LightValue.FLIP:
            self.flip()
        elif value is LightValue.WILD:
            self.wild(color)
        elif value is LightValue.WILD_DRAW_TWO:
            result.drawn.extend(self.wild_draw_two(color))
            result.turn_taken = True

    def _apply_dark_effect(self, value: DarkValue, color: Optional[DarkColor], result: PlayResult) -> None:
        if value is DarkValue.DRAW_FIVE:
            result.drawn.extend(self.draw_five())
            result.turn_taken = True
        elif value is DarkValue.SKIP_ALL:
            self.skip_all()
            result.turn_taken = True
        elif value is DarkValue.FLIP:
            self.flip()
        elif value is DarkValue.WILD_STACK:
            self.set_init_wild_stack(color)
            result.turn_taken = True

    # ---------- Legality and AI ----------

    def is_playable(self, card: Card) -> bool:
        return rules.is_playable(card, self._state.top_card, self._state.side)

    def get_playable_cards(self, player: Player) -> List[Card]:
        return [c for c in player.hand if self.is_playable(c)]

    def has_playable_card(self, player: Player) -> bool:
        return any(self.is_playable(c) for c in player.hand)

    def current_player_has_playable_card(self) -> bool:
        return self.has_playable_card(self.current_player)

    def choose_ai_card(self, player: Player) -> Optional[Card]:
        """Pick the first playable action/wild card, else the first playable card."""
        playable = self.get_playable_cards(player)
        for card in playable:
            if rules.is_action_card(card, self._state.side):
                return card
        return playable[0] if playable else None

    def choose_ai_card_for_current_player(self) -> Optional[Card]:
        return self.choose_ai_card(self.current_player)

    # ---------- Scoring ----------

    def get_score(self, winner: Player) -> int:
        """Points the round winner earns from everyone else's hand on the current side."""
        side = self._state.side
        return sum(
            rules.score_value(card, side)
            for player in self._state.players
            if player is not winner
            for card in player.hand
        )

    def check_winner(self, winner: Player) -> bool:
        """Bank the round score for ``winner``; True if the match is over."""
        scores = self._state.scores
        scores[winner.name] = scores.get(winner.name, 0) + self.get_score(winner)
        logger.info("%s now has %d points", winner.name, scores[winner.name])
        return any(score >= self.target_score for score in scores.values())

    # ---------- History ----------

    def undo(self) -> bool:
        """Step back one user action. Returns False if there was nothing to undo."""
        previous = self._history.undo(self._state)
        if previous is None:
            return False
        self._state.restore(previous)
        self._notify("undo")
        return True

    def redo(self) -> bool:
        """Re-apply the last undone action. Returns False if there was nothing to redo."""
        following = self._history.redo(self._state)
        if following is None:
            return False
        self._state.restore(following)
        self._notify("redo")
        return True

    # ---------- Persistence ----------

    def to_bytes(self) -> bytes:
        return persistence.dumps(self._state)

    def from_bytes(self, data: bytes) -> None:
        """Replace the live state with a decoded snapshot and drop all history."""
        self._apply_loaded(persistence.loads(data))

    def save(self, path: Union[str, os.PathLike]) -> None:
        persistence.save_game(self._state, path)

    def load(self, path: Union[str, os.PathLike]) -> None:
        self._apply_loaded(persistence.load_game(path))

    def _apply_loaded(self, state: GameState) -> None:
        self._state.restore(state)
        self._history.clear()
        self._notify("load")

    def _require_top_card(self) -> Card:
        if self._state.top_card is None:
            raise GameStateError("No card on the discard pile")
        return self._state.top_card
