"""Save-file codec for game snapshots.

Snapshots are pickled with a format marker. Loading goes through a restricted
unpickler that can only build engine types, and the decoded state is fully
validated before anyone gets to apply it.
"""

import io
import logging
import os
import pickle
from enum import Enum
from typing import Any, Union

from unoflip.engine.card import DARK_WILDS, LIGHT_WILDS, Card, Color, DarkColor, DarkValue, LightValue, Side
from unoflip.engine.errors import InvalidSaveError
from unoflip.engine.game_state import GameState
from unoflip.engine.player import Player
from unoflip.engine.turns import TurnTracker

logger = logging.getLogger(__name__)

SAVE_FORMAT = "unoflip-save"

_ALLOWED_MODULES = frozenset({
    "unoflip.engine.card",
    "unoflip.engine.player",
    "unoflip.engine.turns",
    "unoflip.engine.game_state",
})


def _enum_member(cls: Any, name: Any) -> Enum:
    # Enum members pickle as getattr(EnumClass, "NAME").
    if (
        isinstance(cls, type)
        and issubclass(cls, Enum)
        and cls.__module__ in _ALLOWED_MODULES
        and isinstance(name, str)
        and name in cls.__members__
    ):
        return cls[name]
    raise InvalidSaveError(f"Save data references unknown attribute {name!r}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_card(card: Any) -> bool:
    if not isinstance(card, Card):
        return False
    value = getattr(card, "value", None)
    color = getattr(card, "color", None)
    dark_value = getattr(card, "dark_value", None)
    dark_color = getattr(card, "dark_color", None)
    if not isinstance(value, LightValue) or not isinstance(dark_value, DarkValue):
        return False
    if color is not None and not isinstance(color, Color):
        return False
    if dark_color is not None and not isinstance(dark_color, DarkColor):
        return False
    # Only wild faces may be uncolored.
    if color is None and value not in LIGHT_WILDS:
        return False
    return dark_color is not None or dark_value in DARK_WILDS


class _SnapshotUnpickler(pickle.Unpickler):
    def find_class(self, module: str, name: str) -> Any:
        if module in _ALLOWED_MODULES:
            cls = super().find_class(module, name)
            if isinstance(cls, type) and cls.__module__ == module:
                return cls
        elif (module, name) == ("builtins", "getattr"):
            return _enum_member
        raise InvalidSaveError(f"Save data references unknown type {module}.{name}")


def dumps(state: GameState) -> bytes:
    """Serialize a game state to an opaque byte blob."""
    payload = {"format": SAVE_FORMAT, "state": state}
    return pickle.dumps(payload, protocol=pickle.HIGHEST_PROTOCOL)


def loads(data: bytes) -> GameState:
    """Decode and validate a blob produced by :func:`dumps`.

    Raises:
        InvalidSaveError: if the data is corrupt or is not a game snapshot.
    """
    try:
        payload = _SnapshotUnpickler(io.BytesIO(data)).load()
    except InvalidSaveError:
        raise
    except Exception as e:
        # Corrupt pickles can fail with almost any exception type.
        raise InvalidSaveError(f"Unreadable save data: {e}") from e

    if not isinstance(payload, dict) or payload.get("format") != SAVE_FORMAT:
        raise InvalidSaveError("Not an UNO Flip save")
    state = payload.get("state")
    validate_state(state)
    return state


def save_game(state: GameState, path: Union[str, os.PathLike]) -> None:
    """Write a snapshot to ``path``. File-system errors propagate as OSError."""
    data = dumps(state)
    with open(path, "wb") as f:
        f.write(data)
    logger.info("Game saved to %s (%d bytes)", path, len(data))


def load_game(path: Union[str, os.PathLike]) -> GameState:
    """Read a snapshot from ``path``.

    Raises:
        OSError: if the file cannot be read.
        InvalidSaveError: if its contents are not a valid snapshot.
    """
    with open(path, "rb") as f:
        data = f.read()
    state = loads(data)
    logger.info("Game loaded from %s", path)
    return state


def validate_state(state: Any) -> None:
    """Check every structural invariant of a decoded state.

    Unpickling bypasses ``__init__``, so attributes may be missing or of any
    type; each one is type-checked before it is compared.
    """
    if not isinstance(state, GameState):
        raise InvalidSaveError("Save data does not contain a game state")

    players = getattr(state, "players", None)
    if not isinstance(players, list):
        raise InvalidSaveError("Player list is malformed")
    for player in players:
        if (
            not isinstance(player, Player)
            or not isinstance(getattr(player, "name", None), str)
            or not isinstance(getattr(player, "is_ai", None), bool)
        ):
            raise InvalidSaveError("Player entry is malformed")
        hand = getattr(player, "hand", None)
        if not isinstance(hand, list) or not all(_is_card(c) for c in hand):
            raise InvalidSaveError(f"Hand of {player.name!r} is malformed")

    turn = getattr(state, "turn", None)
    index = getattr(turn, "index", None)
    direction = getattr(turn, "direction", None)
    if (
        not isinstance(turn, TurnTracker)
        or not _is_int(index)
        or not _is_int(direction)
        or direction not in (1, -1)
    ):
        raise InvalidSaveError("Turn state is malformed")
    if players and not 0 <= index < len(players):
        raise InvalidSaveError(f"Current player index {index} out of range")
    if not players and index != 0:
        raise InvalidSaveError("Current player index set without players")

    top_card = getattr(state, "top_card", None)
    if top_card is not None and not _is_card(top_card):
        raise InvalidSaveError("Top card is malformed")
    side = getattr(state, "side", None)
    if not isinstance(side, Side):
        raise InvalidSaveError("Side is malformed")

    active = getattr(state, "wild_stack_active", None)
    target = getattr(state, "wild_stack_color", None)
    if not isinstance(active, bool) or (target is not None and not isinstance(target, DarkColor)):
        raise InvalidSaveError("Wild stack state is malformed")
    if active and (target is None or side is not Side.DARK):
        raise InvalidSaveError("Wild stack is active without a dark target color")

    scores = getattr(state, "scores", None)
    if not isinstance(scores, dict):
        raise InvalidSaveError("Scores are malformed")
    names = [p.name for p in players]
    if len(set(names)) != len(names):
        raise InvalidSaveError("Player names are not unique")
    if set(scores) != set(names):
        raise InvalidSaveError("Scores do not match the players")
    for name, score in scores.items():
        if not _is_int(score) or score < 0:
            raise InvalidSaveError(f"Score for {name!r} is invalid")
