"""Game engine for UNO Flip."""

from unoflip.engine.card import Card, Color, DarkColor, DarkValue, LightValue, Side
from unoflip.engine.errors import GameSetupError, GameStateError, InvalidSaveError, UnoFlipError
from unoflip.engine.game import GameEngine, GameEvent, PlayResult
from unoflip.engine.game_state import GameState
from unoflip.engine.generator import CardGenerator
from unoflip.engine.history import History
from unoflip.engine.player import Player
from unoflip.engine.rules import (
    is_action_card,
    is_number_card,
    is_playable,
    is_wild,
    score_value,
)

__all__ = [
    "Card",
    "Color",
    "DarkColor",
    "DarkValue",
    "LightValue",
    "Side",
    "UnoFlipError",
    "GameSetupError",
    "GameStateError",
    "InvalidSaveError",
    "GameEngine",
    "GameEvent",
    "PlayResult",
    "GameState",
    "CardGenerator",
    "History",
    "Player",
    "is_action_card",
    "is_number_card",
    "is_playable",
    "is_wild",
    "score_value",
]
