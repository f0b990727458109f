"""Exceptions raised by the UNO Flip engine."""


class UnoFlipError(Exception):
    """Base class for engine errors."""


class GameSetupError(UnoFlipError, ValueError):
    """Raised for an invalid roster (player count, mismatched AI flags)."""


class GameStateError(UnoFlipError, RuntimeError):
    """Raised when a command needs state the game does not have yet."""


class InvalidSaveError(UnoFlipError, ValueError):
    """Raised when saved data is unreadable or not a game snapshot."""
