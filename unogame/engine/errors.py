"""Exceptions raised by the game engine."""


class EngineError(Exception):
    """Base class for every engine fault."""


class OutOfHandBoundsError(EngineError, IndexError):
    """A command referenced a card index outside the player's hand."""


class MissingWildColorError(EngineError, ValueError):
    """A wild card was played without choosing a color."""

    def __init__(self, message: str = "A color must be chosen to play a wild card"):
        super().__init__(message)


class InvalidCommandShapeError(EngineError, ValueError):
    """A command was built with malformed values."""


class GameAlreadyOverError(EngineError, RuntimeError):
    """An operation was attempted on a finished game."""

    def __init__(self, message: str = "This game is already over"):
        super().__init__(message)


class NotABotError(EngineError, RuntimeError):
    """go_bot was called while a human player is in turn."""


class IllegalPlayerCountError(EngineError, ValueError):
    """A game was requested with too few or too many players."""
