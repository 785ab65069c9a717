"""Game engine for UNO."""

from unogame.engine.card import (
    Card,
    CardType,
    Color,
    NumericCard,
    PlayedCard,
    SpecialCard,
    SpecialSymbol,
    WildCard,
    WildSymbol,
)
from unogame.engine.deck import DECK_SIZE, Pile, create_deck
from unogame.engine.errors import (
    EngineError,
    GameAlreadyOverError,
    IllegalPlayerCountError,
    InvalidCommandShapeError,
    MissingWildColorError,
    NotABotError,
    OutOfHandBoundsError,
)
from unogame.engine.game import MAX_PLAYERS, MIN_PLAYERS, Game, new_game
from unogame.engine.player import BotPlayer, HumanPlayer, Player
from unogame.engine.rules import (
    DrawCommand,
    GameCommand,
    MoveResult,
    PlayCommand,
    is_card_valid,
)

__all__ = [
    "Card",
    "CardType",
    "Color",
    "NumericCard",
    "PlayedCard",
    "SpecialCard",
    "SpecialSymbol",
    "WildCard",
    "WildSymbol",
    "DECK_SIZE",
    "Pile",
    "create_deck",
    "EngineError",
    "GameAlreadyOverError",
    "IllegalPlayerCountError",
    "InvalidCommandShapeError",
    "MissingWildColorError",
    "NotABotError",
    "OutOfHandBoundsError",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "Game",
    "new_game",
    "BotPlayer",
    "HumanPlayer",
    "Player",
    "DrawCommand",
    "GameCommand",
    "MoveResult",
    "PlayCommand",
    "is_card_valid",
]
