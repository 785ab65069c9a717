"""Protocols between the game engine and whatever decides moves."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from unogame.engine.card import Card, PlayedCard
from unogame.engine.rules import GameCommand

if TYPE_CHECKING:
    from unogame.engine.player import Player


@runtime_checkable
class GameView(Protocol):
    """Read-only view of a game, as seen by a decision maker."""

    @property
    def player_in_turn(self) -> "Player":
        """Copy of the player whose turn it is."""
        ...

    @property
    def discard_top(self) -> PlayedCard:
        """The active card on the discard pile."""
        ...

    def is_card_valid(self, card: Card) -> bool:
        """Whether `card` may be played on the current discard top."""
        ...


@runtime_checkable
class MoveDecider(Protocol):
    """Interface for players that pick their own moves."""

    def decide(self, game: GameView) -> GameCommand:
        """Choose the next move without changing the game.

        Args:
            game: Read-only view of the game in progress.

        Returns:
            The command to execute for this player's turn.
        """
        ...
