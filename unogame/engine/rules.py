"""UNO rules: move commands, card legality and turn rotation."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from unogame.engine.card import Card, CardType, Color, PlayedCard
from unogame.engine.errors import InvalidCommandShapeError


@dataclass(frozen=True)
class PlayCommand:
    """Command: play the card at `index` of the hand. Wilds need `color`."""

    index: int
    color: Optional[Color] = None

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise InvalidCommandShapeError(f"Card index must be an integer, got {self.index!r}")
        if self.index < 0:
            raise InvalidCommandShapeError(f"Card index must not be negative, got {self.index}")
        if self.color is not None and not isinstance(self.color, Color):
            raise InvalidCommandShapeError(f"Invalid color: {self.color!r}")


@dataclass(frozen=True)
class DrawCommand:
    """Command: draw a card from the draw pile."""

    pass


GameCommand = Union[PlayCommand, DrawCommand]


class MoveResult(str, Enum):
    """Outcome of a structurally valid move."""

    APPLIED = "applied"
    ILLEGAL = "illegal"


def is_card_valid(card: Card, top: PlayedCard) -> bool:
    """Check if `card` can be played on top of `top`.

    A wild top is matched through the color chosen for it, never its symbol.
    """
    if card.card_type is CardType.WILD:
        return True
    if top.color is not None and card.color == top.color:
        return True
    if card.card_type is CardType.NUMERIC:
        return top.card_type is CardType.NUMERIC and card.number == top.number
    # Special card
    return top.card_type is CardType.SPECIAL and card.symbol == top.symbol


def next_turn(turn: int, direction: int, player_count: int, steps: int = 1) -> int:
    """Index of the player `steps` turns away, wrapping around the table."""
    return (turn + direction * steps) % player_count
