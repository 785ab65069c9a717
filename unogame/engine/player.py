"""Human and bot players."""

import random
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from unogame.engine.bot import choose_move
from unogame.engine.card import Card
from unogame.engine.errors import OutOfHandBoundsError
from unogame.engine.rules import GameCommand

if TYPE_CHECKING:
    from unogame.agent.protocol import GameView


class Player:
    """A player with an identity and an ordered hand of cards.

    Cards keep their arrival order since commands refer to them by index.
    Two players are equal when their ids are.
    """

    is_bot = False

    def __init__(self, player_id: str, hand: Optional[Iterable[Card]] = None):
        self._id = player_id
        self._hand = list(hand) if hand is not None else []

    @property
    def id(self) -> str:
        return self._id

    @property
    def hand(self) -> Tuple[Card, ...]:
        return tuple(self._hand)

    @property
    def hand_size(self) -> int:
        return len(self._hand)

    def add_to_hand(self, card: Card) -> None:
        self._hand.append(card)

    def take_from_hand(self, index: int) -> Card:
        """Remove and return the card at `index`."""
        if not 0 <= index < len(self._hand):
            raise OutOfHandBoundsError(
                f"{index} is out of hand range of {len(self._hand)}"
            )
        return self._hand.pop(index)

    def clone(self) -> "Player":
        return type(self)(self._id, self._hand)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, cards={len(self._hand)})"


class HumanPlayer(Player):
    """A player whose moves come from outside the engine."""


class BotPlayer(Player):
    """A player that picks its own moves with the greedy strategy."""

    is_bot = True

    def __init__(
        self,
        player_id: str,
        hand: Optional[Iterable[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(player_id, hand)
        self._rng = rng if rng is not None else random.Random()

    def decide(self, game: "GameView") -> GameCommand:
        return choose_move(self._hand, game.is_card_valid, self._rng)

    def clone(self) -> "BotPlayer":
        rng = random.Random()
        rng.setstate(self._rng.getstate())
        return BotPlayer(self._id, self._hand, rng=rng)
