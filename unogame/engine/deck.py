"""Deck creation, card piles and the reshuffle procedure."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Generic, Iterable, Iterator, List, Optional, Sequence, TypeVar

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

if TYPE_CHECKING:
    from unogame.engine.player import Player

logger = logging.getLogger(__name__)

DECK_SIZE = 108
STARTING_HAND_SIZE = 7
RESHUFFLE_THRESHOLD = 5

T = TypeVar("T")


def create_deck(seed: int | None = None, rng: Optional[random.Random] = None) -> List[Card]:
    """Create a shuffled standard 108-card UNO deck.

    - 4 colors x (one 0, two of each 1-9): 76 cards
    - 4 colors x two of each Skip, Reverse, Draw Two: 24 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in Color:
        cards.append(NumericCard(color=color, number=0))
        for number in range(1, 10):
            cards.append(NumericCard(color=color, number=number))
            cards.append(NumericCard(color=color, number=number))
        for symbol in SpecialSymbol:
            cards.append(SpecialCard(color=color, symbol=symbol))
            cards.append(SpecialCard(color=color, symbol=symbol))

    for _ in range(4):
        cards.append(WildCard(symbol=WildSymbol.CHANGE_COLOR))
        cards.append(WildCard(symbol=WildSymbol.DRAW_FOUR))

    if rng is None:
        rng = random.Random(seed)
    rng.shuffle(cards)

    return cards


class Pile(Generic[T]):
    """A LIFO stack of cards. The top is the last item."""

    def __init__(self, items: Iterable[T] = ()):
        self._items: List[T] = list(items)

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from an empty pile")
        return self._items.pop()

    def peek(self) -> T:
        if not self._items:
            raise IndexError("peek at an empty pile")
        return self._items[-1]

    def put_under(self, items: Iterable[T]) -> None:
        """Place items beneath the current contents, keeping their order."""
        self._items[0:0] = list(items)

    def drain(self) -> List[T]:
        """Remove and return every item, bottom first."""
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"Pile({len(self._items)} cards)"


def reshuffle_if_low(
    draw: Pile[Card],
    discard: Pile[PlayedCard],
    rng: random.Random,
    threshold: int = RESHUFFLE_THRESHOLD,
) -> bool:
    """Refill the draw pile from the discard pile when it runs low.

    The discard top stays where it is. Every other discarded card is shuffled
    and placed under the remaining draw cards, so those are drawn first.
    Returns True if a reshuffle took place.
    """
    if len(draw) >= threshold or len(discard) <= 1:
        return False

    top = discard.pop()
    recycled = [played.card for played in discard.drain()]
    rng.shuffle(recycled)
    draw.put_under(recycled)
    discard.push(top)
    logger.debug("Reshuffled %d discarded cards into the draw pile", len(recycled))
    return True


def deal_and_flip(
    players: Sequence["Player"],
    draw: Pile[Card],
    discard: Pile[PlayedCard],
    hand_size: int = STARTING_HAND_SIZE,
) -> None:
    """Deal the starting hands and flip the first discard.

    Non-numeric cards met while flipping are set aside and returned to the
    draw pile once a numeric card has been turned up.
    """
    for player in players:
        for _ in range(hand_size):
            player.add_to_hand(draw.pop())

    aside: List[Card] = []
    while draw.peek().card_type is not CardType.NUMERIC:
        aside.append(draw.pop())
    discard.push(PlayedCard(draw.pop()))
    for card in reversed(aside):
        draw.push(card)
