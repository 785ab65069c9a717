"""Greedy bot decision procedure."""

import random
from collections import Counter
from typing import Callable, Sequence

from unogame.engine.card import Card, CardType, Color
from unogame.engine.rules import DrawCommand, GameCommand, PlayCommand


def choose_wild_color(hand: Sequence[Card], rng: random.Random) -> Color:
    """Pick the color the hand holds the most of, ties broken at random."""
    counts = Counter(card.color for card in hand if card.color is not None)
    if not counts:
        return rng.choice(list(Color))
    best = max(counts.values())
    return rng.choice([color for color in Color if counts[color] == best])


def choose_move(
    hand: Sequence[Card],
    is_card_valid: Callable[[Card], bool],
    rng: random.Random,
) -> GameCommand:
    """Play the first legal card in hand order, or draw if there is none."""
    for index, card in enumerate(hand):
        if is_card_valid(card):
            color = choose_wild_color(hand, rng) if card.card_type is CardType.WILD else None
            return PlayCommand(index=index, color=color)
    return DrawCommand()
