"""Card, Color and symbol types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union


class Color(str, Enum):
    """Card colors."""

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"


class CardType(str, Enum):
    """Card categories."""

    NUMERIC = "numeric"
    SPECIAL = "special"
    WILD = "wild"


class SpecialSymbol(str, Enum):
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"


class WildSymbol(str, Enum):
    CHANGE_COLOR = "change_color"
    DRAW_FOUR = "draw_four"


@dataclass(frozen=True)
class NumericCard:
    """A colored card numbered 0-9."""

    color: Color
    number: int

    card_type: ClassVar[CardType] = CardType.NUMERIC
    symbol: ClassVar[None] = None

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ValueError(f"Invalid card number: {self.number!r}")
        if not 0 <= self.number <= 9:
            raise ValueError(f"Card number must be between 0 and 9, got {self.number}")

    def __str__(self) -> str:
        return f"{self.color.value} {self.number}"


@dataclass(frozen=True)
class SpecialCard:
    """A colored skip, reverse or draw two card."""

    color: Color
    symbol: SpecialSymbol

    card_type: ClassVar[CardType] = CardType.SPECIAL
    number: ClassVar[None] = None

    def __post_init__(self) -> None:
        if not isinstance(self.color, Color):
            raise ValueError(f"Invalid card color: {self.color!r}")
        if not isinstance(self.symbol, SpecialSymbol):
            raise ValueError(f"Invalid special symbol: {self.symbol!r}")

    def __str__(self) -> str:
        return f"{self.color.value} {self.symbol.value}"


@dataclass(frozen=True)
class WildCard:
    """A wild card. It has no color until it is played."""

    symbol: WildSymbol

    card_type: ClassVar[CardType] = CardType.WILD
    color: ClassVar[None] = None
    number: ClassVar[None] = None

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, WildSymbol):
            raise ValueError(f"Invalid wild symbol: {self.symbol!r}")

    def __str__(self) -> str:
        return f"wild {self.symbol.value}"


Card = Union[NumericCard, SpecialCard, WildCard]


@dataclass(frozen=True)
class PlayedCard:
    """A card lying on the discard pile.

    For wild cards, chosen_color is the color picked by the player who played
    it. The card value itself is never modified, so the same wild card can be
    held elsewhere without carrying the chosen color along.
    """

    card: Card
    chosen_color: Optional[Color] = None

    def __post_init__(self) -> None:
        if self.card.card_type is CardType.WILD:
            if not isinstance(self.chosen_color, Color):
                raise ValueError("A played wild card needs a chosen color")
        elif self.chosen_color is not None:
            raise ValueError("Only wild cards take a chosen color")

    @property
    def card_type(self) -> CardType:
        return self.card.card_type

    @property
    def color(self) -> Optional[Color]:
        if self.card.card_type is CardType.WILD:
            return self.chosen_color
        return self.card.color

    @property
    def symbol(self) -> Union[SpecialSymbol, WildSymbol, None]:
        return self.card.symbol

    @property
    def number(self) -> Optional[int]:
        return self.card.number

    def __str__(self) -> str:
        if self.chosen_color is None:
            return str(self.card)
        return f"{self.card} ({self.chosen_color.value})"
