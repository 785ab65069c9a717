"""The UNO game engine: owns all state and applies moves."""

from __future__ import annotations

import logging
import random
import threading
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from unogame.engine.card import Card, CardType, PlayedCard, SpecialSymbol, WildSymbol
from unogame.engine.deck import Pile, create_deck, deal_and_flip, reshuffle_if_low
from unogame.engine.errors import (
    GameAlreadyOverError,
    IllegalPlayerCountError,
    InvalidCommandShapeError,
    MissingWildColorError,
    NotABotError,
    OutOfHandBoundsError,
)
from unogame.engine.player import BotPlayer, HumanPlayer, Player
from unogame.engine.rules import (
    DrawCommand,
    GameCommand,
    MoveResult,
    PlayCommand,
    is_card_valid,
    next_turn,
)

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 8
BOT_NAME_PREFIX = "Bot"


def check_player_count(count: int) -> None:
    """Raise IllegalPlayerCountError unless `count` is within the limits."""
    if count > MAX_PLAYERS:
        raise IllegalPlayerCountError(
            f"{count} players exceed the players limit of {MAX_PLAYERS}"
        )
    if count < MIN_PLAYERS:
        raise IllegalPlayerCountError(
            f"{count} players is not enough to start a game, minimum of {MIN_PLAYERS} is needed"
        )


class Game:
    """A single UNO game.

    All state is private. Every accessor returns copies, so nothing a caller
    does with the returned players or cards can alter the game. Public
    operations are serialised with a per-game lock.
    """

    def __init__(
        self,
        players: Sequence[Player],
        seed: int | None = None,
        rng: Optional[random.Random] = None,
    ):
        rng = rng if rng is not None else random.Random(seed)
        self._setup(
            players=[p.clone() for p in players],
            draw=Pile(create_deck(rng=rng)),
            discard=Pile(),
            turn=0,
            previous=0,
            direction=1,
            winner=None,
            rng=rng,
        )
        deal_and_flip(self._players, self._draw, self._discard)
        logger.debug(
            "New game with players %s, first card %s",
            [p.id for p in self._players],
            self._discard.peek(),
        )

    @classmethod
    def from_state(
        cls,
        players: Sequence[Player],
        draw_pile: Iterable[Card],
        discard_pile: Iterable[Union[Card, PlayedCard]],
        turn: int = 0,
        direction: int = 1,
        previous: Optional[int] = None,
        winner: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "Game":
        """Rebuild a game from explicit state.

        Piles are given bottom first. Plain cards on the discard pile are
        wrapped as played cards; wilds must come already wrapped with their
        chosen color.
        """
        check_player_count(len(players))
        if direction not in (1, -1):
            raise ValueError(f"Direction must be 1 or -1, got {direction}")
        if not 0 <= turn < len(players):
            raise ValueError(f"Turn {turn} is not a player index")
        if previous is not None and not 0 <= previous < len(players):
            raise ValueError(f"Previous turn {previous} is not a player index")
        if winner is not None and not 0 <= winner < len(players):
            raise ValueError(f"Winner {winner} is not a player index")
        discard = Pile(
            c if isinstance(c, PlayedCard) else PlayedCard(c) for c in discard_pile
        )
        if not len(discard):
            raise ValueError("The discard pile must not be empty")

        game = cls.__new__(cls)
        game._setup(
            players=[p.clone() for p in players],
            draw=Pile(draw_pile),
            discard=discard,
            turn=turn,
            previous=turn if previous is None else previous,
            direction=direction,
            winner=winner,
            rng=rng if rng is not None else random.Random(),
        )
        return game

    def _setup(
        self,
        players: List[Player],
        draw: Pile[Card],
        discard: Pile[PlayedCard],
        turn: int,
        previous: int,
        direction: int,
        winner: Optional[int],
        rng: random.Random,
    ) -> None:
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Player ids must be unique, got {ids}")
        check_player_count(len(players))
        self._players = players
        self._draw = draw
        self._discard = discard
        self._turn = turn
        self._previous = previous
        # 1 moves towards higher indexes, -1 towards lower ones
        self._direction = direction
        self._winner = winner
        self._rng = rng
        self._lock = threading.RLock()

    # Read-only state

    @property
    def player_in_turn(self) -> Player:
        return self._players[self._turn].clone()

    @property
    def previous_player(self) -> Player:
        """The player who made the last move (meaningless before any move)."""
        return self._players[self._previous].clone()

    @property
    def winner(self) -> Optional[Player]:
        if self._winner is None:
            return None
        return self._players[self._winner].clone()

    @property
    def is_over(self) -> bool:
        return self._winner is not None

    @property
    def deck_top(self) -> Optional[Card]:
        return self._draw.peek() if len(self._draw) else None

    @property
    def discard_top(self) -> PlayedCard:
        return self._discard.peek()

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(p.clone() for p in self._players)

    @property
    def turn_index(self) -> int:
        return self._turn

    @property
    def direction(self) -> int:
        return self._direction

    @property
    def draw_pile_size(self) -> int:
        return len(self._draw)

    @property
    def discard_pile_size(self) -> int:
        return len(self._discard)

    def get_player(self, key: Union[int, str]) -> Optional[Player]:
        """Copy of the player at an index or with an id, None if not found."""
        if isinstance(key, str):
            index = self.index_of(key)
            return self._players[index].clone() if index != -1 else None
        if 0 <= key < len(self._players):
            return self._players[key].clone()
        return None

    def index_of(self, player_id: str) -> int:
        """Index of the player with `player_id`, -1 if there is none."""
        for index, player in enumerate(self._players):
            if player.id == player_id:
                return index
        return -1

    def is_card_valid(self, card: Card) -> bool:
        return is_card_valid(card, self._discard.peek())

    def clone(self) -> "Game":
        """An independent copy of this game."""
        with self._lock:
            rng = random.Random()
            rng.setstate(self._rng.getstate())
            return Game.from_state(
                players=self._players,
                draw_pile=self._draw,
                discard_pile=self._discard,
                turn=self._turn,
                direction=self._direction,
                previous=self._previous,
                winner=self._winner,
                rng=rng,
            )

    # Moves

    def execute_move(self, command: GameCommand) -> MoveResult:
        """Execute `command` for the player in turn.

        Returns MoveResult.ILLEGAL, leaving the game untouched, when the chosen
        card does not match the discard top.

        Raises:
            GameAlreadyOverError: if the game has a winner.
            OutOfHandBoundsError: if the card index is outside the hand.
            MissingWildColorError: if a wild is played without a color.
        """
        with self._lock:
            if self.is_over:
                raise GameAlreadyOverError()
            reshuffle_if_low(self._draw, self._discard, self._rng)

            player = self._players[self._turn]
            if isinstance(command, DrawCommand):
                self._apply_draw()
                return MoveResult.APPLIED
            if not isinstance(command, PlayCommand):
                raise InvalidCommandShapeError(f"Unknown command: {command!r}")

            if command.index >= player.hand_size:
                raise OutOfHandBoundsError(
                    f"{command.index} is out of hand range of {player.hand_size}"
                )
            card = player.hand[command.index]
            if card.card_type is CardType.WILD and command.color is None:
                raise MissingWildColorError()
            if not self.is_card_valid(card):
                logger.debug("%s tried to play %s on %s", player.id, card, self._discard.peek())
                return MoveResult.ILLEGAL

            self._apply_play(command)
            if player.hand_size == 0:
                self._winner = self._previous
                logger.info("%s won the game", player.id)
            return MoveResult.APPLIED

    def go_bot(self) -> GameCommand:
        """Let the bot in turn decide its move and execute it.

        Returns the command the bot played.
        """
        with self._lock:
            if self.is_over:
                raise GameAlreadyOverError()
            player = self._players[self._turn]
            if not isinstance(player, BotPlayer):
                raise NotABotError(f"{player.id} is not a bot")
            command = player.decide(self)
            self.execute_move(command)
            return command

    def _apply_draw(self) -> None:
        player = self._players[self._turn]
        self._give_cards(player, 1)
        logger.debug("%s drew a card", player.id)
        self._previous = self._turn
        self._advance()

    def _apply_play(self, command: PlayCommand) -> None:
        player = self._players[self._turn]
        self._previous = self._turn
        card = player.take_from_hand(command.index)

        if card.card_type is CardType.WILD:
            self._discard.push(PlayedCard(card, command.color))
            logger.debug("%s played %s and chose %s", player.id, card, command.color.value)
            if card.symbol is WildSymbol.DRAW_FOUR:
                self._advance_with_penalty(4)
            else:
                self._advance()
            return

        self._discard.push(PlayedCard(card))
        logger.debug("%s played %s", player.id, card)
        if card.symbol is SpecialSymbol.SKIP:
            self._advance(2)
        elif card.symbol is SpecialSymbol.REVERSE:
            self._direction = -self._direction
            # With two players the reverse skips the opponent
            if len(self._players) > 2:
                self._advance()
        elif card.symbol is SpecialSymbol.DRAW_TWO:
            self._advance_with_penalty(2)
        else:
            self._advance()

    def _advance(self, steps: int = 1) -> None:
        self._turn = next_turn(self._turn, self._direction, len(self._players), steps)

    def _advance_with_penalty(self, count: int) -> None:
        """Next player draws `count` cards and loses the turn."""
        self._advance()
        self._give_cards(self._players[self._turn], count)
        self._advance()

    def _give_cards(self, player: Player, count: int) -> None:
        for _ in range(count):
            if not len(self._draw):
                reshuffle_if_low(self._draw, self._discard, self._rng)
            if not len(self._draw):
                logger.warning(
                    "Draw pile exhausted, %s could not draw the remaining cards", player.id
                )
                return
            player.add_to_hand(self._draw.pop())


def new_game(bot_count: int, human_ids: Sequence[str], seed: int | None = None) -> Game:
    """Create a game with `bot_count` bots followed by the given humans.

    Bots are named Bot1, Bot2, ... in order. Each bot gets its own random
    generator seeded from the game one.
    """
    if bot_count < 0:
        raise IllegalPlayerCountError(f"Number of bots must not be negative, got {bot_count}")
    check_player_count(bot_count + len(human_ids))
    rng = random.Random(seed)
    players: List[Player] = [
        BotPlayer(f"{BOT_NAME_PREFIX}{i}", rng=random.Random(rng.getrandbits(64)))
        for i in range(1, bot_count + 1)
    ]
    players.extend(HumanPlayer(player_id) for player_id in human_ids)
    return Game(players, rng=rng)
