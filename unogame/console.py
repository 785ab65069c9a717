"""Interactive console session: one human against bots."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional, Sequence

import typer

from unogame.config import Settings
from unogame.engine import (
    Color,
    DrawCommand,
    Game,
    GameCommand,
    InvalidCommandShapeError,
    MissingWildColorError,
    MoveResult,
    OutOfHandBoundsError,
    PlayCommand,
    new_game,
)

logger = logging.getLogger(__name__)

DRAW = "d"
PLAY = "ph"
PRINT_HAND = "p"
RIVALS = "r"
RESTART = "restart"
HELP = "help"
EXIT = "exit"

UNKNOWN_COMMAND = "Unknown command: {}"
NOT_AN_INDEX = "Expected an index after the <{}> command"
NOT_ENOUGH_ARGUMENTS = "Not enough arguments for the <{}> command"
TOO_MANY_ARGUMENTS = "Too many arguments for the <{}> command"
UNKNOWN_COLOR = "Unknown color <{}>, use one of: {}"
INVALID_MOVE = "The move you chose is not valid"
INVALID_INDEX = "Invalid card index"

COMMANDS_HELP = [
    (PRINT_HAND, "Print your hand"),
    (f"{PLAY} <n> [color]", "Play the n-th card of your hand"),
    (DRAW, "Draw a card"),
    (RIVALS, "Check how many cards your opponents have"),
    (RESTART, "Restart the game"),
    (EXIT, "Exit the game"),
    (HELP, "Print this helper"),
]


class CommandFormatError(ValueError):
    """A typed command could not be turned into a game command."""


class MissingArgumentError(CommandFormatError):
    """A play command was typed without the card index."""


def parse_command(tokens: Sequence[str]) -> GameCommand:
    """Convert typed tokens into a game command.

    Card numbers are typed 1-based, so `ph 1` plays the first card in hand.
    """
    if not tokens:
        raise CommandFormatError("Empty command")
    name = tokens[0]
    if name == DRAW:
        if len(tokens) > 1:
            raise CommandFormatError(TOO_MANY_ARGUMENTS.format(name))
        return DrawCommand()
    if name != PLAY:
        raise CommandFormatError(UNKNOWN_COMMAND.format(name))
    if len(tokens) < 2:
        raise MissingArgumentError(NOT_ENOUGH_ARGUMENTS.format(name))
    if len(tokens) > 3:
        raise CommandFormatError(TOO_MANY_ARGUMENTS.format(name))
    try:
        index = int(tokens[1]) - 1
    except ValueError:
        raise CommandFormatError(NOT_AN_INDEX.format(name)) from None

    color = None
    if len(tokens) == 3:
        try:
            color = Color(tokens[2].lower())
        except ValueError:
            names = ", ".join(c.value for c in Color)
            raise CommandFormatError(UNKNOWN_COLOR.format(tokens[2], names)) from None
    return PlayCommand(index=index, color=color)


def format_help() -> str:
    return "\n".join(f"{usage:.<24}{text}" for usage, text in COMMANDS_HELP)


class ConsoleSession:
    """Runs a game in the terminal for the human named in the settings."""

    def __init__(
        self,
        settings: Settings,
        player_count: int,
        seed: Optional[int] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = typer.echo,
        sleep_fn: Callable[[float], None] = time.sleep,
    ):
        self._settings = settings
        self._player_count = player_count
        self._seed = seed
        self._input = input_fn
        self._output = output_fn
        self._sleep = sleep_fn
        self._rng = random.Random(seed)
        self._game = self._new_game()

    @property
    def game(self) -> Game:
        return self._game

    def _new_game(self) -> Game:
        return new_game(self._player_count - 1, [self._settings.user_name], seed=self._seed)

    def run(self) -> None:
        """Play until the game ends or the human exits."""
        self._output("\nWelcome to UNO!!\n")
        try:
            while True:
                self._output(
                    f"Table top: {self._game.discard_top}  |  "
                    f"It's {self._game.player_in_turn.id}'s turn"
                )
                if self._game.player_in_turn.is_bot:
                    command = self._game.go_bot()
                    if self._settings.bot_delay:
                        self._sleep(self._rng.randint(1, 3))
                    self._report(command)
                elif not self._prompt():
                    return
                self._warn_if_rival_is_about_to_win()
                if self._game.is_over:
                    self._output(f"\nGAME OVER!!!\n{self._game.winner.id} Won!")
                    return
        except EOFError:
            logger.debug("Input closed, leaving the game")

    def handle(self, line: str) -> bool:
        """Handle one typed line. Returns False when the human wants to exit."""
        tokens = line.split()
        if not tokens:
            return True
        name = tokens[0]
        if name in (DRAW, PLAY):
            self._draw_or_play(tokens)
            return True
        if name not in (HELP, PRINT_HAND, RIVALS, RESTART, EXIT):
            self._output(f"Invalid command <{name}>, type <{HELP}> to see the available ones\n")
            return True
        if len(tokens) > 1:
            self._output(f"No arguments expected for the <{name}> command\n")
            return True

        if name == HELP:
            self._output(format_help())
        elif name == PRINT_HAND:
            self._print_hand()
        elif name == RIVALS:
            self._print_rivals()
        elif name == RESTART:
            self._game = self._new_game()
            self._output("The game was restarted\n")
        else:
            return False
        return True

    def _prompt(self) -> bool:
        return self.handle(self._input(self._settings.prompt_symbol).strip())

    def _draw_or_play(self, tokens: List[str]) -> None:
        try:
            command = parse_command(tokens)
        except MissingArgumentError:
            self._draw_or_play([tokens[0], str(self._pick_index())])
            return
        except InvalidCommandShapeError:
            self._output(f"{INVALID_INDEX}\n")
            return
        except CommandFormatError as e:
            self._output(f"{e}\n")
            return

        try:
            result = self._game.execute_move(command)
        except OutOfHandBoundsError:
            self._output(f"{INVALID_INDEX}\n")
            return
        except MissingWildColorError:
            self._draw_or_play([*tokens[:2], self._pick_color().value])
            return

        if result is MoveResult.ILLEGAL:
            self._output(INVALID_MOVE)
        else:
            self._report(command)

    def _read_value_in_range(self, low: int, high: int) -> int:
        while True:
            raw = self._input("").strip()
            try:
                value = int(raw)
            except ValueError:
                self._output(f"Invalid input, insert a number between {low} and {high}: ")
                continue
            if low <= value <= high:
                return value
            self._output(f"Invalid value, insert a number between {low} and {high}: ")

    def _pick_index(self) -> int:
        self._output("You have to choose the index of the card you wish to play")
        self._print_hand()
        self._output("Choose please: ")
        return self._read_value_in_range(1, self._game.player_in_turn.hand_size)

    def _pick_color(self) -> Color:
        colors = list(Color)
        options = "\n".join(f"{i}) {c.value.capitalize()}" for i, c in enumerate(colors, 1))
        self._output(f"You have to pick a color for your wild card,\n{options}\nplease choose a color: ")
        return colors[self._read_value_in_range(1, len(colors)) - 1]

    def _print_hand(self) -> None:
        player = self._game.get_player(self._settings.user_name)
        lines = [f"{player.id}'s hand:"]
        lines.extend(f"{i} - {card}" for i, card in enumerate(player.hand, 1))
        self._output("\n".join(lines) + "\n")

    def _print_rivals(self) -> None:
        for player in self._game.players:
            if player.id == self._settings.user_name:
                continue
            noun = "card" if player.hand_size == 1 else "cards"
            self._output(f"{player.id} -> {player.hand_size} {noun} left")

    def _report(self, command: GameCommand) -> None:
        player_id = self._game.previous_player.id
        if isinstance(command, DrawCommand):
            self._output(f"{player_id} has drawn a card\n")
        else:
            self._output(f"{player_id} has played a {self._game.discard_top}\n")

    def _warn_if_rival_is_about_to_win(self) -> None:
        previous = self._game.previous_player
        if previous.hand_size == 1 and previous.id != self._settings.user_name:
            self._output(f"CAREFUL: {previous.id} has only one card left\n")
