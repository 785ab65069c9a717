"""Single bot-only game runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from unogame.engine import new_game

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    player_ids: tuple[str, ...]


class GameRunner:
    """Runs a game between bots to completion."""

    def __init__(
        self,
        bot_count: int,
        seed: Optional[int] = None,
        max_turns: int = 10000,
    ):
        self._bot_count = bot_count
        self._seed = seed
        self._max_turns = max_turns

    def run(self) -> GameResult:
        """Run the game and return the result."""
        game = new_game(self._bot_count, [], seed=self._seed)
        num_turns = 0

        while not game.is_over and num_turns < self._max_turns:
            game.go_bot()
            num_turns += 1

        winner = game.winner
        if winner is None:
            logger.warning("Game stopped after %d turns without a winner", num_turns)
        return GameResult(
            winner=winner.id if winner else None,
            num_turns=num_turns,
            player_ids=tuple(p.id for p in game.players),
        )
