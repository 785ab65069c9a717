"""Tournament - run many bot games and aggregate results."""

import random
from collections import defaultdict

from unogame.orchestration.game_runner import GameRunner


def run_tournament(
    bot_count: int,
    num_games: int = 100,
    seed: int | None = None,
) -> dict[str, int]:
    """Run `num_games` bot-only games, each with its own seed.

    Returns:
        Dict mapping bot id to number of wins.
    """
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for _ in range(num_games):
        runner = GameRunner(bot_count, seed=rng.randint(0, 2**31 - 1))
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
