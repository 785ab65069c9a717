"""Game orchestration."""

from unogame.orchestration.game_runner import GameResult, GameRunner
from unogame.orchestration.tournament import run_tournament

__all__ = ["GameResult", "GameRunner", "run_tournament"]
