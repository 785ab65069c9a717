"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import click
import typer
from dotenv import load_dotenv

from unogame.engine import MAX_PLAYERS, MIN_PLAYERS

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO game against greedy bots")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def play(
    players: Optional[int] = typer.Option(
        None,
        "--players",
        "-n",
        min=MIN_PLAYERS,
        max=MAX_PLAYERS,
        help="Number of players including you (asked for if omitted)",
    ),
    name: Optional[str] = typer.Option(None, "--name", help="Your player name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    no_delay: bool = typer.Option(False, "--no-delay", help="Report bot moves without pausing"),
) -> None:
    """Play a game in the terminal against bots."""
    from dataclasses import replace

    from unogame.config import load_settings
    from unogame.console import ConsoleSession

    settings = load_settings()
    if name:
        settings = replace(settings, user_name=name)
    if no_delay:
        settings = replace(settings, bot_delay=False)
    _configure_logging(settings.log_level)

    if players is None:
        players = typer.prompt(
            "How many players will your game have?",
            type=click.IntRange(MIN_PLAYERS, MAX_PLAYERS),
        )
    try:
        session = ConsoleSession(settings, players, seed=seed)
    except ValueError as e:
        # A name such as Bot1 clashes with a bot id
        typer.echo(f"Cannot start the game as {settings.user_name!r}: {e}", err=True)
        raise typer.Exit(code=1)
    session.run()


@app.command()
def simulate(
    bots: int = typer.Option(
        4, "--bots", "-b", min=MIN_PLAYERS, max=MAX_PLAYERS, help="Number of bots"
    ),
    games: int = typer.Option(1, "--games", "-g", min=1, help="Number of games"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Run bot-only games and report the winners."""
    from unogame.config import load_settings
    from unogame.orchestration import GameRunner, run_tournament

    _configure_logging(load_settings().log_level)

    if games == 1:
        result = GameRunner(bots, seed=seed).run()
        typer.echo(f"Winner: {result.winner or 'None (turn limit reached)'}")
        typer.echo(f"Turns: {result.num_turns}")
        return

    wins = run_tournament(bots, num_games=games, seed=seed)
    typer.echo("Tournament results:")
    for pid, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {pid}: {w} wins")


if __name__ == "__main__":
    app()
