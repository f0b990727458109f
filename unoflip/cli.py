"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO Flip with human and computer players")


def _settings():
    from unoflip.config import Settings

    try:
        return Settings.from_env()
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _parse_players(roster: str) -> Tuple[List[str], List[bool]]:
    """Parse "Ann,Bob:ai" into names and AI flags."""
    from unoflip.engine.game import MAX_PLAYERS, MIN_PLAYERS

    names: List[str] = []
    flags: List[bool] = []
    for part in (s.strip() for s in roster.split(",")):
        if not part:
            continue
        if ":" in part:
            name, kind = part.split(":", 1)
        else:
            name, kind = part, "human"
        name, kind = name.strip(), kind.strip().lower()
        if kind not in ("human", "ai"):
            raise typer.BadParameter(f"Unknown player type: {kind}. Use 'human' or 'ai'.")
        if name in names:
            raise typer.BadParameter(f"Duplicate player name: {name}")
        names.append(name)
        flags.append(kind == "ai")
    if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
        raise typer.BadParameter(f"Need {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(names)}")
    return names, flags


def _agents_for(game) -> Dict[str, "AgentProtocol"]:
    from unoflip.agent.protocol import AgentProtocol
    from unoflip.agents import ComputerAgent, HumanAgent

    agents: Dict[str, AgentProtocol] = {}
    for player in game.players:
        if player.is_ai:
            agents[player.name] = ComputerAgent(name=player.name)
        else:
            agents[player.name] = HumanAgent(name=player.name, output_fn=typer.echo)
    return agents


@app.callback()
def main() -> None:
    """Configure logging from UNOFLIP_LOG_LEVEL."""
    logging.basicConfig(
        level=_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def play(
    players: str = typer.Option(
        "You,cpu_1:ai,cpu_2:ai",
        "--players",
        "-p",
        help="Comma-separated names, suffix :ai for computer players (e.g. Ann,Bob:ai)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    load: Optional[str] = typer.Option(None, "--load", "-l", help="Resume a saved game"),
    save_path: Optional[str] = typer.Option(None, "--save-path", help="Where 's' saves the game"),
) -> None:
    """Play an interactive match in the terminal."""
    from unoflip.engine import GameEngine, InvalidSaveError
    from unoflip.orchestration.game_runner import GameRunner

    settings = _settings()
    game = GameEngine(
        seed=seed if seed is not None else settings.seed,
        target_score=settings.target_score,
    )
    if load:
        try:
            game.load(load)
        except (InvalidSaveError, OSError) as e:
            typer.echo(f"Unable to load game: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Loaded game. It is {game.current_player.name}'s turn.")
    else:
        names, flags = _parse_players(players)
        game.new_game(names, flags)

    runner = GameRunner(
        game,
        _agents_for(game),
        save_path=save_path or settings.save_path,
        echo=typer.echo,
    )
    result = runner.run(deal=not load)
    typer.echo("Scores:")
    for name, score in sorted(result.scores.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {score}")
    if result.winner:
        typer.echo(f"Winner: {result.winner}")


@app.command()
def simulate(
    players: int = typer.Option(4, "--players", "-n", help="Number of computer players (2-4)"),
    matches: int = typer.Option(10, "--matches", "-m", help="Number of matches"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    target_score: Optional[int] = typer.Option(None, "--target-score", "-t", help="Points needed to win a match"),
) -> None:
    """Run computer-only matches and report wins."""
    from unoflip.engine.game import MAX_PLAYERS, MIN_PLAYERS
    from unoflip.orchestration.tournament import run_tournament

    if not MIN_PLAYERS <= players <= MAX_PLAYERS:
        raise typer.BadParameter(f"Need {MIN_PLAYERS}-{MAX_PLAYERS} players, got {players}")
    settings = _settings()
    wins = run_tournament(
        num_players=players,
        num_matches=matches,
        seed=seed if seed is not None else settings.seed,
        target_score=target_score or settings.target_score,
    )
    typer.echo("Tournament results:")
    for name, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {name}: {w} wins")


if __name__ == "__main__":
    app()
