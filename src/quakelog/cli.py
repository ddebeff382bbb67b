"""
QuakeLog CLI - Command Line Interface for Quake 3 Arena log statistics

Provides commands for:
- Printing the full games and ranking report
- Showing the player ranking
- Summarizing games
- Generating a default configuration file
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from quakelog import __version__
from quakelog.core.config import QuakeLogConfig, generate_default_config, get_config, load_config, set_config
from quakelog.core.utils import PerformanceMonitor, setup_logging
from quakelog.export import EXPORT_FORMATS, export_report, render_export
from quakelog.parser import GameCollection, parse_log_file
from quakelog.ranking import generate_ranking

app = typer.Typer(
    name="quakelog",
    help="Quake 3 Arena server log analyzer - per-game kill statistics and player ranking",
    add_completion=False,
)
console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]QuakeLog[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (.yaml, .toml or .json)",
        dir_okay=False,
    ),
) -> None:
    """QuakeLog - Quake 3 Arena Log Analyzer"""
    try:
        config = load_config(config_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1)

    set_config(config)
    setup_logging(config.logging, verbose=verbose)


def _resolve_log_path(log_path: Optional[Path], config: QuakeLogConfig) -> Path:
    return log_path if log_path is not None else Path(config.parser.log_path)


def _load_games(log_path: Path, config: QuakeLogConfig) -> GameCollection:
    """Parse the log, exiting with status 1 on I/O errors."""
    try:
        with PerformanceMonitor(f"Parsing {log_path.name}", log_level=logging.DEBUG):
            return parse_log_file(log_path, encoding=config.parser.encoding)
    except (OSError, LookupError) as e:
        console.print(f"[red]Error parsing log file:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def report(
    log_path: Optional[Path] = typer.Argument(
        None,
        help="Path to the server log (defaults to parser.log_path from config)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write results to a file (format from --format, else from extension: .json, .csv, .txt)"
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {', '.join(EXPORT_FORMATS)} (defaults to export.default_format from config)"
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        help="JSON indentation (defaults to export.json_indent from config)"
    ),
) -> None:
    """
    Print the games report followed by the player ranking.

    The games report maps game_1, game_2, ... to total kills, players,
    net kills per player and kills by means of death. Other formats
    (json, csv, games-csv) print just that part.
    """
    config = get_config()
    games = _load_games(_resolve_log_path(log_path, config), config)
    ranking = generate_ranking(games)
    json_indent = indent if indent is not None else config.export.json_indent
    delimiter = config.export.csv_delimiter

    try:
        text = render_export(
            games,
            ranking,
            fmt or config.export.default_format,
            indent=json_indent,
            delimiter=delimiter,
        )
        if output:
            export_report(
                games,
                ranking,
                output,
                fmt=fmt,
                indent=json_indent,
                delimiter=delimiter,
            )
    except (TypeError, ValueError, OSError) as e:
        console.print(f"[red]Error generating report:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        text, markup=False, highlight=False, soft_wrap=True,
        end="" if text.endswith("\n") else "\n",
    )

    if output:
        console.print(f"\n[green]Results exported to:[/green] {output}")


@app.command()
def rank(
    log_path: Optional[Path] = typer.Argument(
        None,
        help="Path to the server log (defaults to parser.log_path from config)",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        min=1,
        help="Only show the top N players"
    ),
) -> None:
    """
    Display players ranked by net kills across all games.
    """
    config = get_config()
    games = _load_games(_resolve_log_path(log_path, config), config)
    ranking = generate_ranking(games)

    if not ranking:
        console.print("[yellow]No players found[/yellow]")
        return

    if top is not None:
        ranking = ranking[:top]

    table = Table(title="Player Ranking")
    table.add_column("#", justify="right")
    table.add_column("Player", style="cyan")
    table.add_column("Kills", justify="right")

    for position, player in enumerate(ranking, start=1):
        style = "red" if player.kills < 0 else None
        table.add_row(str(position), player.name, str(player.kills), style=style)

    console.print(table)


@app.command()
def games(
    log_path: Optional[Path] = typer.Argument(
        None,
        help="Path to the server log (defaults to parser.log_path from config)",
    ),
) -> None:
    """
    Display a one-row summary of every game in the log.
    """
    config = get_config()
    parsed = _load_games(_resolve_log_path(log_path, config), config)

    if not parsed:
        console.print("[yellow]No games found[/yellow]")
        return

    table = Table(title="Games")
    table.add_column("Game", style="cyan")
    table.add_column("Kills", justify="right")
    table.add_column("Players", justify="right")
    table.add_column("Top Means")

    for key, game in parsed.items():
        top_means = max(game.kills_by_means, key=game.kills_by_means.get, default="-")
        table.add_row(key, str(game.total_kills), str(len(game.players)), top_means)

    console.print(table)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        Path("quakelog.yaml"),
        help="Where to write the config (.yaml or .json)",
        dir_okay=False,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file"
    ),
) -> None:
    """
    Write a default configuration file.
    """
    if path.exists() and not force:
        console.print(f"[red]Error:[/red] {path} already exists (use --force to overwrite)")
        raise typer.Exit(1)

    try:
        generate_default_config(path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Config written to:[/green] {path}")


@app.command()
def info() -> None:
    """
    Display information about QuakeLog and the environment.
    """
    import platform as plat

    import pandas as pd

    config = get_config()
    console.print(f"\n[bold blue]QuakeLog[/bold blue] v{__version__}\n")

    table = Table(show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Python", plat.python_version())
    table.add_row("Platform", plat.system())
    table.add_row("pandas", pd.__version__)

    log_path = Path(config.parser.log_path)
    status = "[green]exists[/green]" if log_path.exists() else "[yellow]not found[/yellow]"
    table.add_row("Default Log", f"{log_path} ({status})")

    console.print(table)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
