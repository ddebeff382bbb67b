"""
Export Functionality for QuakeLog

Serializes parsed games and rankings:
- Plain-text full report (games JSON followed by the ranking, default)
- JSON games report
- CSV ranking / per-game kill tables

Serialization errors are not caught here; callers decide how to abort.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from quakelog.parser import Game
from quakelog.ranking import PlayerRank, ranking_to_dataframe

logger = logging.getLogger(__name__)


# ============================================================================
# Data Conversion
# ============================================================================

def games_to_dict(games: Mapping[str, Game]) -> dict[str, dict[str, Any]]:
    """Convert a game collection to the report mapping."""
    return {key: game.to_dict() for key, game in games.items()}


def games_to_dataframe(games: Mapping[str, Game]) -> pd.DataFrame:
    """
    Long-format table of net kills, one row per (game, player).

    Players that scored without ever being announced are included.
    """
    rows = [
        {"game": key, "player": player, "kills": kills}
        for key, game in games.items()
        for player, kills in game.kills.items()
    ]
    return pd.DataFrame(rows, columns=["game", "player", "kills"])


# ============================================================================
# Text Reports
# ============================================================================

def format_ranking(ranking: list[PlayerRank]) -> list[str]:
    """Ranking report lines, e.g. `1. Dono - -1 kills`."""
    return [
        f"{position}. {player.name} - {player.kills} kills"
        for position, player in enumerate(ranking, start=1)
    ]


def export_games_json(
    games: Mapping[str, Game],
    output_path: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Export the games report to JSON.

    Args:
        games: Parsed game collection
        output_path: Optional path to write the file
        indent: JSON indentation level

    Returns:
        JSON string
    """
    json_str = json.dumps(games_to_dict(games), indent=indent)

    if output_path:
        output_path.write_text(json_str)
        logger.info(f"Exported JSON to: {output_path}")

    return json_str


def render_report(
    games: Mapping[str, Game],
    ranking: list[PlayerRank],
    indent: int = 2,
) -> str:
    """Full text report: games document then the ranking lines."""
    sections = [
        "Games Report:",
        export_games_json(games, indent=indent),
        "",
        "Ranking Report:",
        *format_ranking(ranking),
    ]
    return "\n".join(sections) + "\n"


# ============================================================================
# CSV Export
# ============================================================================

def export_ranking_csv(
    ranking: list[PlayerRank],
    output_path: Optional[Path] = None,
    delimiter: str = ",",
) -> str:
    """Export the ranking as CSV with rank, name and kills columns."""
    csv_str = ranking_to_dataframe(ranking).to_csv(index=False, sep=delimiter)

    if output_path:
        output_path.write_text(csv_str)
        logger.info(f"Exported ranking CSV to: {output_path}")

    return csv_str


def export_games_csv(
    games: Mapping[str, Game],
    output_path: Optional[Path] = None,
    delimiter: str = ",",
) -> str:
    """Export per-game, per-player net kills as CSV."""
    csv_str = games_to_dataframe(games).to_csv(index=False, sep=delimiter)

    if output_path:
        output_path.write_text(csv_str)
        logger.info(f"Exported games CSV to: {output_path}")

    return csv_str


# ============================================================================
# Main Export Function
# ============================================================================

EXPORT_FORMATS = ("text", "json", "csv", "games-csv")

SUFFIX_FORMATS = {
    ".txt": "text",
    ".json": "json",
    ".csv": "csv",
}


def render_export(
    games: Mapping[str, Game],
    ranking: list[PlayerRank],
    fmt: str,
    indent: int = 2,
    delimiter: str = ",",
) -> str:
    """
    Render results in one of EXPORT_FORMATS.

    - text: full report (games JSON followed by the ranking)
    - json: games report
    - csv: ranking table
    - games-csv: per-game, per-player net kills
    """
    if fmt == "text":
        return render_report(games, ranking, indent=indent)
    elif fmt == "json":
        return export_games_json(games, indent=indent)
    elif fmt == "csv":
        return export_ranking_csv(ranking, delimiter=delimiter)
    elif fmt == "games-csv":
        return export_games_csv(games, delimiter=delimiter)
    raise ValueError(
        f"Unsupported export format: {fmt}. Supported formats: {', '.join(EXPORT_FORMATS)}"
    )


def format_for_path(output_path: Path) -> str:
    """Export format implied by a file extension."""
    suffix = Path(output_path).suffix.lower()
    if suffix not in SUFFIX_FORMATS:
        raise ValueError(
            f"Unsupported export format: {suffix}. Supported formats: .json, .csv, .txt"
        )
    return SUFFIX_FORMATS[suffix]


def export_report(
    games: Mapping[str, Game],
    ranking: list[PlayerRank],
    output_path: Path,
    fmt: Optional[str] = None,
    indent: int = 2,
    delimiter: str = ",",
) -> None:
    """
    Write results to a file.

    Args:
        games: Parsed game collection
        ranking: Ranking derived from games
        output_path: Output file path
        fmt: One of EXPORT_FORMATS; detected from the extension when None
            (.txt text, .json games report, .csv ranking)
        indent: JSON indentation level
        delimiter: CSV delimiter character
    """
    output_path = Path(output_path)
    if fmt is None:
        fmt = format_for_path(output_path)

    content = render_export(games, ranking, fmt, indent=indent, delimiter=delimiter)
    output_path.write_text(content)
    logger.info(f"Exported {fmt} to: {output_path}")
