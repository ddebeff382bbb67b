"""
Cross-game player ranking.

Sums each player's net kills over every game in a collection and orders
players from best to worst. Equal totals are ordered by name so the
ranking is stable across runs.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd

from quakelog.parser import Game, bump

logger = logging.getLogger(__name__)


@dataclass
class PlayerRank:
    """A player's net kills summed across games."""

    name: str
    kills: int


def total_kills_by_player(games: Mapping[str, Game]) -> dict[str, int]:
    """Sum every game's kills map into a single per-player total."""
    totals: dict[str, int] = {}
    for game in games.values():
        for player, kills in game.kills.items():
            bump(totals, player, kills)
    return totals


def generate_ranking(games: Mapping[str, Game]) -> list[PlayerRank]:
    """
    Rank players by net kills across all games.

    Args:
        games: Parsed game collection

    Returns:
        PlayerRank list, kills descending then name ascending
    """
    totals = total_kills_by_player(games)
    ranking = [PlayerRank(name=name, kills=kills) for name, kills in totals.items()]
    ranking.sort(key=lambda r: (-r.kills, r.name))

    logger.debug(f"Ranked {len(ranking)} player(s) over {len(games)} game(s)")
    return ranking


def ranking_to_dataframe(ranking: list[PlayerRank]) -> pd.DataFrame:
    """Tabular view of a ranking with a 1-indexed rank column."""
    return pd.DataFrame(
        {
            "rank": range(1, len(ranking) + 1),
            "name": [r.name for r in ranking],
            "kills": [r.kills for r in ranking],
        },
        columns=["rank", "name", "kills"],
    )
