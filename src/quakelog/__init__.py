"""
QuakeLog - Quake 3 Arena Server Log Analyzer

Turns a game server log into per-game statistics (kills, players,
causes of death) and a cross-game player ranking.

Usage:
    from quakelog import parse_log_file, generate_ranking

    games = parse_log_file("games.log")
    for position, player in enumerate(generate_ranking(games), start=1):
        print(f"{position}. {player.name} - {player.kills} kills")
"""

__version__ = "0.1.0"
__author__ = "QuakeLog Contributors"


def __getattr__(name):
    """Lazy import so `import quakelog` does not pull in pandas."""
    # Parser
    if name == "Game":
        from quakelog.parser import Game
        return Game
    elif name == "LogParser":
        from quakelog.parser import LogParser
        return LogParser
    elif name == "parse_lines":
        from quakelog.parser import parse_lines
        return parse_lines
    elif name == "parse_log_file":
        from quakelog.parser import parse_log_file
        return parse_log_file
    # Ranking
    elif name == "PlayerRank":
        from quakelog.ranking import PlayerRank
        return PlayerRank
    elif name == "generate_ranking":
        from quakelog.ranking import generate_ranking
        return generate_ranking
    # Export
    elif name == "render_report":
        from quakelog.export import render_report
        return render_report
    raise AttributeError(f"module 'quakelog' has no attribute '{name}'")


__all__ = [
    # Version
    "__version__",
    # Parser
    "Game",
    "LogParser",
    "parse_lines",
    "parse_log_file",
    # Ranking
    "PlayerRank",
    "generate_ranking",
    # Export
    "render_report",
]
