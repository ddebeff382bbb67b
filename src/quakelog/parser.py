"""
Game Log Parser for Quake 3 Arena Server Logs

Segments a line-oriented server log into discrete games and builds
per-game statistics (kill totals, player rosters, net kills per player,
kills grouped by means of death).

Three line markers drive the parser, everything else is inert:
- InitGame:              starts a new game
- ClientUserinfoChanged  announces a player
- Kill:                  a kill event

Malformed marker lines are skipped; only I/O failures are errors.
"""

import logging
import threading
from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple, Optional

logger = logging.getLogger(__name__)


INIT_GAME_MARKER = "InitGame:"
PLAYER_INFO_MARKER = "ClientUserinfoChanged"
KILL_MARKER = "Kill:"

PLAYER_INFO_DELIMITER = "\\"
KILL_SEGMENT_SEPARATOR = ": "
WORLD_ATTACKER = "<world>"

# Minimum pieces for a kill line to be usable
MIN_KILL_SEGMENTS = 3
MIN_KILL_TOKENS = 4


class ParseCancelledError(RuntimeError):
    """Raised when a parse is cancelled through its cancel event."""


@dataclass
class Game:
    """Statistics for a single game session."""

    total_kills: int = 0
    players: list[str] = field(default_factory=list)
    kills: dict[str, int] = field(default_factory=dict)
    kills_by_means: dict[str, int] = field(default_factory=dict)

    def add_player(self, name: str) -> bool:
        """Register a player once; returns False for re-announcements."""
        if name in self.players:
            return False
        self.players.append(name)
        self.kills[name] = 0
        return True

    def record_kill(self, event: "KillEvent") -> None:
        """Apply a kill event to the game's aggregates."""
        bump(self.kills_by_means, event.means)
        self.total_kills += 1

        if event.attacker == WORLD_ATTACKER:
            bump(self.kills, event.victim, -1)
        else:
            bump(self.kills, event.attacker)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_kills": self.total_kills,
            "players": list(self.players),
            "kills": dict(self.kills),
            "kills_by_means": dict(self.kills_by_means),
        }


GameCollection = dict[str, Game]


class KillEvent(NamedTuple):
    """A recognized kill: attacker, victim and the means of death."""

    attacker: str
    victim: str
    means: str


@dataclass
class ParseState:
    """
    Explicit parser state threaded through process_line.

    `current` holds the identifier of the game being filled, or None
    before the first InitGame marker.
    """

    games: GameCollection = field(default_factory=dict)
    game_count: int = 0
    current: Optional[str] = None

    @property
    def current_game(self) -> Optional[Game]:
        if self.current is None:
            return None
        return self.games[self.current]


def bump(counter: MutableMapping[str, int], key: str, delta: int = 1) -> int:
    """
    Lookup-or-insert-zero, then add delta.

    Keys appear on first reference with an implicit zero baseline.

    Returns:
        The updated value for key
    """
    counter[key] = counter.get(key, 0) + delta
    return counter[key]


def game_key(number: int) -> str:
    """Identifier for the nth game in a log (1-indexed)."""
    return f"game_{number}"


def extract_player_name(line: str) -> Optional[str]:
    """
    Pull the player name out of a ClientUserinfoChanged line.

    The name is the field right after the first backslash:
        ClientUserinfoChanged: 2 n\\Dono\\t\\0\\model\\...
    """
    fields = line.split(PLAYER_INFO_DELIMITER)
    if len(fields) < 2:
        return None
    return fields[1] or None


def parse_kill(line: str) -> Optional[KillEvent]:
    """
    Parse a kill line into a KillEvent.

    Example:
        21:42 Kill: 1022 2 22: <world> killed Dono by MOD_TRIGGER_HURT

    Returns:
        KillEvent, or None when the line is malformed
    """
    segments = line.split(KILL_SEGMENT_SEPARATOR)
    if len(segments) < MIN_KILL_SEGMENTS:
        return None

    tokens = segments[-1].split()
    if len(tokens) < MIN_KILL_TOKENS:
        return None

    # tokens[1] is the "killed" connector
    return KillEvent(attacker=tokens[0], victim=tokens[2], means=tokens[-1])


def process_line(state: ParseState, line: str) -> ParseState:
    """
    Advance the parser by one line.

    The init, player-info and kill checks are independent and run in
    that order, so one line may trigger several of them.
    """
    if INIT_GAME_MARKER in line:
        state.game_count += 1
        key = game_key(state.game_count)
        state.games[key] = Game()
        state.current = key
        logger.debug(f"Started {key}")

    game = state.current_game
    if game is None:
        return state

    if PLAYER_INFO_MARKER in line:
        name = extract_player_name(line)
        if name:
            game.add_player(name)

    if KILL_MARKER in line:
        event = parse_kill(line)
        if event is None:
            logger.debug(f"Skipping malformed kill line in {state.current}: {line!r}")
        else:
            game.record_kill(event)

    return state


def parse_lines(
    lines: Iterable[str],
    cancel_event: Optional[threading.Event] = None,
) -> GameCollection:
    """
    Parse a sequence of log lines into a game collection.

    Args:
        lines: Any iterable of text lines (a file object works)
        cancel_event: Optional event; once set, the next line read raises
            ParseCancelledError

    Returns:
        Mapping of game identifier to Game, in encounter order
    """
    state = ParseState()

    for line in lines:
        if cancel_event is not None and cancel_event.is_set():
            raise ParseCancelledError(
                f"Parse cancelled after {state.game_count} game(s)"
            )
        state = process_line(state, line.rstrip("\r\n"))

    return state.games


def parse_log_file(
    path: str | Path,
    encoding: str = "utf-8",
    cancel_event: Optional[threading.Event] = None,
) -> GameCollection:
    """
    Parse a log file from disk.

    Errors opening or reading the file propagate as OSError subclasses.
    Undecodable bytes are replaced so that binary noise cannot abort a parse.
    """
    path = Path(path)
    logger.info(f"Parsing log: {path}")

    with open(path, encoding=encoding, errors="replace") as f:
        games = parse_lines(f, cancel_event=cancel_event)

    total = sum(game.total_kills for game in games.values())
    logger.info(f"Parsed {len(games)} game(s), {total} kill(s) from {path.name}")
    return games


class LogParser:
    """
    Parser bound to a single log file.

    Caches its result so repeated calls to parse() read the file once.
    """

    def __init__(self, log_path: str | Path, encoding: str = "utf-8"):
        """
        Initialize the parser with a log file path.

        Args:
            log_path: Path to the server log
            encoding: Text encoding of the log
        """
        self.log_path = Path(log_path)
        if not self.log_path.exists():
            raise FileNotFoundError(f"Log file not found: {log_path}")
        if self.log_path.is_dir():
            raise IsADirectoryError(f"Expected a log file, got a directory: {log_path}")

        self.encoding = encoding
        self._games: Optional[GameCollection] = None

    def parse(self, cancel_event: Optional[threading.Event] = None) -> GameCollection:
        if self._games is None:
            self._games = parse_log_file(
                self.log_path, encoding=self.encoding, cancel_event=cancel_event
            )
        return self._games
