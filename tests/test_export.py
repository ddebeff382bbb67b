"""Tests for the export module."""

import json

import pytest

from quakelog.export import (
    export_games_csv,
    export_games_json,
    export_ranking_csv,
    EXPORT_FORMATS,
    export_report,
    format_for_path,
    format_ranking,
    games_to_dataframe,
    games_to_dict,
    render_export,
    render_report,
)
from quakelog.parser import Game, parse_lines
from quakelog.ranking import PlayerRank, generate_ranking


@pytest.fixture
def dono_games():
    """Single world kill on Dono."""
    return parse_lines([
        "InitGame:",
        "ClientUserinfoChanged: 2 n\\Dono\\...",
        "22:00 Kill: 1022 2 22: <world> killed Dono by MOD_TRIGGER_HURT",
    ])


class TestGamesToDict:
    """Tests for report conversion."""

    def test_report_shape(self, dono_games):
        assert games_to_dict(dono_games) == {
            "game_1": {
                "total_kills": 1,
                "players": ["Dono"],
                "kills": {"Dono": -1},
                "kills_by_means": {"MOD_TRIGGER_HURT": 1},
            }
        }

    def test_preserves_game_order(self, sample_lines):
        assert list(games_to_dict(parse_lines(sample_lines))) == ["game_1", "game_2"]


class TestFormatRanking:
    """Tests for ranking report lines."""

    def test_lines_are_one_indexed(self):
        lines = format_ranking([PlayerRank("Zeh", 3), PlayerRank("Dono", -1)])
        assert lines == ["1. Zeh - 3 kills", "2. Dono - -1 kills"]

    def test_empty(self):
        assert format_ranking([]) == []


class TestJsonExport:
    """Tests for JSON export."""

    def test_round_trips_through_json(self, dono_games):
        data = json.loads(export_games_json(dono_games))
        assert data["game_1"]["kills"] == {"Dono": -1}

    def test_writes_file(self, dono_games, tmp_path):
        out = tmp_path / "games.json"
        result = export_games_json(dono_games, out, indent=4)
        assert out.read_text() == result
        assert '\n    "game_1"' in result


class TestRenderReport:
    """Tests for the full text report."""

    def test_layout(self, dono_games):
        text = render_report(dono_games, generate_ranking(dono_games))
        games_part, ranking_part = text.split("\n\nRanking Report:\n")
        assert games_part.startswith("Games Report:\n{")
        assert json.loads(games_part[len("Games Report:\n"):])["game_1"]["total_kills"] == 1
        assert ranking_part == "1. Dono - -1 kills\n"

    def test_empty_collection(self):
        text = render_report({}, [])
        assert text == "Games Report:\n{}\n\nRanking Report:\n"


class TestCsvExport:
    """Tests for CSV export."""

    def test_ranking_csv(self):
        csv_str = export_ranking_csv([PlayerRank("Zeh", 3), PlayerRank("Dono", -1)])
        assert csv_str.splitlines() == ["rank,name,kills", "1,Zeh,3", "2,Dono,-1"]

    def test_ranking_csv_delimiter(self):
        csv_str = export_ranking_csv([PlayerRank("Zeh", 3)], delimiter=";")
        assert csv_str.splitlines()[1] == "1;Zeh;3"

    def test_games_dataframe_includes_unannounced_players(self, sample_lines):
        df = games_to_dataframe(parse_lines(sample_lines))
        game_2 = df[df["game"] == "game_2"]
        assert set(game_2["player"]) == {"Dono", "Zeh", "Isgalamido"}

    def test_games_csv_writes_file(self, tmp_path):
        out = tmp_path / "kills.csv"
        export_games_csv({"game_1": Game(kills={"Dono": 2})}, out)
        assert out.read_text().splitlines() == ["game,player,kills", "game_1,Dono,2"]


class TestExportReport:
    """Tests for extension-based export dispatch."""

    def test_json(self, dono_games, tmp_path):
        out = tmp_path / "report.json"
        export_report(dono_games, generate_ranking(dono_games), out)
        assert json.loads(out.read_text())["game_1"]["players"] == ["Dono"]

    def test_csv(self, dono_games, tmp_path):
        out = tmp_path / "ranking.csv"
        export_report(dono_games, generate_ranking(dono_games), out)
        assert out.read_text().splitlines()[1] == "1,Dono,-1"

    def test_txt(self, dono_games, tmp_path):
        out = tmp_path / "report.txt"
        export_report(dono_games, generate_ranking(dono_games), out)
        assert out.read_text().endswith("Ranking Report:\n1. Dono - -1 kills\n")

    def test_unknown_format(self, dono_games, tmp_path):
        with pytest.raises(ValueError, match="Unsupported export format"):
            export_report(dono_games, [], tmp_path / "report.xml")

    def test_explicit_format_overrides_suffix(self, sample_lines, tmp_path):
        games = parse_lines(sample_lines)
        out = tmp_path / "kills.csv"
        export_report(games, generate_ranking(games), out, fmt="games-csv")
        assert out.read_text().splitlines()[0] == "game,player,kills"


class TestRenderExport:
    """Tests for format-based rendering."""

    def test_every_format_renders(self, dono_games):
        ranking = generate_ranking(dono_games)
        for fmt in EXPORT_FORMATS:
            assert render_export(dono_games, ranking, fmt)

    def test_text_is_full_report(self, dono_games):
        ranking = generate_ranking(dono_games)
        assert render_export(dono_games, ranking, "text") == render_report(dono_games, ranking)

    def test_games_csv(self, dono_games):
        text = render_export(dono_games, [], "games-csv")
        assert text.splitlines() == ["game,player,kills", "game_1,Dono,-1"]

    def test_unknown_format(self, dono_games):
        with pytest.raises(ValueError, match="Unsupported export format"):
            render_export(dono_games, [], "xml")

    def test_format_for_path(self, tmp_path):
        assert format_for_path(tmp_path / "a.TXT") == "text"
        assert format_for_path(tmp_path / "a.json") == "json"
        assert format_for_path(tmp_path / "a.csv") == "csv"
