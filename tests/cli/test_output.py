import json
from typing import Any

import pytest

from theshow_insights.cli._output import print_aggregate, print_error, print_game, print_history, print_json
from theshow_insights.domain.enums import GameMode, Platform, Subset
from theshow_insights.domain.game_log import GameLogDetail
from theshow_insights.domain.insights import InsightsResponse, InsightsUser, PageInfo
from theshow_insights.ingest.game_log_parser import parse_game_log
from theshow_insights.ingest.row_normalizer import group_ids, sort_rows, summarize, to_row
from theshow_insights.services.aggregator import aggregate_games

_LOG = (
    "Fenway Park^n^Hitting Difficulty is All-Star. Pitching Difficulty is Veteran.^n^Inning 1^n^"
    "Yankees batting. Chris Sale pitching. Aaron Judge homered to left.^n^"
    "Red Sox batting. Gerrit Cole pitching. Rafael Devers called out on strikes on a sinker low."
)


def _detail() -> GameLogDetail:
    home = {
        "r": "0,0,0",
        "111": {
            "batting_stats": [{"player_name": "Rafael Devers", "ab": "3", "so": "1"}],
            "pitching_stats": [{"player_name": "Chris Sale", "ip": "3.0", "h": "1", "r": "1", "er": "1"}],
            "pitching_totals": {"ip": "3.0", "h": "1", "r": "1", "er": "1"},
        },
    }
    away = {
        "r": "1,0,0",
        "147": {
            "batting_stats": [{"player_name": "Aaron Judge", "ab": "3", "h": "1", "hr": "1", "r": "1"}],
            "pitching_stats": [{"player_name": "Gerrit Cole", "ip": "3.0", "so": "1"}],
            "pitching_totals": {"ip": "3.0", "so": "1"},
        },
    }
    payload = {"game": [["game_log", _LOG], ["box_score", [home, away]]]}
    return parse_game_log(payload, "g7", "away", "Red Sox", "Yankees")


def _history(records: list[dict[str, Any]]) -> InsightsResponse:
    rows = sort_rows(to_row(r, "jsmith99") for r in records)
    return InsightsResponse(
        user=InsightsUser("jsmith99", Platform.XBL, GameMode.ALL),
        summary=summarize(rows),
        groups=group_ids(rows),
        game_log=tuple(rows),
        next=PageInfo(False, 1, 1),
    )


class TestPrintHistory:
    def test_rows(self, capsys: pytest.CaptureFixture[str]) -> None:
        response = _history(
            [
                {
                    "id": "g7",
                    "game_mode": "ARENA",
                    "display_date": "05/04/2024 18:30:00",
                    "home_name": "rival",
                    "away_name": "jsmith99",
                    "home_full_name": "Red Sox",
                    "away_full_name": "Yankees",
                    "home_runs": "0",
                    "away_runs": "1",
                }
            ]
        )
        print_history(response)
        out = capsys.readouterr().out
        assert "jsmith99" in out
        assert "1W" in out
        assert "g7" in out

    def test_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_history(_history([]))
        assert "No games found." in capsys.readouterr().out


class TestPrintGame:
    def test_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_game(_detail())
        out = capsys.readouterr().out
        assert "Fenway Park" in out
        assert "All-Star" in out
        assert "1 looking" in out


class TestPrintAggregate:
    def test_tables(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_aggregate(aggregate_games([_detail()], Subset.ALL, 10))
        out = capsys.readouterr().out
        assert "1 counted" in out
        assert "Fenway Park" in out
        assert "Aaron Judge" in out


class TestPrintJson:
    def test_dataclass(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_json(_detail().meta)
        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "id": "g7",
            "ballpark": "Fenway Park",
            "hitting_difficulty": "All-Star",
            "pitching_difficulty": "Veteran",
        }

    def test_plain_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_json({"ok": True})
        assert json.loads(capsys.readouterr().out) == {"ok": True}


class TestPrintError:
    def test_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_error("game_log g7 failed")
        captured = capsys.readouterr()
        assert "game_log g7 failed" in captured.err
        assert captured.out == ""
