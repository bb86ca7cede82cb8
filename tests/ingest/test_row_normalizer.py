from typing import Any

from theshow_insights.domain.game_row import GameRow
from theshow_insights.ingest.row_normalizer import (
    CPU_SENTINEL,
    group_ids,
    resolve_side,
    sort_rows,
    summarize,
    to_row,
)


def _record(
    *,
    game_id: str = "1",
    home_name: str = "CPU",
    away_name: str = "jsmith99",
    home_runs: str = "3",
    away_runs: str = "5",
    game_mode: str = "ARENA",
    display_date: str = "04/15/2024 13:05:30",
) -> dict[str, Any]:
    return {
        "id": game_id,
        "game_mode": game_mode,
        "display_date": display_date,
        "home_name": home_name,
        "away_name": away_name,
        "home_full_name": "Home Team",
        "away_full_name": "John's Team",
        "home_runs": home_runs,
        "away_runs": away_runs,
        "home_hits": "8",
        "away_hits": "10",
        "home_errors": "1",
        "away_errors": "0",
        "home_display_result": "L",
        "away_display_result": "W",
        "display_pitcher_info": "W: Cole L: Sale",
    }


class TestCpuSentinel:
    def test_value(self) -> None:
        assert CPU_SENTINEL == "cpu"


class TestResolveSide:
    def test_one_cpu_side_means_user_is_other(self) -> None:
        assert resolve_side("CPU", "whoever", "jsmith99") == "away"
        assert resolve_side("whoever", "^c2^cpu^e^", "jsmith99") == "home"

    def test_substring_match(self) -> None:
        assert resolve_side("JSmith99_PSN", "rival", "jsmith99") == "home"
        assert resolve_side("rival", " jsmith99 ", "JSMITH99") == "away"

    def test_no_match(self) -> None:
        assert resolve_side("rival1", "rival2", "jsmith99") is None


class TestToRow:
    def test_cpu_home_user_away(self) -> None:
        row = to_row(_record(), "jsmith99")
        assert row.you_are == "away"
        assert row.is_cpu is False
        assert row.is_online is True
        assert row.you_runs == 5
        assert row.opp_runs == 3
        assert row.away.name == "John's Team"

    def test_both_cpu(self) -> None:
        row = to_row(_record(home_name="CPU", away_name="CPU"), "jsmith99")
        assert row.is_cpu is True
        assert row.is_online is False
        assert row.you_are is None
        assert row.you_runs is None
        assert row.opp_runs is None

    def test_both_cpu_username_cpu(self) -> None:
        row = to_row(_record(home_name="CPU", away_name="CPU"), "cpu")
        assert row.is_cpu is True
        assert row.you_are == "home"

    def test_numeric_fields_permissive(self) -> None:
        row = to_row(_record(home_runs="x", away_runs="7*"), "jsmith99")
        assert row.home.runs == 0
        assert row.away.runs == 7

    def test_dates(self) -> None:
        assert to_row(_record(), "u").date_iso == "2024-04-15T13:05:30.000Z"
        assert to_row(_record(display_date="not a date"), "u").date_iso is None

    def test_idempotent(self) -> None:
        raw = _record()
        assert to_row(raw, "jsmith99") == to_row(raw, "jsmith99")

    def test_partition(self) -> None:
        names = [("CPU", "CPU"), ("CPU", "a"), ("a", "CPU"), ("a", "b"), ("", "")]
        for home, away in names:
            row = to_row(_record(home_name=home, away_name=away), "a")
            assert row.is_cpu != row.is_online


def _rows() -> list[GameRow]:
    return [
        to_row(_record(game_id="old", display_date="01/02/2024 10:00:00"), "jsmith99"),
        to_row(_record(game_id="bad", display_date="garbage"), "jsmith99"),
        to_row(_record(game_id="new", display_date="03/02/2024 10:00:00", game_mode="EXHIBITION"), "jsmith99"),
        to_row(_record(game_id="cpu", home_name="CPU", away_name="CPU", home_runs="2", away_runs="2"), "jsmith99"),
    ]


class TestSortRows:
    def test_descending_with_nulls_last(self) -> None:
        ordered = sort_rows(_rows())
        assert [r.id for r in ordered] == ["cpu", "new", "old", "bad"]

    def test_sort_invariant(self) -> None:
        ordered = sort_rows(_rows())
        for a, b in zip(ordered, ordered[1:], strict=False):
            assert (
                (a.date_iso is None and b.date_iso is None)
                or b.date_iso is None
                or (a.date_iso is not None and a.date_iso >= b.date_iso)
            )


class TestSummarize:
    def test_counts(self) -> None:
        summary = summarize(_rows())
        assert summary.total_games == 4
        assert summary.online_count == 3
        assert summary.cpu_count == 1
        assert summary.arena_count == 3
        assert summary.exhibition_count == 1
        assert summary.wins == 3
        assert summary.losses == 0
        assert summary.run_diff == 6


class TestGroupIds:
    def test_groups(self) -> None:
        groups = group_ids(sort_rows(_rows()))
        assert groups.all == ("cpu", "new", "old", "bad")
        assert groups.online == ("new", "old", "bad")
        assert groups.vs_cpu == ("cpu",)
        assert groups.arena == ("cpu", "old", "bad")
        assert groups.exhibition == ("new",)
