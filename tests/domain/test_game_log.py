import pytest

from theshow_insights.domain.game_log import (
    BattingTotals,
    BoxBatter,
    BoxPitcher,
    BoxSide,
    PitchingTotals,
    StrikeoutBreakdown,
)


class TestStrikeoutBreakdown:
    def test_merged_sums_counts(self) -> None:
        a = StrikeoutBreakdown({"slider": 2}, {"low": 1, "high": 1}, swinging=1, looking=1, chase=1)
        b = StrikeoutBreakdown({"slider": 1, "sinker": 1}, {"low": 2}, swinging=2, looking=0, chase=0)
        merged = StrikeoutBreakdown.merged([a, b])
        assert merged.by_pitch == {"slider": 3, "sinker": 1}
        assert merged.by_location == {"low": 3, "high": 1}
        assert (merged.swinging, merged.looking, merged.chase) == (3, 1, 1)
        assert merged.total == 4

    def test_merged_empty(self) -> None:
        assert StrikeoutBreakdown.merged([]) == StrikeoutBreakdown()


class TestBoxSide:
    def test_derived_hits(self) -> None:
        side = BoxSide(
            batting_totals=BattingTotals(ab=10, h=5),
            batting_stats=(
                BoxBatter("Aaron Judge", ab=5, h=3, doubles=1, hr=1, gidp=1),
                BoxBatter("Juan Soto", ab=5, h=2, triples=1),
            ),
        )
        assert side.doubles == 1
        assert side.triples == 1
        assert side.home_runs == 1
        assert side.gidp == 1
        assert side.singles == 2
        assert side.total_bases == 2 + 2 + 3 + 4

    def test_singles_never_negative(self) -> None:
        side = BoxSide(batting_totals=BattingTotals(h=0), batting_stats=(BoxBatter("Aaron Judge", hr=2),))
        assert side.singles == 0

    def test_empty_side(self) -> None:
        side = BoxSide()
        assert side.total_bases == 0
        assert side.pitching_totals.ip == 0


class TestInnings:
    @pytest.mark.parametrize(("outs", "expected"), [(0, 0.0), (3, 1.0), (20, 20 / 3)])
    def test_ip_from_outs(self, outs: int, expected: float) -> None:
        assert PitchingTotals(outs=outs).ip == pytest.approx(expected)
        assert BoxPitcher("Gerrit Cole", outs=outs).ip == pytest.approx(expected)
