"""Normalize the game log's box-score JSON into ``BoxSide`` values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from theshow_insights.domain.game_log import BattingTotals, BoxBatter, BoxPitcher, BoxSide, PitchingTotals
from theshow_insights.ingest.text_utils import clean_batter_name, clean_pitcher_name, ip_to_outs, parse_int_safe

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

_BATTING_FIELDS = (
    "ab",
    "r",
    "h",
    "rbi",
    "bb",
    "so",
    "doubles",
    "triples",
    "hr",
    "hbp",
    "sf",
    "sh",
    "gidp",
    "sb",
    "cs",
    "e",
    "pb",
)
_TOTALS_FIELDS = ("ab", "r", "h", "rbi", "bb", "so", "hbp", "sf", "sh", "sb", "cs", "e", "pb")


def team_block(team: object) -> Mapping[str, Any] | None:
    """Return the stats object stored under a team's numeric id key, if any."""
    if not isinstance(team, dict):
        return None
    for key, value in team.items():
        if str(key).isdigit() and isinstance(value, dict):
            return value
    return None


def _batter(raw: Mapping[str, Any]) -> BoxBatter:
    values = {name: parse_int_safe(raw.get(name)) for name in _BATTING_FIELDS}
    return BoxBatter(player_name=clean_batter_name(raw.get("player_name")), **values)


def _pitcher(raw: Mapping[str, Any]) -> BoxPitcher:
    return BoxPitcher(
        player_name=clean_pitcher_name(raw.get("player_name")),
        outs=ip_to_outs(raw.get("ip")),
        h=parse_int_safe(raw.get("h")),
        r=parse_int_safe(raw.get("r")),
        er=parse_int_safe(raw.get("er")),
        bb=parse_int_safe(raw.get("bb")),
        so=parse_int_safe(raw.get("so")),
        hr=parse_int_safe(raw.get("hr")),
    )


def _rows(block: Mapping[str, Any] | None, key: str) -> Sequence[Mapping[str, Any]]:
    if block is None:
        return ()
    rows = block.get(key)
    if not isinstance(rows, list):
        return ()
    return [row for row in rows if isinstance(row, dict)]


def build_box_side(block: Mapping[str, Any] | None) -> BoxSide:
    """Build one team's box score; batting totals are summed from the player rows."""
    batters = tuple(_batter(row) for row in _rows(block, "batting_stats"))
    totals = BattingTotals(**{name: sum(getattr(b, name) for b in batters) for name in _TOTALS_FIELDS})

    pitchers = tuple(_pitcher(row) for row in _rows(block, "pitching_stats"))
    raw_totals = (block or {}).get("pitching_totals")
    if not isinstance(raw_totals, dict):
        raw_totals = {}
    pitching_totals = PitchingTotals(
        outs=ip_to_outs(raw_totals.get("ip")),
        h=parse_int_safe(raw_totals.get("h")),
        r=parse_int_safe(raw_totals.get("r")),
        er=parse_int_safe(raw_totals.get("er")),
        bb=parse_int_safe(raw_totals.get("bb")),
        so=parse_int_safe(raw_totals.get("so")),
    )
    return BoxSide(
        batting_totals=totals,
        batting_stats=batters,
        pitching_totals=pitching_totals,
        pitching_stats=pitchers,
    )


def parse_runs_by_inning(line: object) -> tuple[int, ...]:
    """Split a ``"0,1,0,X"`` line score; ``X`` (home half not played) counts as zero."""
    text = "" if line is None else str(line).strip()
    if not text:
        return ()
    return tuple(0 if part.strip().upper() == "X" else parse_int_safe(part) for part in text.split(","))
