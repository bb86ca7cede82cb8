from __future__ import annotations

from typing import TYPE_CHECKING, Any

from theshow_insights.domain.game_row import GameRow, Side, TeamLine
from theshow_insights.domain.insights import InsightsGroups, InsightsSummary
from theshow_insights.ingest.text_utils import normalize_name, parse_int_safe, to_iso

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

# The API's name for a computer-controlled side; any rename upstream flips every game to online.
CPU_SENTINEL = "cpu"

_ARENA = "ARENA"
_EXHIBITION = "EXHIBITION"


def _team_line(raw: Mapping[str, Any], prefix: str) -> TeamLine:
    return TeamLine(
        name=str(raw.get(f"{prefix}_full_name") or ""),
        runs=parse_int_safe(raw.get(f"{prefix}_runs")),
        hits=parse_int_safe(raw.get(f"{prefix}_hits")),
        errors=parse_int_safe(raw.get(f"{prefix}_errors")),
        result=str(raw.get(f"{prefix}_display_result") or ""),
    )


def resolve_side(home_name: str, away_name: str, username: str) -> Side | None:
    """Work out which side the user controlled from the raw side names."""
    home = normalize_name(home_name)
    away = normalize_name(away_name)
    home_is_cpu = home == CPU_SENTINEL
    away_is_cpu = away == CPU_SENTINEL

    if home_is_cpu and not away_is_cpu:
        return "away"
    if away_is_cpu and not home_is_cpu:
        return "home"

    user = normalize_name(username)
    if user in home:
        return "home"
    if user in away:
        return "away"
    return None


def to_row(raw: Mapping[str, Any], username: str) -> GameRow:
    """Normalize one raw ``game_history`` record into a ``GameRow``."""
    home = _team_line(raw, "home")
    away = _team_line(raw, "away")

    home_is_cpu = normalize_name(raw.get("home_name")) == CPU_SENTINEL
    away_is_cpu = normalize_name(raw.get("away_name")) == CPU_SENTINEL
    is_cpu = home_is_cpu and away_is_cpu

    you_are = resolve_side(str(raw.get("home_name") or ""), str(raw.get("away_name") or ""), username)
    you_runs: int | None = None
    opp_runs: int | None = None
    if you_are == "home":
        you_runs, opp_runs = home.runs, away.runs
    elif you_are == "away":
        you_runs, opp_runs = away.runs, home.runs

    display_date = str(raw.get("display_date") or "")
    return GameRow(
        id=str(raw.get("id") or ""),
        date_iso=to_iso(display_date),
        mode=str(raw.get("game_mode") or ""),
        home=home,
        away=away,
        you_are=you_are,
        is_cpu=is_cpu,
        is_online=not is_cpu,
        you_runs=you_runs,
        opp_runs=opp_runs,
        pitcher_info=str(raw.get("display_pitcher_info") or ""),
        display_date=display_date,
    )


def sort_rows(rows: Iterable[GameRow]) -> list[GameRow]:
    """Newest first; rows without a parseable date go last."""
    materialized = list(rows)
    dated = sorted((r for r in materialized if r.date_iso is not None), key=lambda r: r.date_iso or "", reverse=True)
    return dated + [r for r in materialized if r.date_iso is None]


def summarize(rows: Sequence[GameRow]) -> InsightsSummary:
    wins = losses = run_diff = online = cpu = arena = exhibition = 0
    for row in rows:
        if row.is_online:
            online += 1
        else:
            cpu += 1
        mode = row.mode.upper()
        if mode == _ARENA:
            arena += 1
        if mode == _EXHIBITION:
            exhibition += 1
        if row.you_runs is not None and row.opp_runs is not None:
            if row.you_runs > row.opp_runs:
                wins += 1
            elif row.you_runs < row.opp_runs:
                losses += 1
            run_diff += row.you_runs - row.opp_runs
    return InsightsSummary(
        total_games=len(rows),
        online_count=online,
        cpu_count=cpu,
        arena_count=arena,
        exhibition_count=exhibition,
        wins=wins,
        losses=losses,
        run_diff=run_diff,
    )


def group_ids(rows: Sequence[GameRow]) -> InsightsGroups:
    return InsightsGroups(
        all=tuple(r.id for r in rows),
        online=tuple(r.id for r in rows if r.is_online),
        vs_cpu=tuple(r.id for r in rows if r.is_cpu),
        arena=tuple(r.id for r in rows if r.mode.upper() == _ARENA),
        exhibition=tuple(r.id for r in rows if r.mode.upper() == _EXHIBITION),
    )
