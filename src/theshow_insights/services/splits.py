"""Split bundles: plate appearances annotated for offline re-filtering.

``build_split_bundle`` runs once per aggregation; ``apply_split_filters``
recomputes the batting lines from the bundle without any network calls.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from theshow_insights.domain.splits import SplitBundle, SplitGame, SplitPA
from theshow_insights.domain.stat_lines import BattingCounts
from theshow_insights.ingest.text_utils import last_name
from theshow_insights.services.derived_stats import finalize_batting

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from theshow_insights.domain.aggregate import AggregateResponse
    from theshow_insights.domain.game_log import GameLogDetail, PlateAppearance
    from theshow_insights.domain.items import BatHand, ItemsIndex, ThrowHand
    from theshow_insights.domain.splits import BatSide, SplitFilters
    from theshow_insights.domain.stat_lines import BattingLine

LOW_VELO_MAX_MPH = 92
TALL_MIN_INCHES = 76
SMALL_MAX_INCHES = 70
EXTRA_INNINGS = "10+"


def resolve_bat_side(bat: BatHand | None, pitcher_throw: ThrowHand | None) -> BatSide | None:
    """Switch hitters bat opposite the pitcher's hand; unknown pitcher leaves them unresolved."""
    if bat == "S":
        if pitcher_throw == "R":
            return "L"
        if pitcher_throw == "L":
            return "R"
        return None
    return bat


def annotate_pa(pa: PlateAppearance, difficulty: str | None, items: ItemsIndex | None) -> SplitPA:
    pitcher = items.pitchers_by_last.get(last_name(pa.pitcher)) if items else None
    hitter = items.hitters_by_last.get(last_name(pa.batter)) if items else None
    p_throw = pitcher.throw if pitcher else None
    return SplitPA(
        inning=pa.inning,
        outs=pa.outs_before,
        result=pa.result,
        p_throw=p_throw,
        p_outlier=bool(pitcher and pitcher.outlier),
        p_max=pitcher.max_velo if pitcher else None,
        b_side=resolve_bat_side(hitter.bat if hitter else None, p_throw),
        b_height_in=hitter.height_in if hitter else None,
        diff=difficulty,
    )


def build_split_bundle(details: Iterable[GameLogDetail], items: ItemsIndex | None) -> SplitBundle:
    games = []
    for detail in details:
        diff = detail.parsed.hitting_difficulty
        games.append(
            SplitGame(
                id=detail.meta.id,
                you=tuple(annotate_pa(pa, diff, items) for pa in detail.parsed.plate_appearances.you),
                opp=tuple(annotate_pa(pa, diff, items) for pa in detail.parsed.plate_appearances.opp),
            )
        )
    return SplitBundle(games=tuple(games))


def _inning_matches(selected: str, inning: int) -> bool:
    if selected == "all":
        return True
    if selected == EXTRA_INNINGS:
        return inning >= 10
    return selected.isdigit() and inning == int(selected)


def passes(pa: SplitPA, filters: SplitFilters) -> bool:
    """True when ``pa`` satisfies every active facet of ``filters``."""
    if filters.p_throw != "all" and pa.p_throw != filters.p_throw:
        return False
    if filters.pitcher_profile == "outlier" and not pa.p_outlier:
        return False
    if filters.pitcher_profile == "lowvelo" and not (pa.p_max is not None and pa.p_max <= LOW_VELO_MAX_MPH):
        return False
    if filters.b_bat != "all" and pa.b_side != filters.b_bat:
        return False
    if filters.hitter_height == "tall" and not (pa.b_height_in is not None and pa.b_height_in >= TALL_MIN_INCHES):
        return False
    if filters.hitter_height == "small" and not (pa.b_height_in is not None and pa.b_height_in <= SMALL_MAX_INCHES):
        return False
    if not _inning_matches(filters.inning, pa.inning):
        return False
    if filters.outs != "all" and not (filters.outs.isdigit() and pa.outs == int(filters.outs)):
        return False
    return filters.difficulty == "all" or pa.diff == filters.difficulty


def batting_line_from_splits(pas: Iterable[SplitPA], filters: SplitFilters) -> BattingLine:
    """Rebuild a batting line from the plate appearances that pass ``filters``.

    Walks, hit-by-pitches and sacrifices are not at-bats; runs, RBI and
    stolen bases are not derivable from plate appearances and stay at zero.
    """
    c = BattingCounts()
    for pa in pas:
        if not passes(pa, filters):
            continue
        match pa.result:
            case "BB":
                c.bb += 1
            case "HBP":
                c.hbp += 1
            case "SF":
                c.sf += 1
            case "SH":
                c.sh += 1
            case "SO":
                c.so += 1
                c.ab += 1
            case "1B":
                c.ab += 1
                c.h += 1
                c.singles += 1
            case "2B":
                c.ab += 1
                c.h += 1
                c.doubles += 1
            case "3B":
                c.ab += 1
                c.h += 1
                c.triples += 1
            case "HR":
                c.ab += 1
                c.h += 1
                c.hr += 1
            case "OUT" | "DP" | "ROE":
                c.ab += 1
    return finalize_batting(c)


def _flatten(games: Sequence[SplitGame], offense: str) -> list[SplitPA]:
    out: list[SplitPA] = []
    for game in games:
        out.extend(game.you if offense == "you" else game.opp)
    return out


def apply_split_filters(response: AggregateResponse, filters: SplitFilters) -> AggregateResponse:
    """Return a copy of ``response`` whose batting lines reflect ``filters``.

    Responses aggregated without plate appearances come back unchanged.
    """
    bundle = response.split_bundle
    if bundle is None:
        return response
    your_batting = batting_line_from_splits(_flatten(bundle.games, "you"), filters)
    opp_batting = batting_line_from_splits(_flatten(bundle.games, "opp"), filters)
    return dataclasses.replace(
        response,
        your_stats=dataclasses.replace(response.your_stats, batting=your_batting),
        opp_stats=dataclasses.replace(response.opp_stats, batting=opp_batting),
    )
