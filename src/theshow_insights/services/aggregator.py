"""Fold parsed games into an ``AggregateResponse``.

The fold only adds integers into counting records, so the result does not
depend on the order games arrive in. Rate stats are derived once at the end.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from theshow_insights.domain.aggregate import AggregateResponse, AggregateScope
from theshow_insights.domain.stat_lines import (
    AggInsights,
    BallparkCounts,
    BattingCounts,
    HitterCounts,
    PitcherCounts,
    PitchingCounts,
    PlayerBoards,
    TeamStats,
)
from theshow_insights.ingest.game_log_parser import UNKNOWN_BALLPARK
from theshow_insights.ingest.text_utils import last_name
from theshow_insights.services.derived_stats import (
    finalize_ballpark,
    finalize_batting,
    finalize_hitter,
    finalize_pitcher,
    finalize_pitching,
)
from theshow_insights.services.splits import build_split_bundle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from theshow_insights.domain.enums import Subset
    from theshow_insights.domain.game_log import BoxPitcher, BoxSide, GameLogDetail
    from theshow_insights.domain.items import ItemsIndex

logger = logging.getLogger(__name__)

# innings counted as "regulation" when deciding whether a win was a comeback
COMEBACK_CUTOFF_INNING = 7


def is_comeback_win(runs_you: Sequence[int], runs_opp: Sequence[int]) -> bool:
    """Level or trailing through seven innings, ahead at the end."""
    through_you = sum(runs_you[:COMEBACK_CUTOFF_INNING])
    through_opp = sum(runs_opp[:COMEBACK_CUTOFF_INNING])
    return through_you <= through_opp and sum(runs_you) > sum(runs_opp)


def _add_runs(totals: list[int], runs: Sequence[int]) -> None:
    for i, value in enumerate(runs):
        if i < len(totals):
            totals[i] += value
        else:
            totals.append(value)


def _fold_batting(c: BattingCounts, side: BoxSide) -> None:
    t = side.batting_totals
    c.ab += t.ab
    c.r += t.r
    c.h += t.h
    c.rbi += t.rbi
    c.bb += t.bb
    c.so += t.so
    c.hbp += t.hbp
    c.sf += t.sf
    c.sh += t.sh
    c.sb += t.sb
    c.cs += t.cs
    c.singles += side.singles
    c.doubles += side.doubles
    c.triples += side.triples
    c.hr += side.home_runs
    c.gidp += side.gidp


def _fold_pitching(c: PitchingCounts, staff: BoxSide, hitters: BoxSide) -> None:
    t = staff.pitching_totals
    c.outs += t.outs
    c.h += t.h
    c.r += t.r
    c.er += t.er
    c.bb += t.bb
    c.so += t.so
    c.hr += hitters.home_runs
    c.opp_ab += hitters.batting_totals.ab


def _fold_pitcher(c: PitcherCounts, row: BoxPitcher, narrative_hr: dict[str, int]) -> None:
    c.g += 1
    c.outs += row.outs
    c.h += row.h
    c.r += row.r
    c.er += row.er
    c.bb += row.bb
    c.so += row.so
    # box-score HR plus narrative mentions of the same last name; the two are not de-duplicated
    c.hr += row.hr + narrative_hr.get(last_name(row.player_name), 0)


class _Accumulator:
    def __init__(self) -> None:
        self.your_batting = BattingCounts()
        self.opp_batting = BattingCounts()
        self.your_pitching = PitchingCounts()
        self.opp_pitching = PitchingCounts()
        self.hitters: defaultdict[str, HitterCounts] = defaultdict(HitterCounts)
        self.pitchers: defaultdict[str, PitcherCounts] = defaultdict(PitcherCounts)
        self.vs_pitcher: defaultdict[str, PitcherCounts] = defaultdict(PitcherCounts)
        self.ballparks: defaultdict[str, BallparkCounts] = defaultdict(BallparkCounts)
        self.go_ahead_events = 0
        self.comeback_wins = 0
        self.perfect_contact_you = 0
        self.perfect_contact_opp = 0
        self.runs_by_inning_you: list[int] = []
        self.runs_by_inning_opp: list[int] = []
        self.k_pitch_you: Counter[str] = Counter()
        self.k_loc_you: Counter[str] = Counter()
        self.k_pitch_opp: Counter[str] = Counter()
        self.k_loc_opp: Counter[str] = Counter()
        self.swinging_k_you = self.looking_k_you = self.chase_k_you = 0
        self.swinging_k_opp = self.looking_k_opp = self.chase_k_opp = 0

    def add(self, detail: GameLogDetail) -> None:
        you, opp, p = detail.you, detail.opp, detail.parsed

        self.go_ahead_events += p.go_ahead_events
        self.perfect_contact_you += p.perfect_contact_hits_you
        self.perfect_contact_opp += p.perfect_contact_hits_opp
        _add_runs(self.runs_by_inning_you, p.runs_by_inning_you)
        _add_runs(self.runs_by_inning_opp, p.runs_by_inning_opp)
        if is_comeback_win(p.runs_by_inning_you, p.runs_by_inning_opp):
            self.comeback_wins += 1

        self.k_pitch_you.update(p.strikeouts_you.by_pitch)
        self.k_loc_you.update(p.strikeouts_you.by_location)
        self.k_pitch_opp.update(p.strikeouts_opp.by_pitch)
        self.k_loc_opp.update(p.strikeouts_opp.by_location)
        self.swinging_k_you += p.strikeouts_you.swinging
        self.looking_k_you += p.strikeouts_you.looking
        self.chase_k_you += p.strikeouts_you.chase
        self.swinging_k_opp += p.strikeouts_opp.swinging
        self.looking_k_opp += p.strikeouts_opp.looking
        self.chase_k_opp += p.strikeouts_opp.chase

        park = self.ballparks[p.ballpark or UNKNOWN_BALLPARK]
        park.g += 1
        runs_for, runs_against = you.batting_totals.r, opp.batting_totals.r
        if runs_for > runs_against:
            park.w += 1
        elif runs_for < runs_against:
            park.l += 1
        park.runs_for += runs_for
        park.runs_against += runs_against
        park.hr_for += you.home_runs
        park.hr_against += opp.home_runs
        park.ab += you.batting_totals.ab
        park.h += you.batting_totals.h
        park.bb += you.batting_totals.bb
        park.hbp += you.batting_totals.hbp
        park.sf += you.batting_totals.sf
        park.tb += you.total_bases

        _fold_batting(self.your_batting, you)
        _fold_batting(self.opp_batting, opp)
        _fold_pitching(self.your_pitching, you, opp)
        _fold_pitching(self.opp_pitching, opp, you)

        for row in you.batting_stats:
            h = self.hitters[row.player_name]
            h.g += 1
            h.ab += row.ab
            h.h += row.h
            h.doubles += row.doubles
            h.triples += row.triples
            h.hr += row.hr
            h.bb += row.bb
            h.so += row.so
            h.hbp += row.hbp
            h.sf += row.sf
            h.sh += row.sh
            h.gidp += row.gidp
            h.sb += row.sb
            h.cs += row.cs
            h.e += row.e
            h.pb += row.pb
        for pitcher in you.pitching_stats:
            _fold_pitcher(self.pitchers[pitcher.player_name], pitcher, p.hr_allowed_by_your_pitcher_ln)
        for pitcher in opp.pitching_stats:
            _fold_pitcher(self.vs_pitcher[pitcher.player_name], pitcher, p.hr_allowed_by_opp_pitcher_ln)

    def insights(self, games: int) -> AggInsights:
        return AggInsights(
            games=games,
            go_ahead_events=self.go_ahead_events,
            comeback_wins=self.comeback_wins,
            perfect_contact_you=self.perfect_contact_you,
            perfect_contact_opp=self.perfect_contact_opp,
            runs_by_inning_you=tuple(self.runs_by_inning_you),
            runs_by_inning_opp=tuple(self.runs_by_inning_opp),
            k_pitch_you=dict(sorted(self.k_pitch_you.items())),
            k_loc_you=dict(sorted(self.k_loc_you.items())),
            k_pitch_opp=dict(sorted(self.k_pitch_opp.items())),
            k_loc_opp=dict(sorted(self.k_loc_opp.items())),
            swinging_k_you=self.swinging_k_you,
            looking_k_you=self.looking_k_you,
            chase_k_you=self.chase_k_you,
            swinging_k_opp=self.swinging_k_opp,
            looking_k_opp=self.looking_k_opp,
            chase_k_opp=self.chase_k_opp,
            by_ballpark={name: finalize_ballpark(c) for name, c in sorted(self.ballparks.items())},
        )


def aggregate_games(
    details: Sequence[GameLogDetail],
    subset: Subset,
    limit: int,
    items: ItemsIndex | None = None,
    include_pas: bool = False,
) -> AggregateResponse:
    """Fold already-parsed games into team, player and situational totals.

    ``include_pas`` adds a split bundle annotated from ``items``.
    """
    acc = _Accumulator()
    for detail in details:
        acc.add(detail)

    games = len(details)
    your_batting = finalize_batting(acc.your_batting)
    opp_batting = finalize_batting(acc.opp_batting)
    your_stats = TeamStats(
        games=games,
        batting=your_batting,
        pitching=finalize_pitching(acc.your_pitching, opp_batting),
    )
    opp_stats = TeamStats(
        games=games,
        batting=opp_batting,
        pitching=finalize_pitching(acc.opp_pitching),
    )
    boards = PlayerBoards(
        hitters={name: finalize_hitter(c) for name, c in sorted(acc.hitters.items())},
        pitchers={name: finalize_pitcher(c) for name, c in sorted(acc.pitchers.items())},
    )
    split_bundle = build_split_bundle(details, items) if include_pas else None
    logger.debug("Aggregated %d games for subset %s", games, subset)
    return AggregateResponse(
        scope=AggregateScope(subset=subset, limit=limit, counted_games=games),
        your_stats=your_stats,
        opp_stats=opp_stats,
        your_insights=acc.insights(games),
        by_players=boards,
        vs_pitcher={name: finalize_pitcher(c) for name, c in sorted(acc.vs_pitcher.items())},
        split_bundle=split_bundle,
    )
