from dataclasses import dataclass
from typing import Literal, TypeAlias

from theshow_insights.domain.game_log import PAResult
from theshow_insights.domain.items import ThrowHand

BatSide: TypeAlias = Literal["L", "R"]


@dataclass(frozen=True)
class SplitPA:
    """One plate appearance annotated for client-side split filtering."""

    inning: int
    outs: int
    result: PAResult
    p_throw: ThrowHand | None
    p_outlier: bool
    p_max: float | None
    b_side: BatSide | None
    b_height_in: int | None
    diff: str | None


@dataclass(frozen=True)
class SplitGame:
    id: str
    you: tuple[SplitPA, ...]
    opp: tuple[SplitPA, ...]


@dataclass(frozen=True)
class SplitBundle:
    games: tuple[SplitGame, ...]


@dataclass(frozen=True)
class SplitFilters:
    """Situational facets; ``"all"`` disables a facet."""

    p_throw: Literal["all", "L", "R"] = "all"
    b_bat: Literal["all", "L", "R", "S"] = "all"
    inning: str = "all"
    outs: str = "all"
    difficulty: str = "all"
    pitcher_profile: Literal["all", "outlier", "lowvelo"] = "all"
    hitter_height: Literal["all", "tall", "small"] = "all"
