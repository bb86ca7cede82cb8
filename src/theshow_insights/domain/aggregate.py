from dataclasses import dataclass

from theshow_insights.domain.enums import Subset
from theshow_insights.domain.splits import SplitBundle
from theshow_insights.domain.stat_lines import AggInsights, PitcherLine, PlayerBoards, TeamStats


@dataclass(frozen=True)
class AggregateScope:
    subset: Subset
    limit: int
    counted_games: int


@dataclass(frozen=True)
class AggregateResponse:
    scope: AggregateScope
    your_stats: TeamStats
    opp_stats: TeamStats
    your_insights: AggInsights
    by_players: PlayerBoards
    vs_pitcher: dict[str, PitcherLine]
    split_bundle: SplitBundle | None = None
