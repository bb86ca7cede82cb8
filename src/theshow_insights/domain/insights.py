from dataclasses import dataclass

from theshow_insights.domain.enums import GameMode, Platform, Subset
from theshow_insights.domain.game_row import GameRow


@dataclass(frozen=True)
class InsightsUser:
    username: str
    platform: Platform
    mode: GameMode


@dataclass(frozen=True)
class InsightsSummary:
    total_games: int
    online_count: int
    cpu_count: int
    arena_count: int
    exhibition_count: int
    wins: int
    losses: int
    run_diff: int


@dataclass(frozen=True)
class InsightsGroups:
    all: tuple[str, ...]
    online: tuple[str, ...]
    vs_cpu: tuple[str, ...]
    arena: tuple[str, ...]
    exhibition: tuple[str, ...]

    def for_subset(self, subset: Subset) -> tuple[str, ...]:
        match subset:
            case Subset.ALL:
                return self.all
            case Subset.ONLINE:
                return self.online
            case Subset.VS_CPU:
                return self.vs_cpu
            case Subset.ARENA:
                return self.arena
            case Subset.EXHIBITION:
                return self.exhibition


@dataclass(frozen=True)
class PageInfo:
    has_more: bool
    page: int
    total_pages: int


@dataclass(frozen=True)
class InsightsResponse:
    user: InsightsUser
    summary: InsightsSummary
    groups: InsightsGroups
    game_log: tuple[GameRow, ...]
    next: PageInfo

    def row_by_id(self) -> dict[str, GameRow]:
        return {row.id: row for row in self.game_log}
