"""The engine's three entry points: history, one game, and an aggregate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from theshow_insights.domain.insights import InsightsResponse, InsightsUser, PageInfo
from theshow_insights.exceptions import UnknownGameError
from theshow_insights.ingest.game_log_parser import fetch_game_log_detail
from theshow_insights.ingest.history_source import GameHistorySource
from theshow_insights.ingest.row_normalizer import group_ids, sort_rows, summarize, to_row
from theshow_insights.services.aggregator import aggregate_games
from theshow_insights.shared.concurrency import gather_limited

if TYPE_CHECKING:
    from theshow_insights.domain.aggregate import AggregateResponse
    from theshow_insights.domain.enums import GameMode, Platform, Subset
    from theshow_insights.domain.game_log import GameLogDetail
    from theshow_insights.domain.game_row import Side
    from theshow_insights.domain.items import ItemsIndex
    from theshow_insights.ingest.theshow_client import TheShowClient

logger = logging.getLogger(__name__)


async def build_insights(
    client: TheShowClient,
    username: str,
    platform: Platform,
    mode: GameMode,
    *,
    source: GameHistorySource | None = None,
) -> InsightsResponse:
    """Fetch the whole history and normalize it, newest game first."""
    source = source or GameHistorySource(client)
    raw = await source.fetch_all(username, platform, mode)
    rows = sort_rows(to_row(record, username) for record in raw)
    groups = group_ids(rows)
    logger.info(
        "Built insights for %s: %d games (%d online, %d vs CPU, %d arena, %d exhibition)",
        username,
        len(rows),
        len(groups.online),
        len(groups.vs_cpu),
        len(groups.arena),
        len(groups.exhibition),
    )
    return InsightsResponse(
        user=InsightsUser(username=username, platform=platform, mode=mode),
        summary=summarize(rows),
        groups=groups,
        game_log=tuple(rows),
        next=PageInfo(has_more=False, page=1, total_pages=1),
    )


async def fetch_game_log(
    client: TheShowClient,
    username: str,
    game_id: str,
    you_are: Side | None,
    home_team: str,
    away_team: str,
) -> GameLogDetail:
    return await fetch_game_log_detail(client, username, game_id, you_are, home_team, away_team)


async def aggregate_insights(
    base: InsightsResponse,
    client: TheShowClient,
    username: str,
    subset: Subset,
    limit: int | None = None,
    concurrency: int | None = None,
    *,
    items: ItemsIndex | None = None,
    include_pas: bool = False,
) -> AggregateResponse:
    """Fetch up to ``limit`` games of ``subset`` and fold them.

    Any single game failure aborts the whole aggregation.
    """
    limit = limit if limit is not None else client.settings.aggregate_limit
    concurrency = concurrency or client.settings.aggregate_concurrency
    ids = base.groups.for_subset(subset)[:limit]
    rows = base.row_by_id()
    missing = next((game_id for game_id in ids if game_id not in rows), None)
    if missing is not None:
        raise UnknownGameError(missing)

    logger.info("Aggregating %d %s games for %s", len(ids), subset, username)

    async def _fetch(game_id: str) -> GameLogDetail:
        row = rows[game_id]
        return await fetch_game_log_detail(client, username, game_id, row.you_are, row.home.name, row.away.name)

    details = await gather_limited(ids, _fetch, concurrency)
    return aggregate_games(details, subset, limit, items=items, include_pas=include_pas)
