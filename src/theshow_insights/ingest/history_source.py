from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from theshow_insights.exceptions import HistoryFetchError
from theshow_insights.ingest._retry import RetryDecorator, history_page_retry
from theshow_insights.shared.concurrency import gather_limited

if TYPE_CHECKING:
    from theshow_insights.domain.enums import GameMode, Platform
    from theshow_insights.ingest.theshow_client import TheShowClient

logger = logging.getLogger(__name__)


class GameHistorySource:
    """Fetches every page of a user's game history.

    Page 1 is fetched once (it reports ``total_pages``); the remaining pages
    are fetched concurrently with per-page retries. Any page that still fails
    fails the whole fetch, so callers never see a partial history.
    """

    def __init__(
        self,
        client: TheShowClient,
        *,
        concurrency: int | None = None,
        retry: RetryDecorator | None = None,
    ) -> None:
        self._client = client
        self._concurrency = concurrency or client.settings.history_concurrency
        retry = retry or history_page_retry(client.settings.history_retry_waits)
        self._fetch_page_with_retry = retry(self._do_fetch_page)

    async def _do_fetch_page(self, username: str, platform: Platform, mode: GameMode, page: int) -> Any:
        return await self._client.get_game_history_page(username, platform, mode, page)

    async def _fetch_later_page(
        self, username: str, platform: Platform, mode: GameMode, page: int
    ) -> list[dict[str, Any]]:
        try:
            body = await self._fetch_page_with_retry(username, platform, mode, page)
        except (httpx.TransportError, httpx.HTTPStatusError, ValueError) as e:
            raise HistoryFetchError(page, str(e)) from e
        return list(body.get("game_history") or [])

    async def fetch_all(self, username: str, platform: Platform, mode: GameMode) -> list[dict[str, Any]]:
        try:
            first = await self._client.get_game_history_page(username, platform, mode, 1)
        except (httpx.TransportError, httpx.HTTPStatusError, ValueError) as e:
            raise HistoryFetchError(1, str(e)) from e

        records: list[dict[str, Any]] = list(first.get("game_history") or [])
        total_pages = int(first.get("total_pages") or 1)
        rest = list(range(2, total_pages + 1))
        if not rest:
            logger.info("Fetched %d history records for %s (1 page)", len(records), username)
            return records

        pages = await gather_limited(
            rest,
            lambda page: self._fetch_later_page(username, platform, mode, page),
            self._concurrency,
        )
        for page_records in pages:
            records.extend(page_records)
        logger.info("Fetched %d history records for %s (%d pages)", len(records), username, total_pages)
        return records
