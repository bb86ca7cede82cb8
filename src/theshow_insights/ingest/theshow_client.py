from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from theshow_insights.config import InsightsSettings, load_settings

if TYPE_CHECKING:
    from types import TracebackType

    from theshow_insights.domain.enums import GameMode, Platform

logger = logging.getLogger(__name__)

_HEADERS = {"accept": "application/json"}


def _build_client(settings: InsightsSettings) -> httpx.AsyncClient:
    timeout = httpx.Timeout(settings.timeout_seconds, connect=settings.connect_timeout_seconds)
    return httpx.AsyncClient(base_url=settings.base_url, timeout=timeout, headers=_HEADERS)


class TheShowClient:
    """Thin async wrapper over the MLB The Show public JSON API."""

    def __init__(self, client: httpx.AsyncClient | None = None, settings: InsightsSettings | None = None) -> None:
        self._settings = settings or load_settings()
        self._client = client or _build_client(self._settings)

    @property
    def settings(self) -> InsightsSettings:
        return self._settings

    async def __aenter__(self) -> TheShowClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        logger.debug("GET %s %s", path, params)
        response = await self._client.get(path, params=params, headers=_HEADERS)
        response.raise_for_status()
        return response.json()

    async def get_game_history_page(self, username: str, platform: Platform, mode: GameMode, page: int) -> Any:
        return await self._get_json(
            "/apis/game_history.json",
            {"page": page, "username": username, "platform": str(platform), "mode": str(mode)},
        )

    async def get_game_log(self, username: str, game_id: str) -> Any:
        return await self._get_json("/apis/game_log.json", {"username": username, "id": game_id})

    async def get_items_page(self, page: int) -> Any:
        return await self._get_json("/apis/items.json", {"page": page})
