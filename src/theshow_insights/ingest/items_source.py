"""Player-attribute catalog: fetch every ``items.json`` page and index it by last name."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import httpx

from theshow_insights.domain.items import HitterAttributes, ItemsIndex, PitcherAttributes
from theshow_insights.exceptions import ItemsFetchError
from theshow_insights.ingest._retry import RetryDecorator, default_http_retry
from theshow_insights.ingest.text_utils import last_name, parse_int_safe
from theshow_insights.shared.concurrency import gather_limited

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from theshow_insights.ingest.theshow_client import TheShowClient

logger = logging.getLogger(__name__)

_HEIGHT_RE = re.compile(r"(\d+)'(\d+)")
_OUTLIER_RE = re.compile(r"outlier", re.IGNORECASE)


def height_to_inches(height: object) -> int:
    """``6'2"`` -> 74; anything unparseable -> 0."""
    match = _HEIGHT_RE.search(str(height or ""))
    if not match:
        return 0
    return int(match.group(1)) * 12 + int(match.group(2))


def _speed(pitch: object) -> float:
    if not isinstance(pitch, dict):
        return 0.0
    try:
        return float(pitch.get("speed") or 0)
    except (TypeError, ValueError):
        return 0.0


def _hitter(item: Mapping[str, Any]) -> HitterAttributes:
    bat = item.get("bat_hand")
    return HitterAttributes(
        name=str(item.get("name") or "").strip(),
        bat=bat if bat in ("L", "R", "S") else "R",
        height_in=height_to_inches(item.get("height")),
        ovr=parse_int_safe(item.get("ovr")),
    )


def _pitcher(item: Mapping[str, Any]) -> PitcherAttributes:
    throw = item.get("throw_hand")
    pitches = item.get("pitches") or []
    quirks = item.get("quirks") or []
    return PitcherAttributes(
        name=str(item.get("name") or "").strip(),
        throw=throw if throw in ("L", "R") else "R",
        height_in=height_to_inches(item.get("height")),
        max_velo=max([0.0, *(_speed(p) for p in pitches)]),
        outlier=any(_OUTLIER_RE.search(str(q)) for q in quirks),
        ovr=parse_int_safe(item.get("ovr")),
    )


def build_items_index(items: Iterable[Mapping[str, Any]]) -> ItemsIndex:
    """Index catalog items by lowercase last name.

    Duplicate cards for the same player collapse to the highest-overall one,
    and players sharing a last name collapse the same way.
    """
    hitters: dict[str, HitterAttributes] = {}
    pitchers: dict[str, PitcherAttributes] = {}
    for item in items:
        if not str(item.get("name") or "").strip():
            continue
        if item.get("is_hitter"):
            hitter = _hitter(item)
            current = hitters.get(hitter.name)
            if current is None or hitter.ovr > current.ovr:
                hitters[hitter.name] = hitter
        else:
            pitcher = _pitcher(item)
            current_p = pitchers.get(pitcher.name)
            if current_p is None or pitcher.ovr > current_p.ovr:
                pitchers[pitcher.name] = pitcher

    hitters_by_last: dict[str, HitterAttributes] = {}
    for hitter in hitters.values():
        key = last_name(hitter.name)
        current = hitters_by_last.get(key)
        if current is None or hitter.ovr > current.ovr:
            hitters_by_last[key] = hitter

    pitchers_by_last: dict[str, PitcherAttributes] = {}
    for pitcher in pitchers.values():
        key = last_name(pitcher.name)
        current_p = pitchers_by_last.get(key)
        if current_p is None or pitcher.ovr > current_p.ovr:
            pitchers_by_last[key] = pitcher

    return ItemsIndex(hitters_by_last=hitters_by_last, pitchers_by_last=pitchers_by_last)


class ItemsSource:
    """Fetches the full player-attribute catalog."""

    def __init__(
        self,
        client: TheShowClient,
        *,
        concurrency: int | None = None,
        retry: RetryDecorator | None = None,
    ) -> None:
        self._client = client
        self._concurrency = concurrency or client.settings.items_concurrency
        retry = retry or default_http_retry("items page")
        self._fetch_page_with_retry = retry(self._do_fetch_page)

    async def _do_fetch_page(self, page: int) -> Any:
        return await self._client.get_items_page(page)

    async def _fetch_page(self, page: int) -> list[dict[str, Any]]:
        try:
            body = await self._fetch_page_with_retry(page)
        except (httpx.TransportError, httpx.HTTPStatusError, ValueError) as e:
            raise ItemsFetchError(page, str(e)) from e
        return [item for item in body.get("items") or [] if isinstance(item, dict)]

    async def fetch_all(self) -> list[dict[str, Any]]:
        try:
            first = await self._client.get_items_page(1)
        except (httpx.TransportError, httpx.HTTPStatusError, ValueError) as e:
            raise ItemsFetchError(1, str(e)) from e

        items = [item for item in first.get("items") or [] if isinstance(item, dict)]
        total_pages = int(first.get("total_pages") or 1)
        pages = await gather_limited(range(2, total_pages + 1), self._fetch_page, self._concurrency)
        for page_items in pages:
            items.extend(page_items)
        logger.info("Fetched %d catalog items (%d pages)", len(items), total_pages)
        return items

    async def load_index(self) -> ItemsIndex:
        return build_items_index(await self.fetch_all())
