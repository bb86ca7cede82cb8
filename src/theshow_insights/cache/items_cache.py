"""In-memory, time-limited cache for the player-attribute index.

The cache is a plain value owned by whichever long-lived process hosts the
aggregator; nothing here is module-level state.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from theshow_insights.domain.items import ItemsIndex

logger = logging.getLogger(__name__)


class ItemsIndexCache:
    """Holds one ``ItemsIndex`` for ``ttl_seconds``.

    Concurrent ``get`` calls that find the entry stale share a single reload.
    A failed reload leaves the previous state untouched and propagates.
    """

    def __init__(
        self,
        loader: Callable[[], Awaitable[ItemsIndex]],
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._data: ItemsIndex | None = None
        self._loaded_at = 0.0
        self._lock = asyncio.Lock()

    def _fresh(self) -> bool:
        return self._data is not None and self._clock() - self._loaded_at < self._ttl_seconds

    async def get(self, force: bool = False) -> ItemsIndex:
        if not force and self._fresh():
            logger.debug("Cache hit for items index")
            assert self._data is not None
            return self._data

        async with self._lock:
            # another caller may have reloaded while we waited
            if not force and self._fresh():
                assert self._data is not None
                return self._data
            data = await self._loader()
            self._data = data
            self._loaded_at = self._clock()
            logger.debug(
                "Cached items index (%d hitters, %d pitchers)", len(data.hitters_by_last), len(data.pitchers_by_last)
            )
            return data

    def invalidate(self) -> None:
        self._data = None
        self._loaded_at = 0.0
