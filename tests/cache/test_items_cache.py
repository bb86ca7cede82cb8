import asyncio

import pytest

from theshow_insights.cache.items_cache import ItemsIndexCache
from theshow_insights.domain.items import HitterAttributes, ItemsIndex


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingLoader:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> ItemsIndex:
        self.calls += 1
        await asyncio.sleep(0)
        hitter = HitterAttributes(name=f"Load {self.calls}", bat="R", height_in=72, ovr=self.calls)
        return ItemsIndex(hitters_by_last={"load": hitter})


class TestItemsIndexCache:
    async def test_first_get_loads(self) -> None:
        loader = CountingLoader()
        cache = ItemsIndexCache(loader, ttl_seconds=60, clock=FakeClock())
        index = await cache.get()
        assert index.hitters_by_last["load"].ovr == 1
        assert loader.calls == 1

    async def test_hit_within_ttl(self) -> None:
        loader = CountingLoader()
        clock = FakeClock()
        cache = ItemsIndexCache(loader, ttl_seconds=60, clock=clock)
        first = await cache.get()
        clock.now += 59
        assert await cache.get() is first
        assert loader.calls == 1

    async def test_reload_after_ttl(self) -> None:
        loader = CountingLoader()
        clock = FakeClock()
        cache = ItemsIndexCache(loader, ttl_seconds=60, clock=clock)
        await cache.get()
        clock.now += 60
        index = await cache.get()
        assert index.hitters_by_last["load"].ovr == 2
        assert loader.calls == 2

    async def test_force_reloads(self) -> None:
        loader = CountingLoader()
        cache = ItemsIndexCache(loader, ttl_seconds=60, clock=FakeClock())
        await cache.get()
        await cache.get(force=True)
        assert loader.calls == 2

    async def test_invalidate(self) -> None:
        loader = CountingLoader()
        cache = ItemsIndexCache(loader, ttl_seconds=60, clock=FakeClock())
        await cache.get()
        cache.invalidate()
        await cache.get()
        assert loader.calls == 2

    async def test_concurrent_callers_share_one_load(self) -> None:
        loader = CountingLoader()
        cache = ItemsIndexCache(loader, ttl_seconds=60, clock=FakeClock())
        results = await asyncio.gather(*(cache.get() for _ in range(5)))
        assert loader.calls == 1
        assert all(r is results[0] for r in results)

    async def test_failed_load_keeps_previous(self) -> None:
        clock = FakeClock()
        calls = 0

        async def flaky() -> ItemsIndex:
            nonlocal calls
            calls += 1
            if calls == 2:
                raise RuntimeError("catalog down")
            return ItemsIndex()

        cache = ItemsIndexCache(flaky, ttl_seconds=60, clock=clock)
        first = await cache.get()
        with pytest.raises(RuntimeError):
            await cache.get(force=True)
        assert await cache.get() is first
