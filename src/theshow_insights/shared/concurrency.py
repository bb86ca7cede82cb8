"""Bounded-concurrency admission for async fan-out."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

T = TypeVar("T")
R = TypeVar("R")


class ConcurrencyLimiter:
    """Admit at most ``limit`` concurrent callers; waiters are released FIFO.

    A limiter is owned by a single fetch or aggregation call and carries no
    state across calls.
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self._limit = limit
        self._active = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def active(self) -> int:
        return self._active

    async def acquire(self) -> None:
        if self._active < self._limit and not self._waiters:
            self._active += 1
            return
        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter in self._waiters:
                self._waiters.remove(waiter)
            elif not waiter.cancelled():
                # slot was handed over just before cancellation
                self.release()
            raise

    def release(self) -> None:
        self._active -= 1
        self._release_slot()

    def _release_slot(self) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                self._active += 1
                waiter.set_result(None)
                return

    async def run(self, fn: Callable[[], Awaitable[R]]) -> R:
        await self.acquire()
        try:
            return await fn()
        finally:
            self.release()


async def gather_limited(items: Iterable[T], fn: Callable[[T], Awaitable[R]], limit: int) -> list[R]:
    """Run ``fn`` over ``items`` with at most ``limit`` in flight.

    Results come back in input order. The first failure propagates and the
    remaining tasks are cancelled.
    """
    limiter = ConcurrencyLimiter(limit)

    async def _one(item: T) -> R:
        return await limiter.run(lambda: fn(item))

    tasks = [asyncio.ensure_future(_one(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
