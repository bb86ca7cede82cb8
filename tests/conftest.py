"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeAlias

import httpx
import pytest

from theshow_insights.config import InsightsSettings
from theshow_insights.ingest.theshow_client import TheShowClient

Handler: TypeAlias = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all INSIGHTS__ env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith("INSIGHTS__"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> InsightsSettings:
    return InsightsSettings(
        base_url="https://theshow.test",
        timeout_seconds=1.0,
        connect_timeout_seconds=1.0,
        history_concurrency=4,
        history_retry_waits=(0.0, 0.0),
        aggregate_concurrency=3,
        aggregate_limit=200,
        items_ttl_seconds=60.0,
        items_concurrency=2,
    )


@pytest.fixture
def make_client(settings: InsightsSettings) -> Callable[[Handler], TheShowClient]:
    """Build a ``TheShowClient`` whose HTTP calls are answered by ``handler``."""

    def _make(handler: Handler) -> TheShowClient:
        http = httpx.AsyncClient(base_url=settings.base_url, transport=httpx.MockTransport(handler))
        return TheShowClient(http, settings)

    return _make
