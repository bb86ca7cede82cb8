"""Shared utilities."""

from theshow_insights.shared.concurrency import ConcurrencyLimiter, gather_limited

__all__ = ["ConcurrencyLimiter", "gather_limited"]
