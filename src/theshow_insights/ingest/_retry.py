import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_chain,
    wait_exponential_jitter,
    wait_fixed,
)

logger = logging.getLogger(__name__)

RetryDecorator: TypeAlias = Callable[[Callable[..., Any]], Callable[..., Any]]

_RETRYABLE = (httpx.TransportError, httpx.HTTPStatusError)


def default_http_retry(label: str) -> RetryDecorator:
    """Return a tenacity retry decorator configured for HTTP calls.

    *label* is interpolated into the warning message emitted before each
    retry attempt, e.g. ``"Retrying <label> (attempt 2): <error>"``.
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning("Retrying %s (attempt %d): %s", label, retry_state.attempt_number, retry_state.outcome)

    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=1, max=10),
        retry=retry_if_exception_type(_RETRYABLE),
        before_sleep=_log_retry,
        reraise=True,
    )


def history_page_retry(waits: Sequence[float] = (0.12, 0.32)) -> RetryDecorator:
    """Retry a history page once per entry in *waits*, sleeping that many seconds first."""

    def _log_retry(retry_state: RetryCallState) -> None:
        page = retry_state.args[-1] if retry_state.args else retry_state.kwargs.get("page")
        logger.warning(
            "Retrying game_history page %s (attempt %d): %s", page, retry_state.attempt_number, retry_state.outcome
        )

    return retry(
        stop=stop_after_attempt(len(waits) + 1),
        wait=wait_chain(*(wait_fixed(w) for w in waits)) if waits else wait_fixed(0),
        retry=retry_if_exception_type(_RETRYABLE),
        before_sleep=_log_retry,
        reraise=True,
    )
