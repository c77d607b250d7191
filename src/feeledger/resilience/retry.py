"""
Retry Strategies using Tenacity.

Standard retry policy for journal writes against a storage backend.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from feeledger.core.logging import get_logger

logger = get_logger("resilience")

TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
    RedisConnectionError,
    RedisTimeoutError,
)


def is_transient_error(exception: BaseException) -> bool:
    """Check if exception is a transient connection/timeout error."""
    return isinstance(exception, TRANSIENT_ERRORS)


def _log_retry(retry_state: RetryCallState) -> None:
    logger.warning(f"Retrying storage write... (Attempt {retry_state.attempt_number})")


def retry_policy(
    max_attempts: int = 5,
    min_wait: float = 1.0,
    max_wait: float = 16.0,
) -> AsyncRetrying:
    """
    Build the standard retry policy.

    Retries transient errors with exponential backoff (1s, 2s, 4s, 8s, 16s by
    default). Anything else is raised immediately.
    """
    return AsyncRetrying(
        retry=retry_if_exception(is_transient_error),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
        before_sleep=_log_retry,
    )


async def execute_with_retry(
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    policy: AsyncRetrying | None = None,
    **kwargs: Any,
) -> Any:
    """Execute an async function under a retry policy."""
    async for attempt in policy or retry_policy():
        with attempt:
            return await func(*args, **kwargs)
