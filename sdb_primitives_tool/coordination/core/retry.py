"""
Backoff retry driver for optimistic read-compute-write steps.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from ..constants import BACKOFF_BASE_MS, BACKOFF_MAX_MS, REASON_MAX_TRIES
from ..exceptions import RetriesExhaustedError
from ..logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BackoffPolicy:
    """Jittered exponential backoff settings."""

    base_delay_ms: float = BACKOFF_BASE_MS
    max_delay_ms: float = BACKOFF_MAX_MS

    def delay(self, attempt: int) -> float:
        """
        Compute the delay after a failed attempt.

        Args:
            attempt: Zero-based index of the attempt that failed

        Returns:
            Delay in seconds: (1 + U(0,1)) * base * 2^attempt, capped
        """
        delay_ms = (1 + random.random()) * self.base_delay_ms * (2**attempt)
        return min(delay_ms, self.max_delay_ms) / 1000.0


DEFAULT_POLICY = BackoffPolicy()


async def retry_with_backoff(
    step: Callable[[], Awaitable[T]],
    max_tries: int,
    retry_on: tuple[type[BaseException], ...],
    policy: BackoffPolicy | None = None,
    description: str = "operation",
) -> T:
    """
    Run step until it succeeds or the retry budget is used up.

    Args:
        step: Zero-argument coroutine function performing one attempt
        max_tries: Maximum number of attempts (non-positive means unlimited)
        retry_on: Exceptions that signal a retryable conflict
        policy: Backoff settings (default: DEFAULT_POLICY)
        description: Label used in log messages

    Returns:
        Result of the first successful attempt

    Raises:
        RetriesExhaustedError: If max_tries attempts all raised a retryable error
        Exception: Any non-retryable error raised by step, unchanged
    """
    policy = policy or DEFAULT_POLICY
    attempt = 0

    while True:
        try:
            return await step()
        except retry_on as e:
            attempt += 1
            if max_tries >= 1 and attempt >= max_tries:
                logger.warning(f"{description}: giving up after {attempt} tries ({e})")
                raise RetriesExhaustedError(REASON_MAX_TRIES) from e

            delay = policy.delay(attempt - 1)
            logger.debug(
                f"{description}: attempt {attempt} failed ({type(e).__name__}), "
                f"retrying in {delay:.3f}s"
            )
            await asyncio.sleep(delay)
