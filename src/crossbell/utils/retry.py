"""
Retry policy for idempotent content-store operations.

Provides exponential backoff with optional jitter. The policy is an explicit
object handed to whoever needs it; nothing in the SDK retries implicitly.
Mutating contract calls are never retried.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from typing import (
    Awaitable,
    Callable,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from crossbell.utils.logging import get_logger

T = TypeVar("T")

_logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior.

    Example:
        ```python
        config = RetryConfig(
            max_attempts=5,
            base_delay_ms=500,
            retryable_errors=(httpx.TransportError,),
        )

        # Deterministic policy for tests
        RetryConfig(base_delay_ms=0, jitter=False)
        ```
    """

    max_attempts: int = 3
    """Maximum number of attempts, including the first one."""

    base_delay_ms: int = 500
    """Base delay in milliseconds for exponential backoff."""

    max_delay_ms: int = 5000
    """Maximum delay in milliseconds (cap for exponential growth)."""

    jitter: bool = True
    """Whether to add random jitter to delays."""

    exponential_base: float = 2.0
    """Base for exponential backoff calculation."""

    retryable_errors: Tuple[Type[Exception], ...] = field(
        default_factory=lambda: (Exception,)
    )
    """Tuple of exception types that should trigger a retry."""

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("delays must be non-negative")


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """
    Calculate delay with exponential backoff and optional jitter.

    Args:
        attempt: Zero-based attempt number (0 = first retry)
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    delay_ms = config.base_delay_ms * (config.exponential_base ** attempt)
    delay_ms = min(delay_ms, config.max_delay_ms)

    if config.jitter:
        # Full jitter: uniform in [0, delay]
        delay_ms = random.uniform(0, delay_ms)

    return delay_ms / 1000


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    config: Optional[RetryConfig] = None,
    *,
    operation: str = "operation",
) -> T:
    """
    Execute async function with retry logic.

    Args:
        fn: Async function to execute (no arguments)
        config: Retry configuration (uses defaults if None)
        operation: Label used in log records

    Returns:
        Result of the function

    Raises:
        The last exception if all attempts fail. Errors that are not in
        ``config.retryable_errors`` propagate immediately.
    """
    config = config or RetryConfig()
    last_error: Optional[Exception] = None

    for attempt in range(config.max_attempts):
        try:
            return await fn()
        except config.retryable_errors as e:
            last_error = e

            if attempt < config.max_attempts - 1:
                delay = calculate_delay(attempt, config)
                _logger.debug(
                    "Retrying after failure",
                    extra={
                        "operation": operation,
                        "attempt": attempt + 1,
                        "max_attempts": config.max_attempts,
                        "delay_seconds": delay,
                        "error": str(e),
                    },
                )
                await asyncio.sleep(delay)

    _logger.warning(
        "Retries exhausted",
        extra={"operation": operation, "attempts": config.max_attempts},
    )
    if last_error is not None:
        raise last_error

    # max_attempts >= 1 makes this unreachable
    raise RuntimeError("Retry exhausted without error")
