from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import ParamSpec, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.configs import file_logger

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")

# Transient failures worth another attempt by default
RETRIABLE_EXCEPTIONS = (ConnectionError, TimeoutError)


def _log_retry(max_retries: int) -> Callable[[RetryCallState], None]:
    """
    Build a ``before_sleep`` callback that reports each failed attempt.

    Args:
        max_retries: Total attempts allowed, shown in the log line.

    Returns:
        Callback for tenacity's ``before_sleep`` hook.
    """

    def callback(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        name = retry_state.fn.__name__ if retry_state.fn else "unknown"

        logger.warning(
            "Attempt %d/%d of %s failed, retrying in %.2fs: %r",
            retry_state.attempt_number,
            max_retries,
            name,
            delay,
            exception,
        )

    return callback


def with_retry(
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: type[Exception] | tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async callable with exponential backoff using Tenacity.

    The last exception is re-raised unchanged once ``max_retries`` attempts
    have failed.

    Args:
        max_retries: Total number of attempts.
        base_delay: Initial delay between attempts in seconds (0 disables waiting).
        max_delay: Upper bound on the delay in seconds.
        exec_retry: Exception type, or tuple of types, to retry on. Anything
            else propagates immediately.

    Returns:
        Decorator applying the retry policy.
    """
    return retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        retry=retry_if_exception_type(exec_retry),
        before_sleep=_log_retry(max_retries),
        reraise=True,
    )
