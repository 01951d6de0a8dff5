"""Retry helpers built on tenacity.

The client itself never retries.  Callers that want retries wrap a call that
*signs and sends* -- never a call that re-sends an already signed request --
so every attempt carries a fresh nonce and timestamp.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from contextio.domain.errors import ServerError, TransportError
from contextio.domain.models import RequestDescriptor

if TYPE_CHECKING:
    from contextio.client import ContextIOClient

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_ATTEMPTS = 3


def is_retryable(exc: BaseException) -> bool:
    """Return True for transport failures, 429, and 5xx responses."""
    if isinstance(exc, TransportError):
        return True
    if isinstance(exc, ServerError):
        return exc.status_code == 429 or exc.status_code >= 500
    return False


def _operation(retry_state: RetryCallState) -> str:
    fn = retry_state.fn
    return getattr(fn, "_api_name", "unknown") if fn is not None else "unknown"


def _before_sleep_log(retry_state: RetryCallState) -> None:
    logger.warning(
        "api_call_retrying",
        operation=_operation(retry_state),
        attempt=retry_state.attempt_number,
        sleep_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
    )


def _log_final_failure(retry_state: RetryCallState) -> Any:
    """Log that attempts ran out, then surface the last outcome."""
    outcome = retry_state.outcome
    logger.error(
        "api_call_exhausted",
        operation=_operation(retry_state),
        attempts=retry_state.attempt_number,
        error=str(outcome.exception()) if outcome is not None else None,
    )
    return outcome.result() if outcome is not None else None


def resilient_api_call(
    api_name: str,
    attempts: int = DEFAULT_ATTEMPTS,
    wait: wait_base | None = None,
) -> Callable[[F], F]:
    """Decorate a Context.IO call so retryable failures are attempted again.

    Backoff is exponential with jitter unless ``wait`` is given.  Errors that
    ``is_retryable`` rejects propagate on the first attempt; retryable ones
    propagate once ``attempts`` is used up.

    Args:
        api_name: Operation name attached to the retry log events.
        attempts: Total attempts, including the first.
        wait: tenacity wait strategy to use instead of the backoff.
    """

    def decorator(func: F) -> F:
        func._api_name = api_name  # type: ignore[attr-defined]

        wrapped = retry(
            stop=stop_after_attempt(attempts),
            wait=wait if wait is not None else wait_exponential_jitter(initial=1, max=30, jitter=5),
            retry=retry_if_exception(is_retryable),
            before_sleep=_before_sleep_log,
            retry_error_callback=_log_final_failure,
        )(func)

        return wrapped  # type: ignore[return-value]

    return decorator


def execute_with_retry(
    client: ContextIOClient,
    descriptor: RequestDescriptor,
    attempts: int = DEFAULT_ATTEMPTS,
    wait: wait_base | None = None,
) -> Any:
    """Execute ``descriptor`` through ``client``, re-signing on every attempt.

    Args:
        client: The client holding credentials and transport.
        descriptor: The request to execute.
        attempts: Maximum number of attempts.
        wait: Optional tenacity wait strategy.

    Returns:
        The interpreted response body.
    """

    @resilient_api_call(descriptor.path_template, attempts=attempts, wait=wait)
    def _attempt() -> Any:
        return client.execute(descriptor)

    return _attempt()
