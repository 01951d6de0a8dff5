"""Retry helpers that re-sign every attempt."""

from contextio.resilience.retry import execute_with_retry, is_retryable, resilient_api_call

__all__ = [
    "execute_with_retry",
    "is_retryable",
    "resilient_api_call",
]
