"""HTTP transport collaborators and response interpretation."""

from contextio.transport.http import (
    DEFAULT_TIMEOUT,
    AsyncHttpTransport,
    AsyncTransport,
    HttpTransport,
    RawResponse,
    Transport,
    interpret_response,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "AsyncHttpTransport",
    "AsyncTransport",
    "HttpTransport",
    "RawResponse",
    "Transport",
    "interpret_response",
]
