"""Exception classes for the Context.IO client."""

from contextio.domain.types import AuthState


class ContextIOError(Exception):
    """Base class for all errors raised by the Context.IO client."""


class MissingCredentialsError(ContextIOError):
    """Raised when a request needs credentials the client does not hold.

    Attributes:
        missing: Names of the absent credential fields.
    """

    def __init__(self, *missing: str) -> None:
        self.missing = missing
        super().__init__(f"Missing required credentials: {', '.join(missing)}")


class TransportError(ContextIOError):
    """Raised when the HTTP transport fails before a response is received.

    The underlying transport exception is chained as ``__cause__``.
    """


class ServerError(ContextIOError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: The HTTP status code.
        body: The raw response body, decoded as text.
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Context.IO API returned HTTP {status_code}: {body[:200]}")


class ResponseDecodeError(ContextIOError):
    """Raised when a response body does not match the shape the request declared."""


class AuthFailureError(ContextIOError):
    """Raised when an auth-completion response is malformed or rejected."""


class InvalidTransitionError(ContextIOError):
    """Raised when an invalid authentication state transition is attempted.

    Attributes:
        current_state: The state the machine was in when the transition was attempted.
        event: The event that was rejected.
    """

    def __init__(self, current_state: AuthState, event: str) -> None:
        self.current_state = current_state
        self.event = event
        super().__init__(f"Cannot apply event '{event}' in state '{current_state}'")
