"""Tracks where a client is in the connect-token login handshake."""

from __future__ import annotations

from contextio.domain.errors import InvalidTransitionError
from contextio.domain.types import AuthState
from contextio.state_machine.transitions import TRANSITIONS


class AuthStateMachine:
    """Finite state machine governing the client authentication lifecycle.

    Usage::

        sm = AuthStateMachine()
        sm.trigger("begin_auth")          # -> PENDING_TOKEN
        sm.trigger("complete_login")      # -> AUTHORIZED
        sm.trigger("clear_credentials")   # -> UNAUTHENTICATED
    """

    def __init__(self, initial_state: AuthState = AuthState.UNAUTHENTICATED) -> None:
        self._state: AuthState = initial_state
        self._history: list[tuple[AuthState, str, AuthState]] = []

    @property
    def state(self) -> AuthState:
        """Return the current authentication state."""
        return self._state

    @property
    def history(self) -> list[tuple[AuthState, str, AuthState]]:
        """Return a copy of the ``(from_state, event, to_state)`` history."""
        return list(self._history)

    def can_trigger(self, event: str) -> bool:
        """Return True if ``event`` is valid from the current state."""
        return (self._state, event) in TRANSITIONS

    def trigger(self, event: str) -> AuthState:
        """Move to the state ``event`` leads to and record the step.

        Raises:
            InvalidTransitionError: ``event`` is not accepted in the current
                state; the state is left unchanged.
        """
        try:
            target = TRANSITIONS[(self._state, event)]
        except KeyError:
            raise InvalidTransitionError(self._state, event) from None

        self._history.append((self._state, event, target))
        self._state = target
        return target

    def get_valid_events(self) -> list[str]:
        """Events accepted in the current state, alphabetically."""
        return sorted(ev for (src, ev) in TRANSITIONS if src == self._state)
