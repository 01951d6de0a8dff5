"""Authentication events and the table of states they lead to."""

from enum import StrEnum

from contextio.domain.types import AuthState


class AuthEvent(StrEnum):
    """Events that move the client between authentication states."""

    BEGIN_AUTH = "begin_auth"
    COMPLETE_LOGIN = "complete_login"
    RESTORE = "restore"
    CLEAR_CREDENTIALS = "clear_credentials"


# (state, event) -> next state.  Missing pairs are rejected by the machine.
TRANSITIONS: dict[tuple[AuthState, str], AuthState] = {
    # From UNAUTHENTICATED
    (AuthState.UNAUTHENTICATED, AuthEvent.BEGIN_AUTH): AuthState.PENDING_TOKEN,
    # A connect-token response may arrive in a process that never began the handshake
    (AuthState.UNAUTHENTICATED, AuthEvent.COMPLETE_LOGIN): AuthState.AUTHORIZED,
    (AuthState.UNAUTHENTICATED, AuthEvent.RESTORE): AuthState.AUTHORIZED,
    (AuthState.UNAUTHENTICATED, AuthEvent.CLEAR_CREDENTIALS): AuthState.UNAUTHENTICATED,
    # From PENDING_TOKEN
    (AuthState.PENDING_TOKEN, AuthEvent.BEGIN_AUTH): AuthState.PENDING_TOKEN,
    (AuthState.PENDING_TOKEN, AuthEvent.COMPLETE_LOGIN): AuthState.AUTHORIZED,
    (AuthState.PENDING_TOKEN, AuthEvent.RESTORE): AuthState.AUTHORIZED,
    (AuthState.PENDING_TOKEN, AuthEvent.CLEAR_CREDENTIALS): AuthState.UNAUTHENTICATED,
    # From AUTHORIZED -- a new connect token adds a source to the existing account
    (AuthState.AUTHORIZED, AuthEvent.BEGIN_AUTH): AuthState.AUTHORIZED,
    (AuthState.AUTHORIZED, AuthEvent.COMPLETE_LOGIN): AuthState.AUTHORIZED,
    (AuthState.AUTHORIZED, AuthEvent.RESTORE): AuthState.AUTHORIZED,
    (AuthState.AUTHORIZED, AuthEvent.CLEAR_CREDENTIALS): AuthState.UNAUTHENTICATED,
}
