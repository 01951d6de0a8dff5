"""Authentication state machine with transition validation."""

from contextio.state_machine.machine import AuthStateMachine
from contextio.state_machine.transitions import TRANSITIONS, AuthEvent

__all__ = [
    "AuthEvent",
    "AuthStateMachine",
    "TRANSITIONS",
]
