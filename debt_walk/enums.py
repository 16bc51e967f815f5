"""Enumerations used by the tracker.

Currently holds the authentication state of an :class:`AuthOrchestrator`.
"""
from enum import Enum, auto


class AuthState(Enum):
    """Session states; AUTHENTICATED is terminal for a session."""
    AWAITING_CALLBACK = auto()
    AUTHENTICATED = auto()
