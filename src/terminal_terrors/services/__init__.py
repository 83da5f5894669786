# src/terminal_terrors/services/__init__.py
"""Business logic services for the Terminal Terrors backend."""

from .presence import OnlineEntry, PresenceTracker
from .presence_sweeper import PresenceSweepWorker
from .saves import SaveStore
from .tokens import SessionClaims, SessionIssuer, get_session_issuer

__all__ = [
    "OnlineEntry",
    "PresenceTracker",
    "PresenceSweepWorker",
    "SaveStore",
    "SessionClaims",
    "SessionIssuer",
    "get_session_issuer",
]
