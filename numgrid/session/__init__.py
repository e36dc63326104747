"""
Session Module - Manages in-memory game sessions.

A session represents one play-through:
- Created when a shell starts a game
- Holds the live Game
- Destroyed when the game is ended or goes stale

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
