"""
Session Module - Manages in-memory game handles.

A session represents one game:
- Created when a caller starts a game
- Holds the current game state
- Serializes the commands applied to it
- Forgotten when the caller ends it

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import Session, SessionManager, SessionNotFound

__all__ = [
    "Session",
    "SessionManager",
    "SessionNotFound",
]
