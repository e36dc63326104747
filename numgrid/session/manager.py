"""
Session Manager - Creates and tracks game sessions.

PERSISTENCE RULES:
- No database, no save/load
- A session lives in memory until ended or cleaned up as stale
- Each session is driven by one shell at a time; commands are applied
  one after another, never concurrently
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping
import logging
import random
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.dice import RandomSource
from ..engine_core.game import Game
from ..engine_core.reducer import Reducer
from ..settings import GameSettings

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Home row breached
    ABANDONED = "abandoned"  # Ended before the game finished


@dataclass
class Session:
    """An ephemeral game session wrapping one live Game."""
    session_id: str
    game: Game
    created_at: float
    seed: int | None = None
    state: SessionState = SessionState.ACTIVE
    last_active_at: float = 0.0

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def apply(self, action: Action, reducer: Reducer | None = None) -> ActionResult:
        """Apply a command to the session's game."""
        result = (reducer or Reducer()).apply(self.game, action)
        self.last_active_at = time.time()
        if self.game.is_over:
            self.state = SessionState.GAME_OVER
        return result


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own seeded rng
    - Track active sessions
    - Clean up ended or stale sessions
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        settings: GameSettings | Mapping[str, Any] | None = None,
        seed: int | None = None,
        rng: RandomSource | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            settings: Game settings or partial overrides (defaults fill the rest)
            seed: Seed for a reproducible game
            rng: Random source to use instead of a seeded random.Random

        Raises:
            ConfigurationError: If the settings are malformed
        """
        game = Game(settings=settings, rng=rng if rng is not None else random.Random(seed))
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            created_at=now,
            seed=seed,
            last_active_at=now,
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s (seed=%s)", session.session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if not session.game.is_over:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        return [sid for sid, session in self._sessions.items() if session.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove sessions idle for longer than max_age_seconds.

        Returns the ids that were removed.
        """
        current_time = time.time()
        stale = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return stale
