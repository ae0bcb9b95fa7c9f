from typing import Dict, Any, Callable, Optional
from datetime import datetime
import asyncio
import structlog

from advisor.domain.exceptions import SessionExistsError, SessionNotFoundError
from ..memory_manager import MemoryManager

logger = structlog.get_logger(__name__)


class SessionManager:
    """Tracks the working memory of every active session.

    Each session owns its own MemoryManager; nothing is shared between
    sessions. An id may only be active once at a time.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.sessions: Dict[str, MemoryManager] = {}
        self.clock = clock
        self._lock = asyncio.Lock()

    async def create_session(self, session_id: Optional[str] = None) -> MemoryManager:
        """Start a session with empty working memory"""

        async with self._lock:
            if session_id and session_id in self.sessions:
                raise SessionExistsError(
                    "Session already active",
                    {"session_id": session_id}
                )

            memory = MemoryManager(session_id, clock=self.clock)
            self.sessions[memory.session_id] = memory

        logger.info("Session created", session_id=memory.session_id)
        return memory

    async def get_session(self, session_id: str) -> MemoryManager:
        """Get the working memory of an active session"""

        async with self._lock:
            memory = self.sessions.get(session_id)

        if memory is None:
            raise SessionNotFoundError("Session not found", {"session_id": session_id})
        return memory

    async def end_session(self, session_id: str) -> bool:
        """Drop a session; returns False if it was not active"""

        async with self._lock:
            removed = self.sessions.pop(session_id, None) is not None

        if removed:
            logger.info("Session ended", session_id=session_id)
        return removed

    async def get_all_active_sessions(self) -> Dict[str, Dict[str, Any]]:
        """Get a snapshot of all active sessions"""

        async with self._lock:
            return {
                session_id: {
                    "created_at": memory.context.created_at.isoformat(),
                    "last_updated_at": memory.context.last_updated_at.isoformat(),
                    "has_idea": memory.has_idea(),
                    "todos": memory.get_progress().model_dump()
                }
                for session_id, memory in self.sessions.items()
            }
