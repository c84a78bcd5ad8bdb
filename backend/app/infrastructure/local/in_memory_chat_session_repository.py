"""In-memory chat session repository implementation."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from app.interfaces.chat_session_repository import IChatSessionRepository
from app.models.chat_session import ChatMessage, ChatSession, ChatSessionSummary
from app.models.enums import ChatMode


class InMemoryChatSessionRepository(IChatSessionRepository):
    """In-memory implementation of chat session repository.

    Stores sessions in a dictionary. Suitable for development and testing.
    Sessions are lost on restart.
    """

    def __init__(self):
        self._sessions: dict[str, ChatSession] = {}

    def _matches(self, session: ChatSession, search: Optional[str]) -> bool:
        if not search:
            return True
        needle = search.casefold()
        if needle in session.title.casefold():
            return True
        return any(needle in m.text.casefold() for m in session.messages)

    def _filtered(self, search: Optional[str]) -> list[ChatSession]:
        sessions = [s for s in self._sessions.values() if self._matches(s, search)]
        # Newest first, id as tie-breaker so pagination is stable
        sessions.sort(key=lambda s: (s.created_at, s.id), reverse=True)
        return sessions

    async def create(self, session: ChatSession) -> ChatSession:
        """Create a new session."""
        self._sessions[session.id] = session.model_copy(deep=True)
        return session

    async def get(self, session_id: str) -> Optional[ChatSession]:
        """Get a session by ID."""
        session = self._sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    async def list(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ChatSessionSummary]:
        """List sessions newest-first."""
        page = self._filtered(search)[offset : offset + limit]
        return [
            ChatSessionSummary(
                id=s.id,
                title=s.title,
                mode=s.mode,
                message_count=len(s.messages),
                created_at=s.created_at,
                updated_at=s.updated_at,
                last_accessed_at=s.last_accessed_at,
            )
            for s in page
        ]

    async def count(self, search: Optional[str] = None) -> int:
        """Count sessions matching the list filter."""
        return len(self._filtered(search))

    async def append_messages(
        self,
        session_id: str,
        messages: list[ChatMessage],
        mode: ChatMode,
        updated_at: datetime,
    ) -> bool:
        """Append messages to a session."""
        session = self._sessions.get(session_id)
        if not session:
            return False
        session.messages.extend(m.model_copy() for m in messages)
        session.mode = mode
        session.updated_at = updated_at
        return True

    async def touch(self, session_id: str, accessed_at: datetime) -> bool:
        """Set last_accessed_at."""
        session = self._sessions.get(session_id)
        if not session:
            return False
        session.last_accessed_at = accessed_at
        return True

    async def delete(self, session_id: str) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    async def delete_many(self, session_ids: list[str]) -> list[str]:
        """Delete several sessions; returns the IDs that existed."""
        deleted = []
        for session_id in session_ids:
            if await self.delete(session_id):
                deleted.append(session_id)
        return deleted
