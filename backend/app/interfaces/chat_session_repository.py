"""
Chat session repository interface.

Defines the contract for conversation persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from app.models.chat_session import ChatMessage, ChatSession, ChatSessionSummary
from app.models.enums import ChatMode


class IChatSessionRepository(ABC):
    """Abstract interface for chat session persistence."""

    @abstractmethod
    async def create(self, session: ChatSession) -> ChatSession:
        """
        Insert a new session together with its initial messages.

        Args:
            session: Fully built session (id and timestamps already set)

        Returns:
            The stored session
        """
        pass

    @abstractmethod
    async def get(self, session_id: str) -> Optional[ChatSession]:
        """
        Get a session with all of its messages.

        Args:
            session_id: Session ID

        Returns:
            ChatSession or None if not found
        """
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ChatSessionSummary]:
        """
        List sessions newest-first.

        Args:
            search: Case-insensitive substring matched against the title
                or any message text
            limit: Max sessions
            offset: Pagination offset

        Returns:
            List of session summaries
        """
        pass

    @abstractmethod
    async def count(self, search: Optional[str] = None) -> int:
        """Count sessions matching the same filter as list()."""
        pass

    @abstractmethod
    async def append_messages(
        self,
        session_id: str,
        messages: list[ChatMessage],
        mode: ChatMode,
        updated_at: datetime,
    ) -> bool:
        """
        Append messages and set mode/updated_at in a single write.

        Returns:
            True if the session existed
        """
        pass

    @abstractmethod
    async def touch(self, session_id: str, accessed_at: datetime) -> bool:
        """Set last_accessed_at. Returns True if the session existed."""
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete a session and its messages. Returns True if deleted."""
        pass

    @abstractmethod
    async def delete_many(self, session_ids: list[str]) -> list[str]:
        """
        Delete several sessions.

        Returns:
            IDs that were actually deleted
        """
        pass
