"""
AI command repository interface.

Stores command/response pairs of the one-shot assistant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.ai_command import AICommand


class IAICommandRepository(ABC):
    """Abstract interface for assistant command history."""

    @abstractmethod
    async def add(self, command: str, response: str) -> AICommand:
        """Store a command/response pair."""
        pass

    @abstractmethod
    async def list(self) -> list[AICommand]:
        """All stored pairs, oldest first."""
        pass

    @abstractmethod
    async def recent(self, limit: int) -> list[AICommand]:
        """The newest `limit` pairs, returned oldest first."""
        pass
