"""
Visit repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from app.models.engagement import Visit


class IVisitRepository(ABC):
    """Abstract interface for site visit logging."""

    @abstractmethod
    async def record(self, ip: Optional[str], user_agent: Optional[str]) -> Visit:
        """Store one visit stamped with the current time."""
        pass

    @abstractmethod
    async def count_between(self, start: datetime, end: datetime) -> int:
        """Count visits with start <= visited_at < end."""
        pass
