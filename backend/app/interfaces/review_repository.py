"""
Review repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.engagement import Review, ReviewCreate


class IReviewRepository(ABC):
    """Abstract interface for client review persistence."""

    @abstractmethod
    async def create(self, review: ReviewCreate) -> Review:
        """Create a new review stamped with the current time."""
        pass

    @abstractmethod
    async def list(self) -> list[Review]:
        """List all reviews in insertion order."""
        pass

    @abstractmethod
    async def stats(self) -> tuple[Optional[float], int]:
        """
        Aggregate ratings.

        Returns:
            (average rating or None when there are no reviews, review count)
        """
        pass

    @abstractmethod
    async def delete(self, review_id: str) -> bool:
        """Delete a review. Returns True if deleted."""
        pass
