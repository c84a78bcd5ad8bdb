"""
Love repository interface.

A love is a (blog, user) pair; each user loves a blog at most once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ILoveRepository(ABC):
    """Abstract interface for blog love reactions."""

    @abstractmethod
    async def toggle(self, blog_id: str, user_id: str) -> bool:
        """
        Add the love, or remove it if the user already loves the blog.

        Returns:
            True if the blog is now loved by the user
        """
        pass

    @abstractmethod
    async def list_users(self, blog_id: str) -> list[str]:
        """User IDs that love the blog, oldest first."""
        pass

    @abstractmethod
    async def count(self, blog_id: str) -> int:
        """Number of loves for the blog."""
        pass

    @abstractmethod
    async def is_loved(self, blog_id: str, user_id: str) -> bool:
        """Check whether the user loves the blog."""
        pass
