"""
Blog repository interface.

Defines the contract for blog post persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.blog import Blog, BlogCreate, BlogUpdate


class IBlogRepository(ABC):
    """Abstract interface for blog post persistence."""

    @abstractmethod
    async def create(self, blog: BlogCreate) -> Blog:
        """
        Create a new blog post.

        Missing optional fields get their defaults (author "Anonymous",
        no tags, empty thumbnail and category).

        Returns:
            Created blog post
        """
        pass

    @abstractmethod
    async def get(self, blog_id: str) -> Optional[Blog]:
        """Get a blog post by ID, or None if not found."""
        pass

    @abstractmethod
    async def list(self) -> list[Blog]:
        """List all blog posts, newest first."""
        pass

    @abstractmethod
    async def update(self, blog_id: str, update: BlogUpdate) -> Optional[Blog]:
        """
        Replace the editable fields of a blog post and set updated_at.

        Returns:
            Updated blog post, or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, blog_id: str) -> bool:
        """Delete a blog post. Returns True if deleted."""
        pass
