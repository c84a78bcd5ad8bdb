"""
Comment repository interface.

Covers blog comments and per-user comment likes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.engagement import Comment, CommentCreate


class ICommentRepository(ABC):
    """Abstract interface for comment persistence."""

    @abstractmethod
    async def create(self, comment: CommentCreate) -> Comment:
        """Create a new comment."""
        pass

    @abstractmethod
    async def list_by_blog(self, blog_id: str) -> list[Comment]:
        """List comments for a blog, newest first."""
        pass

    @abstractmethod
    async def toggle_like(self, comment_id: str, user_id: str) -> bool:
        """
        Like the comment, or remove the like if the user already liked it.

        Returns:
            True if the comment is now liked by the user
        """
        pass

    @abstractmethod
    async def count_likes(self, comment_id: str) -> int:
        """Number of users who like the comment."""
        pass

    @abstractmethod
    async def is_liked(self, comment_id: str, user_id: str) -> bool:
        """Check whether the user likes the comment."""
        pass
