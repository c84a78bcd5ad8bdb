"""
Reader engagement models: comments, comment likes, loves, reviews and visits.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_require_text)]


# ===========================================
# Comments
# ===========================================


class CommentCreate(BaseModel):
    """Schema for posting a comment on a blog."""

    model_config = ConfigDict(populate_by_name=True)

    blog_id: NonBlankStr = Field(..., alias="blogId")
    username: NonBlankStr = Field(..., max_length=200)
    content: NonBlankStr = Field(..., max_length=5000)


class Comment(BaseModel):
    """Stored comment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    blog_id: str
    username: str
    content: str
    created_at: datetime


class CommentLikeRequest(BaseModel):
    """Body of POST /comments/like."""

    model_config = ConfigDict(populate_by_name=True)

    comment_id: NonBlankStr = Field(..., alias="commentId")
    user_id: NonBlankStr = Field(..., alias="userId")


# ===========================================
# Loves
# ===========================================


class LoveToggleRequest(BaseModel):
    """Body of POST /loves."""

    model_config = ConfigDict(populate_by_name=True)

    blog_id: NonBlankStr = Field(..., alias="blogId")
    user_id: NonBlankStr = Field(..., alias="userId")


class LoveToggleResult(BaseModel):
    """Outcome of a love toggle."""

    message: str = "Love updated"
    loved: bool
    loves: list[str] = Field(default_factory=list, description="User IDs that love the blog")


# ===========================================
# Reviews
# ===========================================


class ReviewCreate(BaseModel):
    """Schema for posting a client review."""

    name: str = Field(..., min_length=1, max_length=200)
    rating: int = Field(..., ge=1, le=5)
    message: Optional[str] = Field(None, max_length=5000)
    image: Optional[str] = Field(None, description="Avatar URL")


class Review(BaseModel):
    """Stored review."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    rating: int
    message: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime


class ReviewStats(BaseModel):
    """Average rating (one decimal, as text) and review count."""

    avg: str
    count: int


# ===========================================
# Visits
# ===========================================


class Visit(BaseModel):
    """One recorded site visit."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    visited_at: datetime
