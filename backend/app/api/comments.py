"""
Comment API endpoints.

Blog comments plus per-user comment likes.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CommentRepo
from app.core.exceptions import ValidationError
from app.models.engagement import CommentCreate, CommentLikeRequest
from app.utils.ids import is_valid_uuid

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_comment(comment: CommentCreate, repo: CommentRepo):
    """Add a comment to a blog post."""
    if not is_valid_uuid(comment.blog_id):
        raise ValidationError("Invalid blog ID")
    created = await repo.create(comment)
    return {"success": True, "message": "Comment added", "inserted_id": created.id}


@router.post("/like")
async def toggle_comment_like(request: CommentLikeRequest, repo: CommentRepo):
    """Like a comment, or remove the like if already liked."""
    liked = await repo.toggle_like(request.comment_id, request.user_id)
    return {
        "success": True,
        "liked": liked,
        "message": "Comment liked" if liked else "Comment unliked",
    }


@router.get("/like-count/{comment_id}")
async def get_like_count(comment_id: str, repo: CommentRepo):
    """Number of likes on a comment."""
    return {"success": True, "count": await repo.count_likes(comment_id)}


@router.get("/liked/{comment_id}")
async def get_like_status(
    comment_id: str,
    repo: CommentRepo,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Whether a user likes a comment."""
    if not user_id:
        raise ValidationError("userId is required")
    return {"success": True, "liked": await repo.is_liked(comment_id, user_id)}


@router.get("/{blog_id}")
async def list_comments(blog_id: str, repo: CommentRepo):
    """List comments for a blog post, newest first."""
    if not is_valid_uuid(blog_id):
        raise ValidationError("Invalid blog ID")
    return {"success": True, "data": await repo.list_by_blog(blog_id)}
