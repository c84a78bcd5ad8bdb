"""
Love reaction API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.api.deps import BlogRepo, LoveRepo
from app.core.exceptions import NotFoundError, ValidationError
from app.models.engagement import LoveToggleRequest, LoveToggleResult

router = APIRouter()


@router.post("", response_model=LoveToggleResult)
async def toggle_love(request: LoveToggleRequest, repo: LoveRepo, blogs: BlogRepo):
    """Love a blog post, or take the love back."""
    if not await blogs.get(request.blog_id):
        raise NotFoundError("Blog not found")
    loved = await repo.toggle(request.blog_id, request.user_id)
    return LoveToggleResult(loved=loved, loves=await repo.list_users(request.blog_id))


@router.get("/status/{blog_id}")
async def get_love_status(
    blog_id: str,
    repo: LoveRepo,
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """Whether a user loves a blog post, plus the total count."""
    if not user_id:
        raise ValidationError("Missing blogId or userId")
    return {
        "success": True,
        "loved": await repo.is_loved(blog_id, user_id),
        "count": await repo.count(blog_id),
    }


@router.get("/{blog_id}")
async def get_love_count(blog_id: str, repo: LoveRepo):
    """Number of loves on a blog post."""
    return {"success": True, "count": await repo.count(blog_id)}
