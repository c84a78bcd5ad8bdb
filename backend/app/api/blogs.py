"""
Blog API endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import BlogRepo
from app.core.exceptions import NotFoundError
from app.models.blog import BlogCreate, BlogUpdate

router = APIRouter()


@router.get("")
async def list_blogs(repo: BlogRepo):
    """List blog posts, newest first."""
    blogs = await repo.list()
    return {"success": True, "data": blogs}


@router.get("/{blog_id}")
async def get_blog(blog_id: str, repo: BlogRepo):
    """Get a blog post by ID."""
    blog = await repo.get(blog_id)
    if not blog:
        raise NotFoundError("Blog not found")
    return {"success": True, "data": blog}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_blog(blog: BlogCreate, repo: BlogRepo):
    """Create a blog post."""
    created = await repo.create(blog)
    return {"success": True, "message": "Blog created", "inserted_id": created.id}


@router.put("/{blog_id}")
async def update_blog(blog_id: str, update: BlogUpdate, repo: BlogRepo):
    """Replace a blog post."""
    if not await repo.update(blog_id, update):
        raise NotFoundError("Blog not found")
    return {"success": True, "message": "Blog updated successfully"}


@router.delete("/{blog_id}")
async def delete_blog(blog_id: str, repo: BlogRepo):
    """Delete a blog post."""
    if not await repo.delete(blog_id):
        raise NotFoundError("Blog not found")
    return {"success": True, "message": "Blog deleted successfully"}
