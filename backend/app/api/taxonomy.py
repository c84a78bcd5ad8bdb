"""
Tag and category API endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import CategoryRepo, TagRepo
from app.models.blog import TaxonomyCreate, TaxonomyTerm

tags_router = APIRouter()
categories_router = APIRouter()


@tags_router.get("", response_model=list[TaxonomyTerm])
async def list_tags(repo: TagRepo):
    """List tags sorted by name."""
    return await repo.list()


@tags_router.post("", status_code=status.HTTP_201_CREATED)
async def create_tag(term: TaxonomyCreate, repo: TagRepo):
    """Create a tag."""
    created = await repo.create(term)
    return {"success": True, "inserted_id": created.id}


@categories_router.get("", response_model=list[TaxonomyTerm])
async def list_categories(repo: CategoryRepo):
    """List categories sorted by name."""
    return await repo.list()


@categories_router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(term: TaxonomyCreate, repo: CategoryRepo):
    """Create a category."""
    created = await repo.create(term)
    return {"success": True, "inserted_id": created.id}
