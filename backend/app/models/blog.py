"""
Blog post and taxonomy model definitions.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlogBase(BaseModel):
    """Editable blog fields."""

    title: str = Field(..., min_length=1, max_length=300, description="Post title")
    content: str = Field(..., min_length=1, description="Post body (HTML or markdown)")
    author: Optional[str] = Field(None, description="Author name (default Anonymous)")
    tags: Optional[list[str]] = Field(None, description="Tag names")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL")
    category: Optional[str] = Field(None, description="Category name")

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class BlogCreate(BlogBase):
    """Schema for creating a blog post."""

    pass


class BlogUpdate(BlogBase):
    """Schema for replacing a blog post (same rules as create)."""

    pass


class Blog(BaseModel):
    """Complete blog post."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    author: str = "Anonymous"
    tags: list[str] = Field(default_factory=list)
    thumbnail: str = ""
    category: str = ""
    created_at: datetime
    updated_at: Optional[datetime] = None


class TaxonomyCreate(BaseModel):
    """Schema for creating a tag or category."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class TaxonomyTerm(BaseModel):
    """A tag or a category."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime
