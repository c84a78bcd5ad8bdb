"""
SQLite implementation of blog repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select

from app.infrastructure.local.database import BlogORM, get_session_factory, translate_db_errors
from app.interfaces.blog_repository import IBlogRepository
from app.models.blog import Blog, BlogBase, BlogCreate, BlogUpdate
from app.utils.datetime_utils import ensure_utc, now_utc
from app.utils.ids import is_valid_uuid, new_id

DEFAULT_AUTHOR = "Anonymous"


def _editable_fields(blog: BlogBase) -> dict:
    """Apply the defaults for optional blog fields."""
    return {
        "title": blog.title,
        "content": blog.content,
        "author": blog.author or DEFAULT_AUTHOR,
        "tags": list(blog.tags or []),
        "thumbnail": blog.thumbnail or "",
        "category": blog.category or "",
    }


class SqliteBlogRepository(IBlogRepository):
    """SQLite implementation of blog repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: BlogORM) -> Blog:
        return Blog(
            id=orm.id,
            title=orm.title,
            content=orm.content,
            author=orm.author or DEFAULT_AUTHOR,
            tags=orm.tags or [],
            thumbnail=orm.thumbnail or "",
            category=orm.category or "",
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    @translate_db_errors
    async def create(self, blog: BlogCreate) -> Blog:
        async with self._session_factory() as session:
            orm = BlogORM(id=new_id(), created_at=now_utc(), **_editable_fields(blog))
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    @translate_db_errors
    async def get(self, blog_id: str) -> Optional[Blog]:
        if not is_valid_uuid(blog_id):
            return None
        async with self._session_factory() as session:
            orm = await session.get(BlogORM, blog_id)
            return self._orm_to_model(orm) if orm else None

    @translate_db_errors
    async def list(self) -> list[Blog]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(BlogORM).order_by(BlogORM.created_at.desc(), BlogORM.id.desc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    @translate_db_errors
    async def update(self, blog_id: str, update: BlogUpdate) -> Optional[Blog]:
        if not is_valid_uuid(blog_id):
            return None
        async with self._session_factory() as session:
            orm = await session.get(BlogORM, blog_id)
            if not orm:
                return None
            for field, value in _editable_fields(update).items():
                setattr(orm, field, value)
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    @translate_db_errors
    async def delete(self, blog_id: str) -> bool:
        if not is_valid_uuid(blog_id):
            return False
        async with self._session_factory() as session:
            result = await session.execute(delete(BlogORM).where(BlogORM.id == blog_id))
            await session.commit()
            return result.rowcount > 0
