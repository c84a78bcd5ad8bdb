"""
SQLite implementation of comment repository.
"""

from __future__ import annotations

from sqlalchemy import func, select

from app.infrastructure.local.database import (
    CommentLikeORM,
    CommentORM,
    get_session_factory,
    translate_db_errors,
)
from app.interfaces.comment_repository import ICommentRepository
from app.models.engagement import Comment, CommentCreate
from app.utils.datetime_utils import ensure_utc, now_utc
from app.utils.ids import new_id


class SqliteCommentRepository(ICommentRepository):
    """SQLite implementation of comment repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: CommentORM) -> Comment:
        return Comment(
            id=orm.id,
            blog_id=orm.blog_id,
            username=orm.username,
            content=orm.content,
            created_at=ensure_utc(orm.created_at),
        )

    @translate_db_errors
    async def create(self, comment: CommentCreate) -> Comment:
        async with self._session_factory() as session:
            orm = CommentORM(
                id=new_id(),
                blog_id=comment.blog_id,
                username=comment.username,
                content=comment.content,
                created_at=now_utc(),
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    @translate_db_errors
    async def list_by_blog(self, blog_id: str) -> list[Comment]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(CommentORM)
                .where(CommentORM.blog_id == blog_id)
                .order_by(CommentORM.created_at.desc(), CommentORM.id.desc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def _find_like(self, session, comment_id: str, user_id: str):
        result = await session.execute(
            select(CommentLikeORM).where(
                CommentLikeORM.comment_id == comment_id,
                CommentLikeORM.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @translate_db_errors
    async def toggle_like(self, comment_id: str, user_id: str) -> bool:
        async with self._session_factory() as session:
            existing = await self._find_like(session, comment_id, user_id)
            if existing:
                await session.delete(existing)
                liked = False
            else:
                session.add(
                    CommentLikeORM(
                        id=new_id(),
                        comment_id=comment_id,
                        user_id=user_id,
                        created_at=now_utc(),
                    )
                )
                liked = True
            await session.commit()
            return liked

    @translate_db_errors
    async def count_likes(self, comment_id: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count(CommentLikeORM.id)).where(
                    CommentLikeORM.comment_id == comment_id
                )
            )
            return int(result.scalar_one())

    @translate_db_errors
    async def is_liked(self, comment_id: str, user_id: str) -> bool:
        async with self._session_factory() as session:
            return await self._find_like(session, comment_id, user_id) is not None
