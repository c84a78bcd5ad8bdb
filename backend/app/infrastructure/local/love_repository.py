"""
SQLite implementation of love repository.
"""

from __future__ import annotations

from sqlalchemy import func, select

from app.infrastructure.local.database import LoveORM, get_session_factory, translate_db_errors
from app.interfaces.love_repository import ILoveRepository
from app.utils.datetime_utils import now_utc
from app.utils.ids import new_id


class SqliteLoveRepository(ILoveRepository):
    """SQLite implementation of love repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def _find(self, session, blog_id: str, user_id: str):
        result = await session.execute(
            select(LoveORM).where(LoveORM.blog_id == blog_id, LoveORM.user_id == user_id)
        )
        return result.scalar_one_or_none()

    @translate_db_errors
    async def toggle(self, blog_id: str, user_id: str) -> bool:
        async with self._session_factory() as session:
            existing = await self._find(session, blog_id, user_id)
            if existing:
                await session.delete(existing)
                loved = False
            else:
                session.add(
                    LoveORM(id=new_id(), blog_id=blog_id, user_id=user_id, created_at=now_utc())
                )
                loved = True
            await session.commit()
            return loved

    @translate_db_errors
    async def list_users(self, blog_id: str) -> list[str]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(LoveORM.user_id)
                .where(LoveORM.blog_id == blog_id)
                .order_by(LoveORM.created_at.asc(), LoveORM.id.asc())
            )
            return list(result.scalars().all())

    @translate_db_errors
    async def count(self, blog_id: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count(LoveORM.id)).where(LoveORM.blog_id == blog_id)
            )
            return int(result.scalar_one())

    @translate_db_errors
    async def is_loved(self, blog_id: str, user_id: str) -> bool:
        async with self._session_factory() as session:
            return await self._find(session, blog_id, user_id) is not None
