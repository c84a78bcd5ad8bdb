"""
SQLite implementation of review repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, func, select

from app.infrastructure.local.database import ReviewORM, get_session_factory, translate_db_errors
from app.interfaces.review_repository import IReviewRepository
from app.models.engagement import Review, ReviewCreate
from app.utils.datetime_utils import ensure_utc, now_utc
from app.utils.ids import is_valid_uuid, new_id


class SqliteReviewRepository(IReviewRepository):
    """SQLite implementation of review repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ReviewORM) -> Review:
        return Review(
            id=orm.id,
            name=orm.name,
            rating=orm.rating,
            message=orm.message,
            image=orm.image,
            created_at=ensure_utc(orm.created_at),
        )

    @translate_db_errors
    async def create(self, review: ReviewCreate) -> Review:
        async with self._session_factory() as session:
            orm = ReviewORM(
                id=new_id(),
                name=review.name,
                rating=review.rating,
                message=review.message,
                image=review.image,
                created_at=now_utc(),
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    @translate_db_errors
    async def list(self) -> list[Review]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ReviewORM).order_by(ReviewORM.created_at.asc(), ReviewORM.id.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    @translate_db_errors
    async def stats(self) -> tuple[Optional[float], int]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.avg(ReviewORM.rating), func.count(ReviewORM.id))
            )
            avg, count = result.one()
            return (float(avg) if avg is not None else None), int(count)

    @translate_db_errors
    async def delete(self, review_id: str) -> bool:
        if not is_valid_uuid(review_id):
            return False
        async with self._session_factory() as session:
            result = await session.execute(delete(ReviewORM).where(ReviewORM.id == review_id))
            await session.commit()
            return result.rowcount > 0
