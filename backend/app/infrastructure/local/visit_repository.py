"""
SQLite implementation of visit repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select

from app.infrastructure.local.database import VisitORM, get_session_factory, translate_db_errors
from app.interfaces.visit_repository import IVisitRepository
from app.models.engagement import Visit
from app.utils.datetime_utils import ensure_utc, now_utc
from app.utils.ids import new_id


class SqliteVisitRepository(IVisitRepository):
    """SQLite implementation of visit repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    @translate_db_errors
    async def record(self, ip: Optional[str], user_agent: Optional[str]) -> Visit:
        async with self._session_factory() as session:
            orm = VisitORM(id=new_id(), ip=ip, user_agent=user_agent, visited_at=now_utc())
            session.add(orm)
            await session.commit()
            return Visit(
                id=orm.id,
                ip=orm.ip,
                user_agent=orm.user_agent,
                visited_at=ensure_utc(orm.visited_at),
            )

    @translate_db_errors
    async def count_between(self, start: datetime, end: datetime) -> int:
        # Stored datetimes come back naive; compare in naive UTC.
        start_naive = ensure_utc(start).replace(tzinfo=None)
        end_naive = ensure_utc(end).replace(tzinfo=None)
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count(VisitORM.id)).where(
                    VisitORM.visited_at >= start_naive,
                    VisitORM.visited_at < end_naive,
                )
            )
            return int(result.scalar_one())
