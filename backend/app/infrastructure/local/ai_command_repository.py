"""
SQLite implementation of AI command repository.
"""

from __future__ import annotations

from sqlalchemy import select

from app.infrastructure.local.database import AICommandORM, get_session_factory, translate_db_errors
from app.interfaces.ai_command_repository import IAICommandRepository
from app.models.ai_command import AICommand
from app.utils.datetime_utils import ensure_utc, now_utc


class SqliteAICommandRepository(IAICommandRepository):
    """SQLite implementation of AI command repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: AICommandORM) -> AICommand:
        return AICommand(
            id=orm.id,
            command=orm.command,
            response=orm.response,
            created_at=ensure_utc(orm.created_at),
        )

    @translate_db_errors
    async def add(self, command: str, response: str) -> AICommand:
        async with self._session_factory() as session:
            orm = AICommandORM(command=command, response=response, created_at=now_utc())
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    @translate_db_errors
    async def list(self) -> list[AICommand]:
        async with self._session_factory() as session:
            result = await session.execute(select(AICommandORM).order_by(AICommandORM.id.asc()))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    @translate_db_errors
    async def recent(self, limit: int) -> list[AICommand]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(AICommandORM).order_by(AICommandORM.id.desc()).limit(limit)
            )
            rows = [self._orm_to_model(orm) for orm in result.scalars().all()]
            rows.reverse()
            return rows
