"""
SQLite implementation of Chat session repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, delete, func, or_, select

from app.infrastructure.local.database import (
    ChatMessageORM,
    ChatSessionORM,
    get_session_factory,
    translate_db_errors,
)
from app.interfaces.chat_session_repository import IChatSessionRepository
from app.models.chat_session import ChatMessage, ChatSession, ChatSessionSummary
from app.models.enums import ChatMode, MessageSender
from app.utils.datetime_utils import ensure_utc


class SqliteChatSessionRepository(IChatSessionRepository):
    """SQLite implementation of chat session repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _message_orm_to_model(self, orm: ChatMessageORM) -> ChatMessage:
        """Convert message ORM object to Pydantic model."""
        return ChatMessage(
            sender=MessageSender(orm.sender),
            text=orm.text,
            timestamp=ensure_utc(orm.created_at),
        )

    def _session_orm_to_model(
        self,
        orm: ChatSessionORM,
        messages: list[ChatMessageORM],
    ) -> ChatSession:
        """Convert session ORM object (plus its messages) to Pydantic model."""
        return ChatSession(
            id=orm.id,
            title=orm.title,
            mode=ChatMode(orm.mode),
            messages=[self._message_orm_to_model(m) for m in messages],
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            last_accessed_at=ensure_utc(orm.last_accessed_at),
        )

    def _summary(self, orm: ChatSessionORM, message_count: int) -> ChatSessionSummary:
        return ChatSessionSummary(
            id=orm.id,
            title=orm.title,
            mode=ChatMode(orm.mode),
            message_count=message_count,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            last_accessed_at=ensure_utc(orm.last_accessed_at),
        )

    def _message_orm(self, session_id: str, message: ChatMessage) -> ChatMessageORM:
        return ChatMessageORM(
            session_id=session_id,
            sender=message.sender.value,
            text=message.text,
            created_at=message.timestamp,
        )

    def _search_clause(self, search: Optional[str]):
        """Case-insensitive match on title or any message text."""
        if not search:
            return None
        needle = search.casefold()
        matching_sessions = select(ChatMessageORM.session_id).where(
            func.casefold(ChatMessageORM.text, type_=String).contains(needle, autoescape=True)
        )
        return or_(
            func.casefold(ChatSessionORM.title, type_=String).contains(needle, autoescape=True),
            ChatSessionORM.id.in_(matching_sessions),
        )

    @translate_db_errors
    async def create(self, session: ChatSession) -> ChatSession:
        """Insert a new session together with its initial messages."""
        async with self._session_factory() as db:
            db.add(
                ChatSessionORM(
                    id=session.id,
                    title=session.title,
                    mode=session.mode.value,
                    created_at=session.created_at,
                    updated_at=session.updated_at,
                    last_accessed_at=session.last_accessed_at,
                )
            )
            # Flush the parent row first so the FK is satisfied.
            await db.flush()
            db.add_all([self._message_orm(session.id, m) for m in session.messages])
            await db.commit()
            return session

    @translate_db_errors
    async def get(self, session_id: str) -> Optional[ChatSession]:
        """Get a session with all of its messages."""
        async with self._session_factory() as db:
            orm = await db.get(ChatSessionORM, session_id)
            if not orm:
                return None
            result = await db.execute(
                select(ChatMessageORM)
                .where(ChatMessageORM.session_id == session_id)
                .order_by(ChatMessageORM.id.asc())
            )
            return self._session_orm_to_model(orm, list(result.scalars().all()))

    @translate_db_errors
    async def list(
        self,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ChatSessionSummary]:
        """List sessions newest-first."""
        async with self._session_factory() as db:
            counts = (
                select(
                    ChatMessageORM.session_id,
                    func.count(ChatMessageORM.id).label("message_count"),
                )
                .group_by(ChatMessageORM.session_id)
                .subquery()
            )
            query = select(
                ChatSessionORM,
                func.coalesce(counts.c.message_count, 0),
            ).outerjoin(counts, counts.c.session_id == ChatSessionORM.id)

            clause = self._search_clause(search)
            if clause is not None:
                query = query.where(clause)

            query = (
                query.order_by(ChatSessionORM.created_at.desc(), ChatSessionORM.id.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await db.execute(query)
            return [self._summary(orm, count) for orm, count in result.all()]

    @translate_db_errors
    async def count(self, search: Optional[str] = None) -> int:
        """Count sessions matching the list filter."""
        async with self._session_factory() as db:
            query = select(func.count(ChatSessionORM.id))
            clause = self._search_clause(search)
            if clause is not None:
                query = query.where(clause)
            result = await db.execute(query)
            return int(result.scalar_one())

    @translate_db_errors
    async def append_messages(
        self,
        session_id: str,
        messages: list[ChatMessage],
        mode: ChatMode,
        updated_at: datetime,
    ) -> bool:
        """Append messages and set mode/updated_at in one transaction."""
        async with self._session_factory() as db:
            orm = await db.get(ChatSessionORM, session_id)
            if not orm:
                return False
            orm.mode = mode.value
            orm.updated_at = updated_at
            db.add_all([self._message_orm(session_id, m) for m in messages])
            await db.commit()
            return True

    @translate_db_errors
    async def touch(self, session_id: str, accessed_at: datetime) -> bool:
        """Set last_accessed_at."""
        async with self._session_factory() as db:
            orm = await db.get(ChatSessionORM, session_id)
            if not orm:
                return False
            orm.last_accessed_at = accessed_at
            await db.commit()
            return True

    @translate_db_errors
    async def delete(self, session_id: str) -> bool:
        """Delete a session and its messages."""
        deleted = await self.delete_many([session_id])
        return bool(deleted)

    @translate_db_errors
    async def delete_many(self, session_ids: list[str]) -> list[str]:
        """Delete several sessions; returns the IDs that existed."""
        if not session_ids:
            return []
        async with self._session_factory() as db:
            result = await db.execute(
                select(ChatSessionORM.id).where(ChatSessionORM.id.in_(session_ids))
            )
            existing = set(result.scalars().all())
            if not existing:
                return []
            # SQLite does not enforce ON DELETE CASCADE without a pragma.
            await db.execute(
                delete(ChatMessageORM).where(ChatMessageORM.session_id.in_(list(existing)))
            )
            await db.execute(delete(ChatSessionORM).where(ChatSessionORM.id.in_(list(existing))))
            await db.commit()
            return [sid for sid in session_ids if sid in existing]
