"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from functools import lru_cache, wraps
from uuid import uuid4

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    event,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import get_settings
from app.core.exceptions import PersistenceError
from app.core.logger import logger
from app.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class ChatSessionORM(Base):
    """Chat session ORM model."""

    __tablename__ = "chat_sessions"

    id = Column(String(36), primary_key=True)
    title = Column(String(200), nullable=False)
    mode = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)
    last_accessed_at = Column(DateTime, nullable=False)


class ChatMessageORM(Base):
    """Chat message ORM model. Autoincrement id preserves insertion order."""

    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        String(36),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender = Column(String(20), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False)


class BlogORM(Base):
    """Blog post ORM model."""

    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(200), default="Anonymous")
    tags = Column(JSON, nullable=True, default=list)
    thumbnail = Column(String(1000), default="")
    category = Column(String(200), default="")
    created_at = Column(DateTime, default=now_utc, index=True)
    updated_at = Column(DateTime, nullable=True)


class TagORM(Base):
    """Tag ORM model."""

    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime, default=now_utc)


class CategoryORM(Base):
    """Category ORM model."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime, default=now_utc)


class CommentORM(Base):
    """Blog comment ORM model."""

    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    blog_id = Column(String(36), nullable=False, index=True)
    username = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=now_utc, index=True)


class CommentLikeORM(Base):
    """Comment like ORM model (one row per user per comment)."""

    __tablename__ = "comment_likes"
    __table_args__ = (UniqueConstraint("comment_id", "user_id"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    comment_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=now_utc)


class LoveORM(Base):
    """Blog love reaction ORM model (one row per user per blog)."""

    __tablename__ = "loves"
    __table_args__ = (UniqueConstraint("blog_id", "user_id"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    blog_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=now_utc)


class ReviewORM(Base):
    """Client review ORM model."""

    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    rating = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)
    image = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=now_utc)


class VisitORM(Base):
    """Site visit ORM model."""

    __tablename__ = "visits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    ip = Column(String(64), nullable=True)
    user_agent = Column(String(1000), nullable=True)
    visited_at = Column(DateTime, default=now_utc, index=True)


class AICommandORM(Base):
    """Stored command/response pair of the legacy assistant."""

    __tablename__ = "ai_commands"

    id = Column(Integer, primary_key=True, autoincrement=True)
    command = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    created_at = Column(DateTime, default=now_utc, index=True)


# ===========================================
# Engine / Session
# ===========================================


def _casefold(value):
    return value.casefold() if value is not None else None


def register_sqlite_functions(engine: AsyncEngine) -> AsyncEngine:
    """
    Install a Unicode-aware `casefold` SQL function on every new connection.

    SQLite's built-in lower() only folds ASCII letters.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("casefold", 1, _casefold)

    return engine


@lru_cache()
def get_engine() -> AsyncEngine:
    """Get the process-wide async engine instance."""
    settings = get_settings()
    return register_sqlite_functions(
        create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    )


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    """Close pooled connections on shutdown."""
    engine = get_engine()
    await engine.dispose()
    get_engine.cache_clear()


def translate_db_errors(func):
    """Re-raise SQLAlchemy failures from a repository method as PersistenceError."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error(f"Database operation {func.__name__} failed: {exc}")
            raise PersistenceError(f"Database operation failed: {func.__name__}") from exc

    return wrapper
