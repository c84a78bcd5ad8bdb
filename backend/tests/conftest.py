"""
Shared test fixtures.

Repositories get an isolated in-memory SQLite database per test; services get
a scripted LLM provider instead of a network client.
"""

from datetime import datetime, timedelta
from typing import Optional, Union

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.infrastructure.local.database import Base, register_sqlite_functions
from app.interfaces.llm_provider import ILLMProvider
from app.utils.datetime_utils import UTC


class ScriptedLLMProvider(ILLMProvider):
    """
    LLM provider that replays queued replies.

    Each queued item is either reply text or an exception to raise. When the
    queue is empty, `default` is returned. Every call is recorded.
    """

    def __init__(self, *replies: Union[str, Exception], default: str = "Scripted reply text"):
        self._replies = list(replies)
        self.default = default
        self.calls: list[dict] = []

    def queue(self, *replies: Union[str, Exception]) -> None:
        self._replies.extend(replies)

    async def complete(
        self,
        messages: list[dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        self.calls.append(
            {
                "messages": messages,
                "model": model,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if not self._replies:
            return self.default
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def get_model_name(self) -> str:
        return "scripted"


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: Optional[datetime] = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2024, 5, 17, 9, 30, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest_asyncio.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    register_sqlite_functions(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def llm_provider():
    return ScriptedLLMProvider()


@pytest.fixture
def clock():
    return FakeClock()
