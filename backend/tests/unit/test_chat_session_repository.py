"""
Unit tests for the chat session repositories.

Every test runs against both the SQLite and the in-memory implementation.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from app.infrastructure.local.chat_session_repository import SqliteChatSessionRepository
from app.infrastructure.local.in_memory_chat_session_repository import (
    InMemoryChatSessionRepository,
)
from app.models.chat_session import ChatMessage, ChatSession
from app.models.enums import ChatMode, MessageSender
from app.utils.datetime_utils import UTC

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(params=["sqlite", "memory"])
def repository(request, session_factory):
    if request.param == "sqlite":
        return SqliteChatSessionRepository(session_factory=session_factory)
    return InMemoryChatSessionRepository()


def _session(
    index: int,
    title: str = "Chat",
    user_text: str = "hello",
    reply: str = "Hi! How can I help?",
) -> ChatSession:
    created = BASE_TIME + timedelta(minutes=index)
    return ChatSession(
        id=str(uuid4()),
        title=title,
        mode=ChatMode.MOSHIUR,
        messages=[
            ChatMessage(sender=MessageSender.USER, text=user_text, timestamp=created),
            ChatMessage(sender=MessageSender.ASSISTANT, text=reply, timestamp=created),
        ],
        created_at=created,
        updated_at=created,
        last_accessed_at=created,
    )


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_round_trips_messages_in_order(self, repository):
        session = _session(0, user_text="first", reply="second")
        await repository.create(session)

        stored = await repository.get(session.id)

        assert stored.id == session.id
        assert [m.text for m in stored.messages] == ["first", "second"]
        assert stored.created_at == BASE_TIME
        assert stored.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repository):
        assert await repository.get(str(uuid4())) is None


class TestAppendAndTouch:
    @pytest.mark.asyncio
    async def test_append_adds_pair_and_sets_mode(self, repository):
        session = _session(0)
        await repository.create(session)
        later = BASE_TIME + timedelta(hours=1)
        pair = [
            ChatMessage(sender=MessageSender.USER, text="more", timestamp=later),
            ChatMessage(sender=MessageSender.ASSISTANT, text="sure", timestamp=later),
        ]

        assert await repository.append_messages(session.id, pair, ChatMode.GENERAL, later)

        stored = await repository.get(session.id)
        assert [m.text for m in stored.messages][-2:] == ["more", "sure"]
        assert len(stored.messages) == 4
        assert stored.mode == ChatMode.GENERAL
        assert stored.updated_at == later

    @pytest.mark.asyncio
    async def test_append_to_missing_session(self, repository):
        assert not await repository.append_messages(str(uuid4()), [], ChatMode.GENERAL, BASE_TIME)

    @pytest.mark.asyncio
    async def test_touch_sets_last_accessed(self, repository):
        session = _session(0)
        await repository.create(session)
        later = BASE_TIME + timedelta(days=2)

        assert await repository.touch(session.id, later)

        assert (await repository.get(session.id)).last_accessed_at == later


class TestList:
    @pytest.mark.asyncio
    async def test_pagination_is_disjoint_newest_first(self, repository):
        sessions = [_session(i) for i in range(25)]
        for s in sessions:
            await repository.create(s)
        expected = [s.id for s in reversed(sessions)][:20]

        first = await repository.list(limit=10, offset=0)
        second = await repository.list(limit=10, offset=10)

        assert [s.id for s in first] + [s.id for s in second] == expected
        assert await repository.count() == 25

    @pytest.mark.asyncio
    async def test_summary_carries_message_count(self, repository):
        await repository.create(_session(0))

        (summary,) = await repository.list()

        assert summary.message_count == 2

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive_on_title_and_text(self, repository):
        await repository.create(_session(0, title="React Projects"))
        await repository.create(_session(1, title="Misc", reply="I enjoy HIKING trips"))
        await repository.create(_session(2, title="Other"))

        assert [s.title for s in await repository.list(search="react")] == ["React Projects"]
        assert [s.title for s in await repository.list(search="hiking")] == ["Misc"]
        assert await repository.count(search="hiking") == 1

    @pytest.mark.asyncio
    async def test_search_folds_non_ascii_case(self, repository):
        await repository.create(_session(0, title="Études Überblick"))
        await repository.create(_session(1, title="Misc", reply="Ich wohne in der HAUPTSTRASSE"))
        await repository.create(_session(2, title="Other"))

        assert [s.title for s in await repository.list(search="études")] == ["Études Überblick"]
        assert await repository.count(search="ÜBERBLICK") == 1
        assert [s.title for s in await repository.list(search="hauptstraße")] == ["Misc"]
        assert await repository.count(search="ÉTUDES") == 1

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, repository):
        await repository.create(_session(0, title="100% done"))
        await repository.create(_session(1, title="1000 things"))

        assert [s.title for s in await repository.list(search="100%")] == ["100% done"]


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_session_and_messages(self, repository):
        session = _session(0)
        await repository.create(session)

        assert await repository.delete(session.id)

        assert await repository.get(session.id) is None
        assert await repository.count() == 0

    @pytest.mark.asyncio
    async def test_delete_missing(self, repository):
        await repository.create(_session(0))

        assert not await repository.delete(str(uuid4()))
        assert await repository.count() == 1

    @pytest.mark.asyncio
    async def test_delete_many_returns_existing_ids(self, repository):
        a, b = _session(0), _session(1)
        await repository.create(a)
        await repository.create(b)
        missing = str(uuid4())

        deleted = await repository.delete_many([b.id, missing, a.id])

        assert deleted == [b.id, a.id]
        assert await repository.count() == 0
