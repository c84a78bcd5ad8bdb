"""
Unit tests for the one-shot assistant service.
"""

from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import ExternalServiceError, ExternalServiceErrorKind, ValidationError
from app.infrastructure.local.ai_command_repository import SqliteAICommandRepository
from app.services.ai_answer_service import AIAnswerService


@pytest.fixture
def repo(session_factory):
    return SqliteAICommandRepository(session_factory=session_factory)


@pytest.fixture
def service(repo, llm_provider):
    return AIAnswerService(
        repo=repo,
        llm_provider=llm_provider,
        knowledge={"name": "Moshiur Rahman"},
        history_pairs=10,
        model="answer-model",
    )


class TestAnswer:
    @pytest.mark.asyncio
    async def test_answer_is_stored(self, service, repo, llm_provider):
        llm_provider.queue("Moshiur is a web developer.")

        answer = await service.answer("Who is Moshiur?", "moshiur")

        assert answer == "Moshiur is a web developer."
        history = await repo.list()
        assert [(h.command, h.response) for h in history] == [
            ("Who is Moshiur?", "Moshiur is a web developer.")
        ]
        assert llm_provider.calls[0]["model"] == "answer-model"

    @pytest.mark.asyncio
    async def test_last_ten_pairs_are_context(self, service, repo, llm_provider):
        for i in range(12):
            await repo.add(f"q{i}", f"a{i}")

        await service.answer("latest", "general")

        sent = llm_provider.calls[0]["messages"]
        assert sent[0]["role"] == "system"
        assert len(sent) == 1 + 20 + 1
        assert sent[1] == {"role": "user", "content": "q2"}
        assert sent[2] == {"role": "assistant", "content": "a2"}
        assert sent[-1] == {"role": "user", "content": "latest"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("command,mode", [("", "general"), ("hi", None), ("hi", "pirate")])
    async def test_invalid_input(self, service, command, mode):
        with pytest.raises(ValidationError):
            await service.answer(command, mode)

    @pytest.mark.asyncio
    async def test_failure_stores_nothing(self, repo):
        llm = AsyncMock()
        llm.complete.side_effect = ExternalServiceError(
            "quota", kind=ExternalServiceErrorKind.QUOTA_EXCEEDED
        )
        service = AIAnswerService(repo=repo, llm_provider=llm)

        with pytest.raises(ExternalServiceError):
            await service.answer("hello", "general")

        assert await repo.list() == []
