"""
Unit tests for assistant reply generation and the general-mode fallback.
"""

from datetime import datetime

import pytest

from app.core.exceptions import ExternalServiceError, ExternalServiceErrorKind
from app.models.chat_session import ChatMessage
from app.models.enums import ChatMode, MessageSender
from app.services.response_generator import (
    EMPTY_REPLY_TEXT,
    ResponseGenerator,
    is_unhelpful_reply,
)
from app.utils.datetime_utils import UTC

KNOWLEDGE = {"name": "Moshiur Rahman", "skills": ["React", "Node.js"]}


def _msg(sender: MessageSender, text: str) -> ChatMessage:
    return ChatMessage(sender=sender, text=text, timestamp=datetime(2024, 1, 1, tzinfo=UTC))


def _history(pairs: int, question: str = "What are your skills?") -> list[ChatMessage]:
    history = []
    for i in range(pairs):
        history.append(_msg(MessageSender.USER, f"question {i}"))
        history.append(_msg(MessageSender.ASSISTANT, f"answer {i}"))
    history.append(_msg(MessageSender.USER, question))
    return history


@pytest.fixture
def generator(llm_provider):
    return ResponseGenerator(
        llm_provider,
        knowledge=KNOWLEDGE,
        history_window=10,
        chat_model="chat-model",
        fallback_model="fallback-model",
        max_tokens=1000,
        temperature=0.7,
    )


class TestUnhelpfulHeuristic:
    @pytest.mark.parametrize(
        "reply",
        [
            "That information is not available in my data.",
            "I cannot answer that from the portfolio.",
            "Sorry, that is NOT IN THE JSON provided.",
            "I don't have details about that topic.",
            "Short",
            "   ",
        ],
    )
    def test_flags_unhelpful_replies(self, reply):
        assert is_unhelpful_reply(reply)

    def test_accepts_substantive_reply(self):
        assert not is_unhelpful_reply("Moshiur works with React and Node.js every day.")


class TestGenerateReply:
    @pytest.mark.asyncio
    async def test_sends_system_prompt_then_history(self, generator, llm_provider):
        llm_provider.queue("Moshiur works with React and Node.js.")

        reply = await generator.generate_reply(_history(0), ChatMode.MOSHIUR)

        assert reply == "Moshiur works with React and Node.js."
        call = llm_provider.calls[0]
        assert call["model"] == "chat-model"
        assert call["max_tokens"] == 1000
        assert call["temperature"] == 0.7
        assert call["messages"][0]["role"] == "system"
        assert '"Moshiur Rahman"' in call["messages"][0]["content"]
        assert call["messages"][1:] == [{"role": "user", "content": "What are your skills?"}]

    @pytest.mark.asyncio
    async def test_trims_history_to_window(self, generator, llm_provider):
        llm_provider.queue("A perfectly helpful general answer.")

        await generator.generate_reply(_history(7), ChatMode.GENERAL)

        sent = llm_provider.calls[0]["messages"]
        assert len(sent) == 1 + 10
        assert sent[-1] == {"role": "user", "content": "What are your skills?"}
        assert sent[1] == {"role": "assistant", "content": "answer 2"}

    @pytest.mark.asyncio
    async def test_unhelpful_portfolio_reply_falls_back_to_general(self, generator, llm_provider):
        llm_provider.queue(
            "Sorry, that information is not available.",
            "Here is a general answer that is long enough.",
        )

        reply = await generator.generate_reply(_history(1), ChatMode.MOSHIUR)

        assert reply == "Here is a general answer that is long enough."
        assert len(llm_provider.calls) == 2
        fallback = llm_provider.calls[1]
        assert fallback["model"] == "fallback-model"
        assert "You are Gemini" in fallback["messages"][0]["content"]
        assert fallback["messages"][1:] == llm_provider.calls[0]["messages"][1:]

    @pytest.mark.asyncio
    async def test_short_fallback_keeps_original(self, generator, llm_provider):
        llm_provider.queue("I cannot answer that.", "Too short")

        reply = await generator.generate_reply(_history(0), ChatMode.MOSHIUR)

        assert reply == "I cannot answer that."

    @pytest.mark.asyncio
    async def test_failed_fallback_keeps_original(self, generator, llm_provider):
        llm_provider.queue(
            "This is not available in the data.",
            ExternalServiceError("down", kind=ExternalServiceErrorKind.UPSTREAM_UNAVAILABLE),
        )

        reply = await generator.generate_reply(_history(0), ChatMode.MOSHIUR)

        assert reply == "This is not available in the data."

    @pytest.mark.asyncio
    async def test_general_mode_never_falls_back(self, generator, llm_provider):
        llm_provider.queue("not available")

        reply = await generator.generate_reply(_history(0), ChatMode.GENERAL)

        assert reply == "not available"
        assert len(llm_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_empty_reply_becomes_apology(self, generator, llm_provider):
        llm_provider.queue("", "")

        reply = await generator.generate_reply(_history(0), ChatMode.MOSHIUR)

        assert reply == EMPTY_REPLY_TEXT

    @pytest.mark.asyncio
    async def test_primary_failure_propagates(self, generator, llm_provider):
        llm_provider.queue(
            ExternalServiceError("slow down", kind=ExternalServiceErrorKind.RATE_LIMITED)
        )

        with pytest.raises(ExternalServiceError) as exc_info:
            await generator.generate_reply(_history(0), ChatMode.MOSHIUR)

        assert exc_info.value.kind == ExternalServiceErrorKind.RATE_LIMITED
