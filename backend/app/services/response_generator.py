"""
Assistant reply generation.

Builds the chat-completion request from the mode prompt plus a trimmed
history window, and retries once in general mode when a portfolio-mode
answer looks unhelpful.
"""

from __future__ import annotations

from typing import Any, Optional

from app.core.config import get_settings
from app.core.exceptions import ExternalServiceError
from app.core.logger import logger
from app.interfaces.llm_provider import ILLMProvider
from app.models.chat_session import ChatMessage
from app.models.enums import ChatMode
from app.services.prompt_selector import build_system_prompt

# Lower-cased phrases that mark a portfolio-mode reply as a non-answer
UNHELPFUL_PHRASES = (
    "not available",
    "cannot answer",
    "not in the json",
    "not in the data",
    "don't have",
    "unavailable",
)
MIN_USEFUL_REPLY_LENGTH = 10

EMPTY_REPLY_TEXT = "I'm sorry, I couldn't generate a response at the moment. Please try again."


def is_unhelpful_reply(reply: str) -> bool:
    """True when a portfolio-mode reply should be retried in general mode."""
    text = reply.strip()
    if len(text) < MIN_USEFUL_REPLY_LENGTH:
        return True
    lowered = text.lower()
    return any(phrase in lowered for phrase in UNHELPFUL_PHRASES)


def history_to_llm_messages(history: list[ChatMessage]) -> list[dict[str, str]]:
    """Map stored messages to chat-completion roles."""
    return [{"role": m.sender.llm_role, "content": m.text} for m in history]


class ResponseGenerator:
    """Generates assistant replies through an LLM provider."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        knowledge: Any = None,
        history_window: Optional[int] = None,
        chat_model: Optional[str] = None,
        fallback_model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        settings = get_settings()
        self._llm = llm_provider
        self._knowledge = knowledge if knowledge is not None else {}
        self._history_window = history_window or settings.HISTORY_WINDOW
        self._chat_model = chat_model or settings.CHAT_MODEL
        self._fallback_model = fallback_model or settings.FALLBACK_MODEL
        self._max_tokens = max_tokens or settings.CHAT_MAX_TOKENS
        self._temperature = temperature if temperature is not None else settings.CHAT_TEMPERATURE

    def _messages(self, mode: ChatMode, history: list[ChatMessage]) -> list[dict[str, str]]:
        system_prompt = build_system_prompt(mode, self._knowledge)
        return [{"role": "system", "content": system_prompt}, *history_to_llm_messages(history)]

    async def generate_reply(self, history: list[ChatMessage], mode: ChatMode) -> str:
        """
        Generate the assistant reply for the last user message in history.

        Args:
            history: Conversation so far, newest user message last
            mode: Chat mode of the newest message

        Returns:
            Reply text (never empty)

        Raises:
            ExternalServiceError: The primary call failed
        """
        window = history[-self._history_window :]

        reply = await self._llm.complete(
            self._messages(mode, window),
            model=self._chat_model,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )

        if mode == ChatMode.MOSHIUR and is_unhelpful_reply(reply):
            logger.info("Portfolio-mode reply looked unhelpful, retrying in general mode")
            reply = await self._fallback(window, reply)

        return reply or EMPTY_REPLY_TEXT

    async def _fallback(self, window: list[ChatMessage], original: str) -> str:
        try:
            fallback = await self._llm.complete(
                self._messages(ChatMode.GENERAL, window),
                model=self._fallback_model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except ExternalServiceError as exc:
            logger.warning(f"General-mode fallback failed ({exc.kind.value}); keeping original reply")
            return original

        if fallback and len(fallback.strip()) > MIN_USEFUL_REPLY_LENGTH:
            return fallback
        return original
