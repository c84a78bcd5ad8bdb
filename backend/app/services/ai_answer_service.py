"""
One-shot assistant backed by the stored command history.

Each answer sees the mode prompt plus the last stored command/response pairs,
and the new pair is stored only after the model replied.
"""

from __future__ import annotations

from typing import Any, Optional

from app.core.config import get_settings
from app.core.exceptions import ValidationError
from app.interfaces.ai_command_repository import IAICommandRepository
from app.interfaces.llm_provider import ILLMProvider
from app.models.enums import ChatMode
from app.services.prompt_selector import build_legacy_prompt
from app.services.response_generator import EMPTY_REPLY_TEXT


class AIAnswerService:
    """Answers a single command using the shared command history as context."""

    def __init__(
        self,
        repo: IAICommandRepository,
        llm_provider: ILLMProvider,
        knowledge: Any = None,
        history_pairs: Optional[int] = None,
        model: Optional[str] = None,
    ):
        settings = get_settings()
        self._repo = repo
        self._llm = llm_provider
        self._knowledge = knowledge if knowledge is not None else {}
        self._history_pairs = history_pairs or settings.HISTORY_WINDOW
        self._model = model or settings.CHAT_MODEL

    async def answer(self, command: Optional[str], mode: Optional[str]) -> str:
        if not command or not command.strip() or not mode:
            raise ValidationError("Command and mode required")
        try:
            chat_mode = ChatMode(mode)
        except ValueError:
            raise ValidationError(f"Invalid mode: {mode}") from None

        messages = [{"role": "system", "content": build_legacy_prompt(chat_mode, self._knowledge)}]
        for item in await self._repo.recent(self._history_pairs):
            messages.append({"role": "user", "content": item.command})
            messages.append({"role": "assistant", "content": item.response})
        messages.append({"role": "user", "content": command})

        answer = await self._llm.complete(messages, model=self._model) or EMPTY_REPLY_TEXT
        await self._repo.add(command, answer)
        return answer
