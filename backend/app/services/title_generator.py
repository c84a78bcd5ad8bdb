"""
Best-effort conversation titles.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from app.core.config import get_settings
from app.core.exceptions import ExternalServiceError
from app.core.logger import logger
from app.interfaces.llm_provider import ILLMProvider
from app.prompts.chat_prompts import TITLE_PROMPT
from app.utils.datetime_utils import now_utc

UNTITLED = "Untitled Chat"
MAX_TITLE_LENGTH = 50
_STRIP_CHARS = str.maketrans("", "", "\"'.")


def clean_title(raw: str) -> str:
    """Strip quotes and periods, default empty titles, and cap the length."""
    title = raw.translate(_STRIP_CHARS).strip()
    if not title:
        return UNTITLED
    if len(title) > MAX_TITLE_LENGTH:
        return title[: MAX_TITLE_LENGTH - 3] + "..."
    return title


class TitleGenerator:
    """Summarizes the first user message into a short label. Never raises."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        clock: Callable[[], datetime] = now_utc,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        settings = get_settings()
        self._llm = llm_provider
        self._clock = clock
        self._model = model or settings.TITLE_MODEL
        self._max_tokens = max_tokens or settings.TITLE_MAX_TOKENS
        self._temperature = temperature if temperature is not None else settings.TITLE_TEMPERATURE

    def fallback_title(self) -> str:
        """Deterministic title used whenever generation fails."""
        return f"Chat {self._clock().date().isoformat()}"

    async def generate_title(self, first_user_message: str) -> str:
        messages = [
            {"role": "system", "content": TITLE_PROMPT},
            {"role": "user", "content": f'Create a title for: "{first_user_message}"'},
        ]
        try:
            raw = await self._llm.complete(
                messages,
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except ExternalServiceError as exc:
            logger.warning(f"Title generation failed ({exc.kind.value}); using fallback title")
            return self.fallback_title()
        except Exception as exc:
            logger.warning(f"Title generation failed unexpectedly: {exc}")
            return self.fallback_title()
        return clean_title(raw or "")
