"""
LiteLLM provider implementation.

Talks to OpenRouter (or any LiteLLM-supported endpoint) and maps provider
failures onto ExternalServiceError kinds.
"""

import os
from typing import Any, Optional

import litellm

from app.core.config import get_settings
from app.core.exceptions import ExternalServiceError, ExternalServiceErrorKind
from app.core.logger import logger
from app.interfaces.llm_provider import ILLMProvider

QUOTA_MARKERS = ("quota", "credits")


def classify_llm_error(exc: Exception) -> ExternalServiceError:
    """Translate a LiteLLM / transport exception into ExternalServiceError."""
    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int):
        status_code = None
    text = str(exc).lower()

    if status_code == 429 or isinstance(exc, litellm.RateLimitError):
        if any(marker in text for marker in QUOTA_MARKERS):
            kind = ExternalServiceErrorKind.QUOTA_EXCEEDED
            message = "API quota exceeded. Please try again later or upgrade your plan."
        else:
            kind = ExternalServiceErrorKind.RATE_LIMITED
            message = "Too many requests to the AI service. Please try again later."
    elif status_code == 402 or any(marker in text for marker in QUOTA_MARKERS):
        kind = ExternalServiceErrorKind.QUOTA_EXCEEDED
        message = "API quota exceeded. Please try again later or upgrade your plan."
    elif status_code in (401, 403) or isinstance(
        exc, (litellm.AuthenticationError, litellm.PermissionDeniedError)
    ):
        kind = ExternalServiceErrorKind.AUTH_FAILED
        message = "The AI service rejected the configured credentials."
    elif (status_code is not None and status_code >= 500) or isinstance(
        exc,
        (
            litellm.Timeout,
            litellm.APIConnectionError,
            litellm.ServiceUnavailableError,
            litellm.InternalServerError,
            TimeoutError,
            ConnectionError,
        ),
    ):
        kind = ExternalServiceErrorKind.UPSTREAM_UNAVAILABLE
        message = "The AI service is unavailable right now. Please try again."
    else:
        kind = ExternalServiceErrorKind.GENERIC
        message = "AI response generation failed. Please try again."

    return ExternalServiceError(message, kind=kind, status_code=status_code)


class LiteLLMProvider(ILLMProvider):
    """LiteLLM provider with custom endpoint and attribution header support."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_base: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        """
        Initialize LiteLLM provider.

        Args:
            model_name: Default LiteLLM model identifier
                (e.g., "openrouter/meta-llama/llama-3.1-8b-instruct:free")
            api_base: Custom API endpoint URL (optional, for proxy servers)
            api_key: Custom API key (optional, overrides OPENROUTER_API_KEY)
        """
        self._settings = get_settings()
        self._model_name = model_name or self._settings.CHAT_MODEL
        self._api_base = api_base or self._settings.LLM_API_BASE or None
        self._api_key = api_key or self._settings.OPENROUTER_API_KEY or None
        self._timeout = self._settings.LLM_TIMEOUT_SECONDS

        # Enable debug logging if DEBUG is set
        if self._settings.DEBUG:
            os.environ["LITELLM_LOG"] = "DEBUG"

    def get_model_name(self) -> str:
        """Get human-readable model name."""
        if self._api_base:
            return f"LiteLLM ({self._model_name} @ {self._api_base})"
        return f"LiteLLM ({self._model_name})"

    def _build_kwargs(
        self,
        messages: list[dict[str, str]],
        model: Optional[str],
        max_tokens: Optional[int],
        temperature: Optional[float],
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": model or self._model_name,
            "messages": messages,
            "extra_headers": {
                "HTTP-Referer": self._settings.APP_REFERER,
                "X-Title": self._settings.APP_TITLE,
            },
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature
        if self._api_base:
            kwargs["api_base"] = self._api_base
        if self._api_key:
            kwargs["api_key"] = self._api_key
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        return kwargs

    async def complete(
        self,
        messages: list[dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        kwargs = self._build_kwargs(messages, model, max_tokens, temperature)
        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as exc:
            error = classify_llm_error(exc)
            logger.error(
                f"{self.get_model_name()} call to {kwargs['model']} failed ({error.kind.value}, "
                f"status={error.status_code}): {exc}"
            )
            raise error from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError):
            content = None
        return (content or "").strip()
