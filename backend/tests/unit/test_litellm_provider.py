"""
Unit tests for the LiteLLM provider and its error classification.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.exceptions import ExternalServiceError, ExternalServiceErrorKind
from app.infrastructure.local.litellm_provider import LiteLLMProvider, classify_llm_error


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def provider():
    return LiteLLMProvider(
        model_name="openrouter/meta-llama/llama-3.1-8b-instruct:free",
        api_key="test-key",
    )


class TestClassifyError:
    @pytest.mark.parametrize(
        "exc,kind",
        [
            (_StatusError("Too many requests", 429), ExternalServiceErrorKind.RATE_LIMITED),
            (_StatusError("Payment required", 402), ExternalServiceErrorKind.QUOTA_EXCEEDED),
            (_StatusError("Insufficient credits", 400), ExternalServiceErrorKind.QUOTA_EXCEEDED),
            (_StatusError("You exceeded your quota", 429), ExternalServiceErrorKind.QUOTA_EXCEEDED),
            (_StatusError("Invalid key", 401), ExternalServiceErrorKind.AUTH_FAILED),
            (_StatusError("Forbidden", 403), ExternalServiceErrorKind.AUTH_FAILED),
            (_StatusError("Bad gateway", 502), ExternalServiceErrorKind.UPSTREAM_UNAVAILABLE),
            (TimeoutError("read timed out"), ExternalServiceErrorKind.UPSTREAM_UNAVAILABLE),
            (ConnectionError("refused"), ExternalServiceErrorKind.UPSTREAM_UNAVAILABLE),
            (_StatusError("Bad request", 400), ExternalServiceErrorKind.GENERIC),
            (ValueError("weird"), ExternalServiceErrorKind.GENERIC),
        ],
    )
    def test_maps_failure_kind(self, exc, kind):
        assert classify_llm_error(exc).kind == kind

    def test_keeps_status_code(self):
        error = classify_llm_error(_StatusError("Too many requests", 429))
        assert error.status_code == 429
        assert error.is_throttled


class TestComplete:
    @pytest.mark.asyncio
    async def test_returns_stripped_first_choice(self, provider):
        with patch(
            "app.infrastructure.local.litellm_provider.litellm.acompletion",
            new=AsyncMock(return_value=_response("  Hello there!  ")),
        ) as acompletion:
            reply = await provider.complete(
                [{"role": "user", "content": "hi"}], max_tokens=1000, temperature=0.7
            )

        assert reply == "Hello there!"
        kwargs = acompletion.call_args.kwargs
        assert kwargs["model"] == "openrouter/meta-llama/llama-3.1-8b-instruct:free"
        assert kwargs["api_key"] == "test-key"
        assert kwargs["max_tokens"] == 1000
        assert kwargs["temperature"] == 0.7
        assert set(kwargs["extra_headers"]) == {"HTTP-Referer", "X-Title"}

    @pytest.mark.asyncio
    async def test_model_override(self, provider):
        with patch(
            "app.infrastructure.local.litellm_provider.litellm.acompletion",
            new=AsyncMock(return_value=_response("ok")),
        ) as acompletion:
            await provider.complete([{"role": "user", "content": "hi"}], model="other-model")

        assert acompletion.call_args.kwargs["model"] == "other-model"
        assert "max_tokens" not in acompletion.call_args.kwargs

    @pytest.mark.asyncio
    async def test_missing_content_is_empty(self, provider):
        with patch(
            "app.infrastructure.local.litellm_provider.litellm.acompletion",
            new=AsyncMock(return_value=_response(None)),
        ):
            assert await provider.complete([{"role": "user", "content": "hi"}]) == ""

    @pytest.mark.asyncio
    async def test_failure_raises_external_service_error(self, provider):
        with patch(
            "app.infrastructure.local.litellm_provider.litellm.acompletion",
            new=AsyncMock(side_effect=_StatusError("Too many requests", 429)),
        ):
            with pytest.raises(ExternalServiceError) as exc_info:
                await provider.complete([{"role": "user", "content": "hi"}])

        assert exc_info.value.kind == ExternalServiceErrorKind.RATE_LIMITED

    @pytest.mark.asyncio
    async def test_failure_log_names_provider(self, provider):
        log = MagicMock()
        with patch(
            "app.infrastructure.local.litellm_provider.litellm.acompletion",
            new=AsyncMock(side_effect=_StatusError("Bad gateway", 502)),
        ), patch("app.infrastructure.local.litellm_provider.logger", log):
            with pytest.raises(ExternalServiceError):
                await provider.complete([{"role": "user", "content": "hi"}])

        (message,) = log.error.call_args.args
        assert message.startswith(provider.get_model_name())
        assert "upstream_unavailable" in message


class TestModelName:
    def test_includes_custom_api_base(self):
        provider = LiteLLMProvider(model_name="openrouter/x", api_base="http://proxy:4000")
        assert provider.get_model_name() == "LiteLLM (openrouter/x @ http://proxy:4000)"
