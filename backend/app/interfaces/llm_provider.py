"""
LLM provider interface.

Defines the contract for chat-completion access.
Implementations: LiteLLM (OpenRouter and any other LiteLLM-supported backend)
"""

from abc import ABC, abstractmethod
from typing import Optional


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Run one chat completion.

        Args:
            messages: OpenAI-style messages ({"role": ..., "content": ...}),
                system prompt first
            model: Model identifier (None = provider default)
            max_tokens: Completion token cap
            temperature: Sampling temperature

        Returns:
            Text of the first choice, stripped (may be empty)

        Raises:
            ExternalServiceError: The call failed; kind tells why
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass
