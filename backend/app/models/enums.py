"""
Enum definitions for the application.

These enums are used across models and provide type-safe mode/role values.
"""

from enum import Enum


class ChatMode(str, Enum):
    """
    Assistant persona for a chat message.

    MOSHIUR = Portfolio assistant, answers only from the knowledge document
    GENERAL = General-purpose friendly assistant
    """

    MOSHIUR = "moshiur"
    GENERAL = "general"


class MessageSender(str, Enum):
    """Who wrote a chat message."""

    USER = "user"
    ASSISTANT = "assistant"

    @property
    def llm_role(self) -> str:
        """Role name expected by chat-completion APIs."""
        return "user" if self is MessageSender.USER else "assistant"
