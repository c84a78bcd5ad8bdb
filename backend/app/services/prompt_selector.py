"""
System prompt selection per chat mode.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

from app.core.config import get_settings
from app.models.enums import ChatMode
from app.prompts.chat_prompts import (
    GENERAL_PROMPT,
    LEGACY_GENERAL_PROMPT,
    LEGACY_PORTFOLIO_PROMPT_TEMPLATE,
    LINK_ANCHOR_EXAMPLE,
    PORTFOLIO_PROMPT_TEMPLATE,
)

PromptBuilder = Callable[[Any, str], str]


def serialize_knowledge(knowledge: Any) -> str:
    """Pretty-print the knowledge document the way it is embedded in prompts."""
    return json.dumps(knowledge if knowledge is not None else {}, indent=2, ensure_ascii=False)


def _portfolio_prompt(knowledge: Any, owner_name: str) -> str:
    return PORTFOLIO_PROMPT_TEMPLATE.format(
        owner_name=owner_name,
        link_example=LINK_ANCHOR_EXAMPLE,
        knowledge_json=serialize_knowledge(knowledge),
    )


def _general_prompt(knowledge: Any, owner_name: str) -> str:
    return GENERAL_PROMPT


def _legacy_portfolio_prompt(knowledge: Any, owner_name: str) -> str:
    return LEGACY_PORTFOLIO_PROMPT_TEMPLATE.format(
        owner_name=owner_name,
        knowledge_json=serialize_knowledge(knowledge),
    )


def _legacy_general_prompt(knowledge: Any, owner_name: str) -> str:
    return LEGACY_GENERAL_PROMPT


_PROMPT_BUILDERS: dict[ChatMode, PromptBuilder] = {
    ChatMode.MOSHIUR: _portfolio_prompt,
    ChatMode.GENERAL: _general_prompt,
}

_LEGACY_PROMPT_BUILDERS: dict[ChatMode, PromptBuilder] = {
    ChatMode.MOSHIUR: _legacy_portfolio_prompt,
    ChatMode.GENERAL: _legacy_general_prompt,
}


def build_system_prompt(
    mode: ChatMode,
    knowledge: Any,
    owner_name: Optional[str] = None,
) -> str:
    """
    Build the system instruction for a chat mode.

    Args:
        mode: Chat mode
        knowledge: Parsed knowledge document (embedded only in portfolio mode)
        owner_name: Portfolio owner (defaults to OWNER_NAME)

    Returns:
        System prompt text
    """
    owner = owner_name or get_settings().OWNER_NAME
    return _PROMPT_BUILDERS[mode](knowledge, owner)


def build_legacy_prompt(
    mode: ChatMode,
    knowledge: Any,
    owner_name: Optional[str] = None,
) -> str:
    """System instruction for the one-shot /ai-answer assistant."""
    owner = owner_name or get_settings().OWNER_NAME
    return _LEGACY_PROMPT_BUILDERS[mode](knowledge, owner)
