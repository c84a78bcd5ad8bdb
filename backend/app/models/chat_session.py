"""
Chat session and message models.

A session owns an ordered, append-only message list. Messages are always
written in user/assistant pairs.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ChatMode, MessageSender


class ChatMessage(BaseModel):
    """One message inside a chat session."""

    sender: MessageSender
    text: str = Field(..., description="Message text")
    timestamp: datetime


class ChatSession(BaseModel):
    """Chat session with its full message history."""

    id: str = Field(..., description="Chat session ID")
    title: str = Field(..., max_length=200, description="Session title")
    mode: ChatMode = Field(..., description="Mode of the most recent message")
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    last_accessed_at: datetime


class ChatSessionSummary(BaseModel):
    """Session row for list views (no messages)."""

    id: str
    title: str
    mode: ChatMode
    message_count: int = 0
    created_at: datetime
    updated_at: datetime
    last_accessed_at: datetime


class ChatSessionPage(BaseModel):
    """Paginated session list."""

    items: list[ChatSessionSummary]
    total: int
    limit: int
    skip: int


# ===========================================
# API payloads
# ===========================================


class ChatMessageRequest(BaseModel):
    """
    Body of POST /chats and POST /chats/{id}/messages.

    Both fields are checked by the service so that missing or oversized
    input is reported as a 400 with a readable message.
    """

    message: Optional[str] = Field(None, description="User message (max 1000 chars)")
    mode: Optional[str] = Field(None, description="moshiur | general")


class ChatAnswer(BaseModel):
    """Result of appending a message to an existing session."""

    answer: str
    session_id: str
    messages: list[ChatMessage] = Field(..., description="The stored user/assistant pair")


class BulkDeleteRequest(BaseModel):
    """Body of DELETE /chats."""

    model_config = ConfigDict(populate_by_name=True)

    chat_ids: list[str] = Field(default_factory=list, alias="chatIds")


class BulkDeleteResult(BaseModel):
    """Per-id outcome of a bulk delete."""

    deleted_count: int
    deleted_ids: list[str] = Field(default_factory=list)
    invalid_ids: list[str] = Field(default_factory=list)
    not_found_ids: list[str] = Field(default_factory=list)
