"""
Chat API endpoints.

Conversations with the portfolio assistant: create, continue, read, list and
delete chat sessions.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import ChatService
from app.models.chat_session import (
    BulkDeleteRequest,
    BulkDeleteResult,
    ChatAnswer,
    ChatMessageRequest,
    ChatSession,
    ChatSessionPage,
)

router = APIRouter()


@router.get("", response_model=ChatSessionPage)
async def list_chats(
    service: ChatService,
    limit: int = Query(50, ge=1, le=100),
    skip: int = Query(0, ge=0),
    search: Optional[str] = Query(None, description="Match title or message text"),
):
    """List chat sessions, newest first."""
    return await service.list(search=search, limit=limit, skip=skip)


@router.post("", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def create_chat(request: ChatMessageRequest, service: ChatService):
    """Start a new chat from its first message."""
    return await service.create(request.message, request.mode)


@router.get("/{chat_id}", response_model=ChatSession)
async def get_chat(chat_id: str, service: ChatService):
    """Get a chat with all of its messages."""
    return await service.get(chat_id)


@router.post("/{chat_id}/messages", response_model=ChatAnswer)
async def add_message(chat_id: str, request: ChatMessageRequest, service: ChatService):
    """Send a message to an existing chat."""
    return await service.append(chat_id, request.message, request.mode)


@router.delete("/{chat_id}")
async def delete_chat(chat_id: str, service: ChatService):
    """Delete a chat."""
    await service.delete(chat_id)
    return {"message": "Chat deleted successfully"}


@router.delete("", response_model=BulkDeleteResult)
async def delete_chats(request: BulkDeleteRequest, service: ChatService):
    """Delete several chats at once."""
    return await service.bulk_delete(request.chat_ids)
