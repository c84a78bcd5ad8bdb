"""
Chat session service.

Orchestrates the conversation lifecycle: validation, reply and title
generation, and persistence through the session repository. Every write adds
exactly one user message and one assistant message; nothing is stored when
generation fails.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from app.core.config import get_settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import logger
from app.interfaces.chat_session_repository import IChatSessionRepository
from app.models.chat_session import (
    BulkDeleteResult,
    ChatAnswer,
    ChatMessage,
    ChatSession,
    ChatSessionPage,
)
from app.models.enums import ChatMode, MessageSender
from app.services.response_generator import ResponseGenerator
from app.services.title_generator import TitleGenerator
from app.utils.datetime_utils import now_utc
from app.utils.ids import is_valid_uuid, new_id

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class ChatSessionService:
    """Create, extend, read and delete chat sessions."""

    def __init__(
        self,
        repo: IChatSessionRepository,
        response_generator: ResponseGenerator,
        title_generator: TitleGenerator,
        clock: Callable[[], datetime] = now_utc,
        id_factory: Callable[[], str] = new_id,
        max_message_length: Optional[int] = None,
    ):
        self._repo = repo
        self._responses = response_generator
        self._titles = title_generator
        self._clock = clock
        self._id_factory = id_factory
        self._max_message_length = max_message_length or get_settings().MAX_MESSAGE_LENGTH

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_message(self, message: Optional[str]) -> str:
        if message is None or not str(message).strip():
            raise ValidationError("Message is required")
        if len(message) > self._max_message_length:
            raise ValidationError(
                f"Message too long (max {self._max_message_length} characters)",
                details={"max_length": self._max_message_length, "length": len(message)},
            )
        return message

    def _validate_mode(self, mode: Optional[str]) -> ChatMode:
        if isinstance(mode, ChatMode):
            return mode
        try:
            return ChatMode(mode)
        except ValueError:
            allowed = ", ".join(m.value for m in ChatMode)
            raise ValidationError(f"Invalid mode. Use one of: {allowed}") from None

    def _message_pair(self, user_text: str, reply: str) -> list[ChatMessage]:
        now = self._clock()
        return [
            ChatMessage(sender=MessageSender.USER, text=user_text, timestamp=now),
            ChatMessage(sender=MessageSender.ASSISTANT, text=reply, timestamp=now),
        ]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create(self, message: Optional[str], mode: Optional[str]) -> ChatSession:
        """
        Start a new session from its first user message.

        Raises:
            ValidationError: Missing/oversized message or unknown mode
            ExternalServiceError: Reply generation failed (nothing persisted)
        """
        text = self._validate_message(message)
        chat_mode = self._validate_mode(mode)

        first = ChatMessage(sender=MessageSender.USER, text=text, timestamp=self._clock())
        reply = await self._responses.generate_reply([first], chat_mode)
        title = await self._titles.generate_title(text)

        now = self._clock()
        session = ChatSession(
            id=self._id_factory(),
            title=title,
            mode=chat_mode,
            messages=self._message_pair(text, reply),
            created_at=now,
            updated_at=now,
            last_accessed_at=now,
        )
        await self._repo.create(session)
        logger.info(f"Created chat session {session.id} ({chat_mode.value})")
        return session

    async def append(
        self,
        session_id: str,
        message: Optional[str],
        mode: Optional[str],
    ) -> ChatAnswer:
        """
        Add a user message and the generated reply to an existing session.

        Raises:
            NotFoundError: Unknown or malformed session id
            ValidationError: Missing/oversized message or unknown mode
            ExternalServiceError: Reply generation failed (nothing persisted)
        """
        session = await self._load(session_id)
        text = self._validate_message(message)
        chat_mode = self._validate_mode(mode)

        pending = ChatMessage(sender=MessageSender.USER, text=text, timestamp=self._clock())
        reply = await self._responses.generate_reply([*session.messages, pending], chat_mode)

        pair = self._message_pair(text, reply)
        stored = await self._repo.append_messages(
            session.id, pair, chat_mode, updated_at=pair[-1].timestamp
        )
        if not stored:
            raise NotFoundError(f"Chat {session_id} not found")
        return ChatAnswer(answer=reply, session_id=session.id, messages=pair)

    async def get(self, session_id: str) -> ChatSession:
        """Return the full session and refresh last_accessed_at."""
        session = await self._load(session_id)
        accessed_at = self._clock()
        await self._repo.touch(session.id, accessed_at)
        return session.model_copy(update={"last_accessed_at": accessed_at})

    async def list(
        self,
        search: Optional[str] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> ChatSessionPage:
        """Newest-first page of session summaries plus the total match count."""
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        if skip < 0:
            raise ValidationError("skip must be zero or greater")
        needle = search.strip() if search else None

        items = await self._repo.list(search=needle or None, limit=limit, offset=skip)
        total = await self._repo.count(search=needle or None)
        return ChatSessionPage(items=items, total=total, limit=limit, skip=skip)

    async def delete(self, session_id: str) -> None:
        """Delete one session. Raises NotFoundError when absent."""
        if not is_valid_uuid(session_id) or not await self._repo.delete(session_id):
            raise NotFoundError(f"Chat {session_id} not found")
        logger.info(f"Deleted chat session {session_id}")

    async def bulk_delete(self, session_ids: list[str]) -> BulkDeleteResult:
        """Delete several sessions and report the outcome per id."""
        if not session_ids:
            raise ValidationError("chat_ids must be a non-empty list")

        # Keep first occurrence order, drop duplicates
        unique_ids = list(dict.fromkeys(session_ids))
        invalid_ids = [sid for sid in unique_ids if not is_valid_uuid(sid)]
        candidates = [sid for sid in unique_ids if is_valid_uuid(sid)]

        deleted_ids = await self._repo.delete_many(candidates) if candidates else []
        deleted = set(deleted_ids)
        not_found_ids = [sid for sid in candidates if sid not in deleted]

        logger.info(
            f"Bulk delete: {len(deleted_ids)} deleted, {len(invalid_ids)} invalid, "
            f"{len(not_found_ids)} not found"
        )
        return BulkDeleteResult(
            deleted_count=len(deleted_ids),
            deleted_ids=deleted_ids,
            invalid_ids=invalid_ids,
            not_found_ids=not_found_ids,
        )

    async def _load(self, session_id: str) -> ChatSession:
        if not is_valid_uuid(session_id):
            raise NotFoundError(f"Chat {session_id} not found")
        session = await self._repo.get(session_id)
        if not session:
            raise NotFoundError(f"Chat {session_id} not found")
        return session
