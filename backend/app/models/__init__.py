"""Pydantic models (schemas) for the application."""

from app.models.enums import ChatMode, MessageSender
from app.models.chat_session import (
    BulkDeleteRequest,
    BulkDeleteResult,
    ChatAnswer,
    ChatMessage,
    ChatMessageRequest,
    ChatSession,
    ChatSessionPage,
    ChatSessionSummary,
)
from app.models.blog import Blog, BlogCreate, BlogUpdate, TaxonomyCreate, TaxonomyTerm
from app.models.engagement import (
    Comment,
    CommentCreate,
    CommentLikeRequest,
    LoveToggleRequest,
    LoveToggleResult,
    Review,
    ReviewCreate,
    ReviewStats,
    Visit,
)
from app.models.ai_command import AIAnswer, AIAnswerRequest, AICommand, AICommandCreate

__all__ = [
    # Enums
    "ChatMode",
    "MessageSender",
    # Chat
    "ChatMessage",
    "ChatMessageRequest",
    "ChatSession",
    "ChatSessionSummary",
    "ChatSessionPage",
    "ChatAnswer",
    "BulkDeleteRequest",
    "BulkDeleteResult",
    # Blog
    "Blog",
    "BlogCreate",
    "BlogUpdate",
    "TaxonomyCreate",
    "TaxonomyTerm",
    # Engagement
    "Comment",
    "CommentCreate",
    "CommentLikeRequest",
    "LoveToggleRequest",
    "LoveToggleResult",
    "Review",
    "ReviewCreate",
    "ReviewStats",
    "Visit",
    # AI commands
    "AICommand",
    "AICommandCreate",
    "AIAnswerRequest",
    "AIAnswer",
]
