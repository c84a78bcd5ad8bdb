"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, Request

from app.core.config import get_settings
from app.interfaces.ai_command_repository import IAICommandRepository
from app.interfaces.blog_repository import IBlogRepository
from app.interfaces.chat_session_repository import IChatSessionRepository
from app.interfaces.comment_repository import ICommentRepository
from app.interfaces.llm_provider import ILLMProvider
from app.interfaces.love_repository import ILoveRepository
from app.interfaces.review_repository import IReviewRepository
from app.interfaces.taxonomy_repository import ITaxonomyRepository
from app.interfaces.visit_repository import IVisitRepository
from app.services.ai_answer_service import AIAnswerService
from app.services.chat_session_service import ChatSessionService
from app.services.response_generator import ResponseGenerator
from app.services.title_generator import TitleGenerator


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_chat_session_repository() -> IChatSessionRepository:
    """Get chat session repository instance."""
    settings = get_settings()
    if settings.uses_memory_store:
        from app.infrastructure.local.in_memory_chat_session_repository import (
            InMemoryChatSessionRepository,
        )
        return InMemoryChatSessionRepository()
    else:
        from app.infrastructure.local.chat_session_repository import SqliteChatSessionRepository
        return SqliteChatSessionRepository()


@lru_cache()
def get_blog_repository() -> IBlogRepository:
    """Get blog repository instance."""
    from app.infrastructure.local.blog_repository import SqliteBlogRepository
    return SqliteBlogRepository()


@lru_cache()
def get_tag_repository() -> ITaxonomyRepository:
    """Get tag repository instance."""
    from app.infrastructure.local.taxonomy_repository import SqliteTagRepository
    return SqliteTagRepository()


@lru_cache()
def get_category_repository() -> ITaxonomyRepository:
    """Get category repository instance."""
    from app.infrastructure.local.taxonomy_repository import SqliteCategoryRepository
    return SqliteCategoryRepository()


@lru_cache()
def get_comment_repository() -> ICommentRepository:
    """Get comment repository instance."""
    from app.infrastructure.local.comment_repository import SqliteCommentRepository
    return SqliteCommentRepository()


@lru_cache()
def get_love_repository() -> ILoveRepository:
    """Get love repository instance."""
    from app.infrastructure.local.love_repository import SqliteLoveRepository
    return SqliteLoveRepository()


@lru_cache()
def get_review_repository() -> IReviewRepository:
    """Get review repository instance."""
    from app.infrastructure.local.review_repository import SqliteReviewRepository
    return SqliteReviewRepository()


@lru_cache()
def get_visit_repository() -> IVisitRepository:
    """Get visit repository instance."""
    from app.infrastructure.local.visit_repository import SqliteVisitRepository
    return SqliteVisitRepository()


@lru_cache()
def get_ai_command_repository() -> IAICommandRepository:
    """Get AI command repository instance."""
    from app.infrastructure.local.ai_command_repository import SqliteAICommandRepository
    return SqliteAICommandRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_llm_provider() -> ILLMProvider:
    """Get LLM provider instance."""
    settings = get_settings()
    from app.infrastructure.local.litellm_provider import LiteLLMProvider
    return LiteLLMProvider(model_name=settings.CHAT_MODEL)


def get_knowledge(request: Request) -> Any:
    """Knowledge document loaded at startup (empty when unavailable)."""
    return getattr(request.app.state, "knowledge", None) or {}


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ChatRepo = Annotated[IChatSessionRepository, Depends(get_chat_session_repository)]
BlogRepo = Annotated[IBlogRepository, Depends(get_blog_repository)]
TagRepo = Annotated[ITaxonomyRepository, Depends(get_tag_repository)]
CategoryRepo = Annotated[ITaxonomyRepository, Depends(get_category_repository)]
CommentRepo = Annotated[ICommentRepository, Depends(get_comment_repository)]
LoveRepo = Annotated[ILoveRepository, Depends(get_love_repository)]
ReviewRepo = Annotated[IReviewRepository, Depends(get_review_repository)]
VisitRepo = Annotated[IVisitRepository, Depends(get_visit_repository)]
AICommandRepo = Annotated[IAICommandRepository, Depends(get_ai_command_repository)]
LLMProvider = Annotated[ILLMProvider, Depends(get_llm_provider)]
Knowledge = Annotated[Any, Depends(get_knowledge)]


# ===========================================
# Service Dependencies
# ===========================================


def get_chat_session_service(
    repo: ChatRepo,
    llm_provider: LLMProvider,
    knowledge: Knowledge,
) -> ChatSessionService:
    """Build the chat session service for one request."""
    return ChatSessionService(
        repo=repo,
        response_generator=ResponseGenerator(llm_provider, knowledge=knowledge),
        title_generator=TitleGenerator(llm_provider),
    )


def get_ai_answer_service(
    repo: AICommandRepo,
    llm_provider: LLMProvider,
    knowledge: Knowledge,
) -> AIAnswerService:
    """Build the one-shot assistant service for one request."""
    return AIAnswerService(repo=repo, llm_provider=llm_provider, knowledge=knowledge)


ChatService = Annotated[ChatSessionService, Depends(get_chat_session_service)]
AIAnswerSvc = Annotated[AIAnswerService, Depends(get_ai_answer_service)]
