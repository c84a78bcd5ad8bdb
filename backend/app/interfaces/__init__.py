"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.ai_command_repository import IAICommandRepository
from app.interfaces.blog_repository import IBlogRepository
from app.interfaces.chat_session_repository import IChatSessionRepository
from app.interfaces.comment_repository import ICommentRepository
from app.interfaces.llm_provider import ILLMProvider
from app.interfaces.love_repository import ILoveRepository
from app.interfaces.review_repository import IReviewRepository
from app.interfaces.taxonomy_repository import ITaxonomyRepository
from app.interfaces.visit_repository import IVisitRepository

__all__ = [
    "IChatSessionRepository",
    "ILLMProvider",
    "IBlogRepository",
    "ITaxonomyRepository",
    "ICommentRepository",
    "ILoveRepository",
    "IReviewRepository",
    "IVisitRepository",
    "IAICommandRepository",
]
