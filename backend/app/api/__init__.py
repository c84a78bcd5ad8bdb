"""API routers."""

from app.api import ai_commands, blogs, chat, comments, loves, reviews, taxonomy, visits

__all__ = [
    "ai_commands",
    "blogs",
    "chat",
    "comments",
    "loves",
    "reviews",
    "taxonomy",
    "visits",
]
