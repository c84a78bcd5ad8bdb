"""
Application configuration using Pydantic Settings.

Environment-based infrastructure switching is controlled by the ENVIRONMENT
and CHAT_STORE variables.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_FREE_MODEL = "openrouter/meta-llama/llama-3.1-8b-instruct:free"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = False

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./portfolio.db"

    # Conversation store backend: "sqlite" persists through DATABASE_URL,
    # "memory" keeps sessions in-process (lost on restart).
    CHAT_STORE: Literal["sqlite", "memory"] = "sqlite"

    # ===========================================
    # LLM Configuration (OpenRouter via LiteLLM)
    # ===========================================
    OPENROUTER_API_KEY: str = ""

    # Custom endpoint (optional, for proxy servers)
    LLM_API_BASE: str = ""

    # Model used for every chat reply
    CHAT_MODEL: str = DEFAULT_FREE_MODEL

    # Model used for the single general-mode retry
    FALLBACK_MODEL: str = DEFAULT_FREE_MODEL

    # Model used to summarize the first message into a title
    TITLE_MODEL: str = DEFAULT_FREE_MODEL

    CHAT_MAX_TOKENS: int = 1000
    CHAT_TEMPERATURE: float = 0.7
    TITLE_MAX_TOKENS: int = 20
    TITLE_TEMPERATURE: float = 0.5

    # Transport timeout handed to the HTTP client (None = client default)
    LLM_TIMEOUT_SECONDS: float | None = None

    # Sent to OpenRouter for app attribution
    APP_REFERER: str = "http://localhost:3000"
    APP_TITLE: str = "Moshiur Portfolio Chat"

    # ===========================================
    # Chat
    # ===========================================
    HISTORY_WINDOW: int = 10
    MAX_MESSAGE_LENGTH: int = 1000

    # Static JSON injected into the portfolio-mode prompt
    KNOWLEDGE_FILE: str = "./data/moshiur.json"
    OWNER_NAME: str = "Moshiur Rahman"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: List[str] = Field(default=["*"])

    @property
    def uses_memory_store(self) -> bool:
        """Check if chat sessions are kept in-process."""
        return self.CHAT_STORE == "memory"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
