"""
Legacy one-shot assistant models (command/response pairs).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AICommandCreate(BaseModel):
    """Schema for storing a command/response pair directly."""

    command: str = Field(..., min_length=1)
    response: str = Field(..., min_length=1)


class AICommand(BaseModel):
    """Stored command/response pair."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    command: str
    response: str
    created_at: datetime


class AIAnswerRequest(BaseModel):
    """Body of POST /ai-answer. Checked by the service so errors are 400s."""

    command: Optional[str] = None
    mode: Optional[str] = None


class AIAnswer(BaseModel):
    answer: str
