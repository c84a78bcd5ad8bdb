"""
Legacy one-shot assistant endpoints.
"""

from fastapi import APIRouter

from app.api.deps import AIAnswerSvc, AICommandRepo
from app.models.ai_command import AIAnswer, AIAnswerRequest, AICommand, AICommandCreate

router = APIRouter()


@router.post("/ai-command")
async def store_command(request: AICommandCreate, repo: AICommandRepo):
    """Store a command/response pair."""
    await repo.add(request.command, request.response)
    return {"success": True}


@router.get("/ai-history", response_model=list[AICommand])
async def get_history(repo: AICommandRepo):
    """All stored pairs, oldest first."""
    return await repo.list()


@router.post("/ai-answer", response_model=AIAnswer)
async def answer_command(request: AIAnswerRequest, service: AIAnswerSvc):
    """Answer a command using the stored history as context."""
    return AIAnswer(answer=await service.answer(request.command, request.mode))
