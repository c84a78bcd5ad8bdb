"""
Visit counter API endpoints.
"""

from fastapi import APIRouter, Request

from app.api.deps import VisitRepo
from app.utils.datetime_utils import month_bounds, now_utc

router = APIRouter()


@router.post("/visits")
async def log_visit(request: Request, repo: VisitRepo):
    """Record a visit from the calling client."""
    ip = request.client.host if request.client else None
    await repo.record(ip=ip, user_agent=request.headers.get("user-agent"))
    return {"success": True, "message": "Visit logged"}


@router.get("/visitors/monthly")
async def get_monthly_visitors(repo: VisitRepo):
    """Visits in the current UTC calendar month."""
    start, end = month_bounds(now_utc())
    return {"success": True, "count": await repo.count_between(start, end)}
