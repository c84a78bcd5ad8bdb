"""
Review API endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import ReviewRepo
from app.core.exceptions import NotFoundError
from app.models.engagement import Review, ReviewCreate, ReviewStats

router = APIRouter()


@router.get("", response_model=list[Review])
async def list_reviews(repo: ReviewRepo):
    """List all reviews."""
    return await repo.list()


@router.post("", response_model=Review, status_code=status.HTTP_201_CREATED)
async def create_review(review: ReviewCreate, repo: ReviewRepo):
    """Post a review."""
    return await repo.create(review)


@router.get("/stats", response_model=ReviewStats)
async def get_review_stats(repo: ReviewRepo):
    """Average rating and review count."""
    avg, count = await repo.stats()
    return ReviewStats(avg=f"{(avg or 0.0):.1f}", count=count)


@router.delete("/{review_id}")
async def delete_review(review_id: str, repo: ReviewRepo):
    """Delete a review."""
    if not await repo.delete(review_id):
        raise NotFoundError("Review not found")
    return {"success": True, "message": "Review deleted successfully"}
