"""
Service layer for business logic.

Services encapsulate business logic, keeping routes as thin HTTP adapters.

Usage in routes:
    from ..services import FeedServiceDep

    @router.post("/feeds")
    async def add_feed(request: AddFeedRequest, service: FeedServiceDep):
        return await service.submit(request.url)
"""

from typing import Annotated

from fastapi import Depends, HTTPException

from ..config import state
from .feed_service import FeedService, SubmissionResult

__all__ = [
    "FeedService",
    "SubmissionResult",
    "get_feed_service",
    "FeedServiceDep",
]


def get_feed_service() -> FeedService:
    """Dependency to get FeedService instance."""
    if not state.feed_service:
        raise HTTPException(status_code=500, detail="Feed service not initialized")
    return state.feed_service


FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
