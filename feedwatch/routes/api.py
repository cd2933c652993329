"""
JSON API: state inspection, feed submission, post selection and refresh.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import config, get_store, state
from ..errors import ErrorKind, SubmissionInProgress, require_post
from ..locales import error_message
from ..schemas import (
    AddFeedRequest,
    FeedResponse,
    PostResponse,
    RefreshResponse,
    StateResponse,
    SubmissionResponse,
)
from ..services import FeedServiceDep
from ..store import Store

router = APIRouter(prefix="/api", tags=["api"])

VALIDATION_ERRORS = {ErrorKind.REQUIRED, ErrorKind.NOT_URL, ErrorKind.EXISTS}


# ─────────────────────────────────────────────────────────────
# Health Check
# ─────────────────────────────────────────────────────────────

@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "polling": state.poller is not None and state.poller.running,
    }


@router.get("/state")
async def get_state(
    store: Annotated[Store, Depends(get_store)]
) -> StateResponse:
    """Loading, form and modal state."""
    return StateResponse.from_state(store.get_state())


# ─────────────────────────────────────────────────────────────
# Feeds
# ─────────────────────────────────────────────────────────────

@router.get("/feeds")
async def list_feeds(
    store: Annotated[Store, Depends(get_store)]
) -> list[FeedResponse]:
    """List all tracked feeds, newest first."""
    return [FeedResponse.from_model(f) for f in store.get_state().feeds]


@router.post("/feeds")
async def add_feed(
    request: AddFeedRequest,
    service: FeedServiceDep,
):
    """
    Submit a feed URL.

    Returns 400 for validation errors, 502 when the feed could not be loaded
    and 409 while another submission is loading.
    """
    try:
        result = await service.submit(request.url)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))

    message = error_message(result.error, config.LANGUAGE) if result.error else None
    response = SubmissionResponse.from_result(result, message=message)
    if result.ok:
        return response

    status_code = 400 if result.error in VALIDATION_ERRORS else 502
    return JSONResponse(status_code=status_code, content=response.model_dump())


@router.post("/refresh")
async def refresh_feeds() -> RefreshResponse:
    """Run one poll round now."""
    if not state.poller:
        raise HTTPException(status_code=500, detail="Poller not initialized")
    merged = await state.poller.poll_now()
    return RefreshResponse(merged=merged)


# ─────────────────────────────────────────────────────────────
# Posts
# ─────────────────────────────────────────────────────────────

@router.get("/posts")
async def list_posts(
    store: Annotated[Store, Depends(get_store)]
) -> list[PostResponse]:
    """List all posts, newest first, with their seen flag."""
    current = store.get_state()
    return [PostResponse.from_model(p, current.seen_posts) for p in current.posts]


@router.post("/posts/{post_id}/open")
async def open_post(
    post_id: str,
    store: Annotated[Store, Depends(get_store)],
    service: FeedServiceDep,
) -> PostResponse:
    """Select a post for the detail view and mark it seen."""
    require_post(store.find_post(post_id))
    post = service.open_post(post_id)
    return PostResponse.from_model(post, store.get_state().seen_posts)
