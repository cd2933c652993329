"""
Page routes: the rendered reader and its form/button targets.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from ..config import get_store, get_view
from ..errors import SubmissionInProgress, require_post
from ..services import FeedServiceDep
from ..store import Store
from ..view import View

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index(view: Annotated[View, Depends(get_view)]) -> HTMLResponse:
    """Current page as rendered from the state."""
    return HTMLResponse(view.html())


@router.post("/")
async def submit_form(
    service: FeedServiceDep,
    url: Annotated[str, Form()] = "",
) -> RedirectResponse:
    """Handle the RSS form; the outcome is rendered into the page."""
    try:
        await service.submit(url)
    except SubmissionInProgress:
        logger.info(f"Ignoring submission of {url} while another feed is loading")
    return RedirectResponse("/", status_code=303)


@router.post("/posts/{post_id}/open")
async def open_post(
    post_id: str,
    store: Annotated[Store, Depends(get_store)],
    service: FeedServiceDep,
) -> RedirectResponse:
    """Preview button: select the post and mark it seen."""
    require_post(store.find_post(post_id))
    service.open_post(post_id)
    return RedirectResponse("/", status_code=303)


@router.get("/posts/{post_id}/visit")
async def visit_post(
    post_id: str,
    store: Annotated[Store, Depends(get_store)],
    service: FeedServiceDep,
) -> RedirectResponse:
    """Post link: mark the post seen, then send the reader to the article."""
    post = require_post(store.find_post(post_id))
    service.open_post(post_id)
    return RedirectResponse(post.link, status_code=303)


@router.post("/modal/close")
async def close_modal(service: FeedServiceDep) -> RedirectResponse:
    """Close button of the detail view."""
    service.close_post()
    return RedirectResponse("/", status_code=303)
