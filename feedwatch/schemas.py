"""
Pydantic models for API request/response validation.
"""

from pydantic import BaseModel

from .models import Feed, Post
from .services import SubmissionResult
from .store import State


# ─────────────────────────────────────────────────────────────
# Feed Schemas
# ─────────────────────────────────────────────────────────────

class FeedResponse(BaseModel):
    """A tracked feed."""
    id: str
    url: str
    title: str
    description: str

    @classmethod
    def from_model(cls, feed: Feed) -> "FeedResponse":
        return cls(
            id=feed.id,
            url=feed.url,
            title=feed.title,
            description=feed.description,
        )


class AddFeedRequest(BaseModel):
    """Request to start tracking a feed."""
    url: str


class SubmissionResponse(BaseModel):
    """Result of a feed submission."""
    url: str
    error: str | None = None
    message: str | None = None
    feed: FeedResponse | None = None
    posts_added: int = 0

    @classmethod
    def from_result(cls, result: SubmissionResult, message: str | None = None) -> "SubmissionResponse":
        return cls(
            url=result.url,
            error=result.error.value if result.error else None,
            message=message,
            feed=FeedResponse.from_model(result.feed) if result.feed else None,
            posts_added=result.posts_added,
        )


# ─────────────────────────────────────────────────────────────
# Post Schemas
# ─────────────────────────────────────────────────────────────

class PostResponse(BaseModel):
    """A post with its read state."""
    id: str
    channel_id: str
    title: str
    link: str
    description: str
    seen: bool

    @classmethod
    def from_model(cls, post: Post, seen_posts: set[str]) -> "PostResponse":
        return cls(
            id=post.id,
            channel_id=post.channel_id,
            title=post.title,
            link=post.link,
            description=post.description,
            seen=post.id in seen_posts,
        )


# ─────────────────────────────────────────────────────────────
# State Schemas
# ─────────────────────────────────────────────────────────────

class StateResponse(BaseModel):
    """Snapshot of the transient UI state."""
    loading_status: str
    loading_error: str | None
    form_valid: bool
    form_error: str | None
    modal_post_id: str | None
    feed_count: int
    post_count: int
    seen_count: int

    @classmethod
    def from_state(cls, state: State) -> "StateResponse":
        loading = state.loading_process
        return cls(
            loading_status=loading.status.value,
            loading_error=loading.error.value if loading.error else None,
            form_valid=state.form.valid,
            form_error=state.form.error.value if state.form.error else None,
            modal_post_id=state.modal.post_id,
            feed_count=len(state.feeds),
            post_count=len(state.posts),
            seen_count=len(state.seen_posts),
        )


class RefreshResponse(BaseModel):
    """Result of a manual poll round."""
    merged: int
