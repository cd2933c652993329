"""
Feed service: business logic for submitting feeds and opening posts.

Submission drives the loading state machine:

    idle -> loading     on submit
    loading -> idle     feed and posts merged
    loading -> failed   fetch or parse error (rss, network, unknown)
    failed -> loading   on the next submission
"""

import logging
from dataclasses import dataclass, replace

from ..errors import (
    ErrorKind,
    FeedwatchError,
    SubmissionInProgress,
    UnknownError,
    ValidationError,
    error_kind_for,
)
from ..fetcher import Fetcher
from ..models import Feed, Post, make_feed, make_post
from ..parser import ParsedFeed, parse_rss
from ..store import FormState, LoadingStatus, Store
from ..validation import require_valid_rss_url

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a feed submission."""
    url: str
    error: ErrorKind | None = None
    feed: Feed | None = None
    posts_added: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class FeedService:
    """Service for feed submission and post selection."""

    def __init__(
        self,
        store: Store,
        fetcher: Fetcher,
        timeout: float = 10.0,
    ):
        self.store = store
        self.fetcher = fetcher
        self.timeout = timeout

    # ─────────────────────────────────────────────────────────────
    # Submission
    # ─────────────────────────────────────────────────────────────

    async def submit(self, url: str | None) -> SubmissionResult:
        """
        Validate a URL and, if it passes, load the feed.

        Args:
            url: URL typed into the form

        Returns:
            SubmissionResult; `error` is set for validation and loading failures

        Raises:
            SubmissionInProgress: If another submission is still loading
        """
        state = self.store.get_state()
        if state.loading_process.status == LoadingStatus.LOADING:
            raise SubmissionInProgress("A feed is already loading")

        try:
            url = require_valid_rss_url(url, self.store.tracked_urls())
        except ValidationError as e:
            value = (url or "").strip()
            self.store.set("form", replace(state.form, valid=False, error=e.kind, value=value))
            return SubmissionResult(url=value, error=e.kind)

        self.store.set("form", replace(state.form, valid=True, error=None, value=url))
        return await self.load_feed(url)

    async def _fetch_feed(self, url: str) -> ParsedFeed:
        try:
            content = await self.fetcher.fetch(url, timeout=self.timeout)
            return parse_rss(content)
        except FeedwatchError:
            raise
        except Exception as e:
            raise UnknownError(f"Unexpected error loading {url}: {e}") from e

    async def load_feed(self, url: str) -> SubmissionResult:
        """Fetch, parse and merge a new feed, tracking the loading status."""
        store = self.store
        store.set("loading_process.status", LoadingStatus.LOADING)

        try:
            parsed = await self._fetch_feed(url)
        except FeedwatchError as e:
            logger.exception(f"Failed to load feed {url}: {e}")
            kind = error_kind_for(e)
            # Error first, so the failed-status render reads it
            store.set("loading_process.error", kind)
            store.set("loading_process.status", LoadingStatus.FAILED)
            return SubmissionResult(url=url, error=kind)

        feed = make_feed(url=url, title=parsed.title, description=parsed.description)
        posts = [
            make_post(
                channel_id=feed.id,
                title=item.title,
                link=item.link,
                description=item.description,
            )
            for item in parsed.items
        ]

        store.prepend("feeds", [feed])
        store.prepend("posts", posts)
        store.set("loading_process.error", None)
        store.set("loading_process.status", LoadingStatus.IDLE)
        store.set("form", FormState(status="filling", error=None, valid=True, value=""))

        logger.info(f"Added feed {url} with {len(posts)} posts")
        return SubmissionResult(url=url, feed=feed, posts_added=len(posts))

    # ─────────────────────────────────────────────────────────────
    # Posts
    # ─────────────────────────────────────────────────────────────

    def open_post(self, post_id: str) -> Post | None:
        """
        Select a post for the detail view and mark it seen.

        Returns the post, or None if no post has that id (the selection is
        still recorded; the detail view renders nothing for it).
        """
        self.store.set("modal.post_id", post_id)
        self.store.apply_mutation("seen_posts", lambda seen: seen | {post_id})
        return self.store.find_post(post_id)

    def close_post(self) -> None:
        """Clear the detail view selection."""
        self.store.set("modal.post_id", None)
