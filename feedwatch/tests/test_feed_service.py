"""
Tests for feed submission and post selection.
"""

import pytest
from bs4 import BeautifulSoup

from feedwatch.errors import ErrorKind, NetworkError, SubmissionInProgress
from feedwatch.models import make_feed
from feedwatch.store import LoadingStatus

from .conftest import make_rss

FEED_URL = "https://example.com/rss"


class TestSubmit:
    """Tests for FeedService.submit."""

    @pytest.mark.asyncio
    async def test_successful_submission(self, store, view, feed_service, fake_fetcher):
        """One-item feed ends with one feed, one post and an idle status."""
        fake_fetcher.responses[FEED_URL] = make_rss([("Hello", "https://example.com/hello", "Hi")])

        result = await feed_service.submit(FEED_URL)

        current = store.get_state()
        assert result.ok
        assert len(current.feeds) == 1
        assert current.feeds[0].url == FEED_URL
        assert len(current.posts) == 1
        assert current.posts[0].title == "Hello"
        assert current.posts[0].channel_id == current.feeds[0].id
        assert current.loading_process.status == LoadingStatus.IDLE
        assert current.loading_process.error is None

    @pytest.mark.asyncio
    async def test_uses_submission_timeout(self, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = make_rss([])
        await feed_service.submit(FEED_URL)
        assert fake_fetcher.calls == [(FEED_URL, 10.0)]

    @pytest.mark.asyncio
    async def test_new_feed_is_prepended(self, store, feed_service, fake_fetcher):
        other = "https://example.org/feed"
        fake_fetcher.responses[FEED_URL] = make_rss([], title="First")
        fake_fetcher.responses[other] = make_rss([], title="Second")

        await feed_service.submit(FEED_URL)
        await feed_service.submit(other)

        assert [f.title for f in store.get_state().feeds] == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_invalid_url_sets_form_error(self, store, feed_service, fake_fetcher):
        result = await feed_service.submit("not a url")

        form = store.get_state().form
        assert result.error == ErrorKind.NOT_URL
        assert form.valid is False
        assert form.error == ErrorKind.NOT_URL
        assert fake_fetcher.calls == []
        assert store.get_state().loading_process.status == LoadingStatus.IDLE

    @pytest.mark.asyncio
    async def test_duplicate_url_rejected(self, store, feed_service, fake_fetcher):
        store.prepend("feeds", [make_feed(FEED_URL, "Existing", "")])

        result = await feed_service.submit(FEED_URL)

        assert result.error == ErrorKind.EXISTS
        assert len(store.get_state().feeds) == 1

    @pytest.mark.asyncio
    async def test_network_failure(self, store, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = NetworkError("timed out")

        result = await feed_service.submit(FEED_URL)

        loading = store.get_state().loading_process
        assert result.error == ErrorKind.NETWORK
        assert loading.status == LoadingStatus.FAILED
        assert loading.error == ErrorKind.NETWORK
        assert store.get_state().feeds == []

    @pytest.mark.asyncio
    async def test_parse_failure(self, store, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = "<html><body>nope</body></html>"

        result = await feed_service.submit(FEED_URL)

        assert result.error == ErrorKind.RSS
        assert store.get_state().loading_process.error == ErrorKind.RSS

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_unknown(self, store, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = RuntimeError("boom")

        result = await feed_service.submit(FEED_URL)

        assert result.error == ErrorKind.UNKNOWN
        assert store.get_state().loading_process.status == LoadingStatus.FAILED

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, store, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = NetworkError("down")
        await feed_service.submit(FEED_URL)

        fake_fetcher.responses[FEED_URL] = make_rss([("Back", "https://example.com/back", "")])
        result = await feed_service.submit(FEED_URL)

        assert result.ok
        assert store.get_state().loading_process.status == LoadingStatus.IDLE
        assert store.get_state().loading_process.error is None

    @pytest.mark.asyncio
    async def test_failed_render_shows_current_error(self, store, view, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = NetworkError("down")

        await feed_service.submit(FEED_URL)

        feedback = BeautifulSoup(view.html(), "html.parser").select_one(".feedback")
        assert feedback.get_text() == "Network error"

    @pytest.mark.asyncio
    async def test_rejects_submission_while_loading(self, store, feed_service):
        store.set("loading_process.status", LoadingStatus.LOADING)
        with pytest.raises(SubmissionInProgress):
            await feed_service.submit(FEED_URL)


class TestOpenPost:
    """Tests for FeedService.open_post."""

    @pytest.mark.asyncio
    async def test_open_post_marks_seen_and_selects(self, store, view, feed_service, fake_fetcher):
        fake_fetcher.responses[FEED_URL] = make_rss([("Hello", "https://example.com/hello", "Hi")])
        await feed_service.submit(FEED_URL)
        post_id = store.get_state().posts[0].id

        post = feed_service.open_post(post_id)

        current = store.get_state()
        assert post.title == "Hello"
        assert current.modal.post_id == post_id
        assert post_id in current.seen_posts
        link = BeautifulSoup(view.html(), "html.parser").select_one(f'.posts a[data-id="{post_id}"]')
        assert "fw-normal" in link["class"]

    def test_open_unknown_post(self, store, feed_service):
        assert feed_service.open_post("42") is None
        assert store.get_state().modal.post_id == "42"
        assert "42" in store.get_state().seen_posts

    def test_close_post_clears_selection(self, store, feed_service):
        feed_service.open_post("42")
        feed_service.close_post()

        current = store.get_state()
        assert current.modal.post_id is None
        assert "42" in current.seen_posts
