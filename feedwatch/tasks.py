"""
Background refresh of tracked feeds.

New items are merged by link: an item is added only when no post of the same
feed already has its link.
"""

import asyncio
import logging

from .fetcher import Fetcher
from .models import Feed, make_post
from .parser import ParsedItem, parse_rss
from .store import Store

logger = logging.getLogger(__name__)


def merge_new_posts(store: Store, feed: Feed, items: list[ParsedItem]) -> int:
    """
    Prepend posts for items whose link is not yet known for `feed`.

    Returns the number of posts added.
    """
    known_links = {post.link for post in store.posts_for_feed(feed.id)}
    new_posts = []
    for item in items:
        if item.link in known_links:
            continue
        known_links.add(item.link)
        new_posts.append(make_post(
            channel_id=feed.id,
            title=item.title,
            link=item.link,
            description=item.description,
        ))

    if new_posts:
        store.prepend("posts", new_posts)
    return len(new_posts)


async def refresh_single_feed(
    store: Store,
    fetcher: Fetcher,
    feed: Feed,
    timeout: float | None = None,
) -> int:
    """Fetch one feed and merge its new posts. Returns the number merged."""
    content = await fetcher.fetch(feed.url, timeout=timeout)
    parsed = parse_rss(content)
    # Diff against the state as it is now, after the fetch resolved
    return merge_new_posts(store, feed, parsed.items)


async def _refresh_safe(
    store: Store,
    fetcher: Fetcher,
    feed: Feed,
    timeout: float | None,
) -> int:
    try:
        return await refresh_single_feed(store, fetcher, feed, timeout=timeout)
    except Exception as e:
        logger.warning(f"Error refreshing feed {feed.url}: {e}")
        return 0


async def refresh_all_feeds(
    store: Store,
    fetcher: Fetcher,
    timeout: float | None = None,
) -> int:
    """
    Refresh every tracked feed concurrently.

    A failing feed is logged and skipped; the others still merge.
    Returns the total number of posts merged.
    """
    feeds = list(store.get_state().feeds)
    if not feeds:
        return 0

    results = await asyncio.gather(
        *(_refresh_safe(store, fetcher, feed, timeout) for feed in feeds)
    )
    return sum(results)
