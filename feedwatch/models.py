"""
Feed and post records held by the application state.
"""

import secrets
from dataclasses import dataclass


def generate_id() -> str:
    """Generate a short URL-safe unique identifier."""
    return secrets.token_urlsafe(12)


@dataclass(frozen=True)
class Feed:
    """A tracked RSS source."""
    id: str
    url: str
    title: str
    description: str


@dataclass(frozen=True)
class Post:
    """A single item belonging to a feed."""
    id: str
    channel_id: str
    title: str
    link: str
    description: str


def make_feed(url: str, title: str, description: str) -> Feed:
    """Create a feed with a fresh identifier."""
    return Feed(
        id=generate_id(),
        url=url,
        title=title,
        description=description,
    )


def make_post(channel_id: str, title: str, link: str, description: str) -> Post:
    """Create a post with a fresh identifier."""
    return Post(
        id=generate_id(),
        channel_id=channel_id,
        title=title,
        link=link,
        description=description,
    )
