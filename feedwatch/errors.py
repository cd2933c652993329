"""
Error kinds and exceptions shared by the submission flow, the poller and routes.

Every failure maps to a closed set of error kinds; the user-facing text for a
kind lives in the locale tables.
"""

from enum import Enum
from typing import TypeVar

from fastapi import HTTPException

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Closed set of failures surfaced to the user."""
    REQUIRED = "required"
    NOT_URL = "notUrl"
    EXISTS = "exists"
    RSS = "rss"
    NETWORK = "network"
    UNKNOWN = "unknown"


class FeedwatchError(Exception):
    """Base class for feedwatch errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class ValidationError(FeedwatchError):
    """A submitted URL is empty, malformed, or already tracked."""

    def __init__(self, kind: ErrorKind):
        super().__init__(kind.value)
        self.kind = kind


class ParsingError(FeedwatchError):
    """Fetched content is not a readable feed."""

    kind = ErrorKind.RSS


class NetworkError(FeedwatchError):
    """The proxy request timed out, failed to connect, or returned an error."""

    kind = ErrorKind.NETWORK


class UnknownError(FeedwatchError):
    """Anything that does not fit the other categories."""

    kind = ErrorKind.UNKNOWN


class SubmissionInProgress(FeedwatchError):
    """A feed is already loading; a second submission must wait."""


def error_kind_for(error: BaseException) -> ErrorKind:
    """Classify an exception raised while loading a feed."""
    if isinstance(error, ParsingError):
        return ErrorKind.RSS
    if isinstance(error, NetworkError):
        return ErrorKind.NETWORK
    return ErrorKind.UNKNOWN


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        post = require_resource(store.find_post(post_id), "Post not found")
    """
    if resource is None:
        raise HTTPException(status_code=404, detail=detail)
    return resource


def require_post(post: T | None) -> T:
    """Raise 404 if post is None."""
    return require_resource(post, "Post not found")
