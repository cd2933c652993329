"""
Validation of submitted feed URLs.

The submission schema checks, in order and stopping at the first failure:
- the URL is not empty (required)
- the URL is an absolute http(s) URL (notUrl)
- the URL is not already tracked (exists)
"""

from typing import Annotated, Iterable

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    TypeAdapter,
    ValidationInfo,
)
from pydantic import ValidationError as SchemaError
from pydantic_core import PydanticCustomError

from .errors import ErrorKind, ValidationError

_http_url = TypeAdapter(AnyHttpUrl)


def _required(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError(ErrorKind.REQUIRED.value, "URL must not be empty")
    return value


def _well_formed(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except SchemaError:
        raise PydanticCustomError(ErrorKind.NOT_URL.value, "URL must be a valid http(s) URL")
    return value


def _not_tracked(value: str, info: ValidationInfo) -> str:
    tracked_urls = (info.context or {}).get("tracked_urls", ())
    if value in tracked_urls:
        raise PydanticCustomError(ErrorKind.EXISTS.value, "Feed is already tracked")
    return value


FeedUrl = Annotated[
    str,
    AfterValidator(_required),
    AfterValidator(_well_formed),
    AfterValidator(_not_tracked),
]


class FeedUrlSubmission(BaseModel):
    """Schema for a feed URL typed into the form."""
    url: FeedUrl


def validate_rss_url(url: str | None, tracked_urls: Iterable[str]) -> ErrorKind | None:
    """
    Validate a candidate feed URL.

    Args:
        url: The URL as submitted
        tracked_urls: URLs of feeds already in the state

    Returns:
        None if the URL can be added, otherwise the first failing ErrorKind
    """
    try:
        FeedUrlSubmission.model_validate(
            {"url": url or ""},
            context={"tracked_urls": set(tracked_urls)},
        )
    except SchemaError as e:
        return ErrorKind(e.errors()[0]["type"])
    return None


def require_valid_rss_url(url: str | None, tracked_urls: Iterable[str]) -> str:
    """
    Validate a candidate feed URL, raising on failure.

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        ValidationError: Carrying the first failing ErrorKind
    """
    error = validate_rss_url(url, tracked_urls)
    if error is not None:
        raise ValidationError(error)
    return (url or "").strip()
