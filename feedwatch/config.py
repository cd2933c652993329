"""
Configuration and application state management.
"""

import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .fetcher import Fetcher
    from .poller import FeedPoller
    from .services import FeedService
    from .store import Store
    from .view import View

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Config:
    """Application configuration from environment."""
    # Proxy that wraps every feed request: <PROXY_URL>/get?url=...
    PROXY_URL: str = os.getenv("PROXY_URL", "https://hexlet-allorigins.herokuapp.com")

    # Seconds
    SUBMIT_TIMEOUT: float = float(os.getenv("SUBMIT_TIMEOUT", "10"))
    POLL_TIMEOUT: float = float(os.getenv("POLL_TIMEOUT", "10"))
    POLL_INTERVAL: float = float(os.getenv("POLL_INTERVAL", "5"))
    ENABLE_POLLING: bool = _parse_bool(os.getenv("ENABLE_POLLING"), default=True)

    # "ru" or "en"
    LANGUAGE: str = os.getenv("LANGUAGE", "ru")

    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


class AppState:
    """Shared application state."""
    store: "Store | None" = None
    view: "View | None" = None
    fetcher: "Fetcher | None" = None
    poller: "FeedPoller | None" = None
    feed_service: "FeedService | None" = None


state = AppState()


def get_store() -> "Store":
    """Dependency to get the state store."""
    if not state.store:
        raise HTTPException(status_code=500, detail="Store not initialized")
    return state.store


def get_view() -> "View":
    """Dependency to get the page renderer."""
    if not state.view:
        raise HTTPException(status_code=500, detail="View not initialized")
    return state.view
