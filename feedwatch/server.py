"""
Feedwatch Server

FastAPI application providing:
- The rendered reader page and its form/preview targets
- A JSON API for feeds, posts and state
- Background polling of tracked feeds
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .config import config, state
from .fetcher import Fetcher
from .poller import FeedPoller
from .routes import api_router, pages_router
from .services import FeedService
from .store import Store
from .view import View

logger = logging.getLogger(__name__)


def init_state(fetcher: Fetcher | None = None) -> None:
    """Create the store, wire the renderer to it, and build the services."""
    state.store = Store()
    state.view = View(lng=config.LANGUAGE)
    state.view.watch(state.store)
    state.fetcher = fetcher or Fetcher(proxy_url=config.PROXY_URL, timeout=config.SUBMIT_TIMEOUT)
    state.feed_service = FeedService(
        store=state.store,
        fetcher=state.fetcher,
        timeout=config.SUBMIT_TIMEOUT,
    )
    state.poller = FeedPoller(
        store=state.store,
        fetcher=state.fetcher,
        interval=config.POLL_INTERVAL,
        timeout=config.POLL_TIMEOUT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Startup - skip if already initialized (e.g., by tests)
    if state.store is None:
        init_state()

    if config.ENABLE_POLLING and state.poller:
        await state.poller.start()
    else:
        logger.info("Feed polling disabled")

    yield

    # Shutdown
    if state.poller:
        await state.poller.stop()
    if state.fetcher:
        try:
            await state.fetcher.close()
        except Exception as e:
            logger.warning(f"Error closing fetcher: {e}")


app = FastAPI(
    title="Feedwatch",
    version=__version__,
    lifespan=lifespan
)

# Include routers
app.include_router(pages_router)
app.include_router(api_router)
