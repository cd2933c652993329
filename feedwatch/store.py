"""
Application state tree and change dispatcher.

All mutations go through Store.apply_mutation(path, updater). After the value
at `path` is replaced, every handler subscribed to exactly that path runs
synchronously. Paths are dotted attribute names ("loading_process.status");
there is no prefix matching, so mutating "loading_process.error" notifies only
handlers subscribed to that exact path.
"""

import logging
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from .errors import ErrorKind
from .models import Feed, Post

logger = logging.getLogger(__name__)


class LoadingStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    FAILED = "failed"


@dataclass
class LoadingProcess:
    """Outcome of the most recent manual submission."""
    status: LoadingStatus = LoadingStatus.IDLE
    error: ErrorKind | None = None


@dataclass
class FormState:
    """Validity of the submission form."""
    status: str = "filling"
    error: ErrorKind | None = None
    valid: bool = False
    value: str = ""


@dataclass
class ModalSelection:
    """Post shown in the detail view."""
    post_id: str | None = None


@dataclass
class State:
    feeds: list[Feed] = field(default_factory=list)
    posts: list[Post] = field(default_factory=list)
    seen_posts: set[str] = field(default_factory=set)
    loading_process: LoadingProcess = field(default_factory=LoadingProcess)
    form: FormState = field(default_factory=FormState)
    modal: ModalSelection = field(default_factory=ModalSelection)


Handler = Callable[[State], None]


class Store:
    """Single mutable state tree with exact-path change notification."""

    def __init__(self, state: State | None = None):
        self._state = state or State()
        self._handlers: dict[str, list[Handler]] = {}

    def get_state(self) -> State:
        return self._state

    def subscribe(self, path: str, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for mutations of exactly `path`.

        Returns a callable that removes the handler.

        Raises:
            KeyError: If the path does not exist in the state tree
        """
        self._resolve(path)
        handlers = self._handlers.setdefault(path, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def apply_mutation(self, path: str, updater: Callable[[Any], Any]) -> None:
        """
        Replace the value at `path` with updater(old_value) and notify.

        Raises:
            KeyError: If the path does not exist in the state tree
        """
        parent, name = self._resolve(path)
        setattr(parent, name, updater(getattr(parent, name)))
        self._dispatch(path)

    def set(self, path: str, value: Any) -> None:
        """Shorthand for apply_mutation with a constant value."""
        self.apply_mutation(path, lambda _old: value)

    def _dispatch(self, path: str) -> None:
        handlers = self._handlers.get(path)
        if not handlers:
            logger.debug(f"No handler registered for {path}")
            return
        for handler in list(handlers):
            handler(self._state)

    def _resolve(self, path: str) -> tuple[Any, str]:
        *parents, name = path.split(".")
        node: Any = self._state
        for part in parents:
            node = self._child(node, part, path)
        self._child(node, name, path)
        return node, name

    @staticmethod
    def _child(node: Any, name: str, path: str) -> Any:
        if not is_dataclass(node) or name not in {f.name for f in fields(node)}:
            raise KeyError(f"Unknown state path: {path}")
        return getattr(node, name)

    # ─────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────

    def tracked_urls(self) -> list[str]:
        return [feed.url for feed in self._state.feeds]

    def find_post(self, post_id: str) -> Post | None:
        for post in self._state.posts:
            if post.id == post_id:
                return post
        return None

    def posts_for_feed(self, feed_id: str) -> list[Post]:
        return [post for post in self._state.posts if post.channel_id == feed_id]

    def prepend(self, path: str, items: Iterable[Any]) -> None:
        """Prepend items to the list at `path` in a single mutation."""
        new_items = list(items)
        self.apply_mutation(path, lambda old: [*new_items, *old])
