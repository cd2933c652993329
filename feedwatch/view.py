"""
Renderer - Keep the page in step with the state tree.

The page is an HTML document held in memory (BeautifulSoup). Each watched state
path has one handler that updates only the region tied to that path:

    form                    -> input validity and feedback text
    loading_process.status  -> submit button, input and feedback
    feeds                   -> .feeds container
    posts, seen_posts       -> .posts container
    modal.post_id           -> #modal content
"""

import logging
from typing import Callable

from bs4 import BeautifulSoup, Tag

from .locales import DEFAULT_LANGUAGE, error_message, translate
from .models import Feed, Post
from .store import LoadingStatus, State, Store

logger = logging.getLogger(__name__)

INDEX_HTML = """<!DOCTYPE html>
<html lang="{lng}">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>RSS</title>
  <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css">
</head>
<body class="d-flex flex-column min-vh-100">
  <main class="flex-grow-1">
    <section class="container-fluid bg-dark p-5">
      <div class="row">
        <div class="col-md-10 col-lg-8 mx-auto text-white">
          <h1 class="display-3 mb-0">RSS</h1>
          <form action="/" method="post" class="rss-form text-body">
            <div class="row">
              <div class="col">
                <div class="form-floating">
                  <input id="url-input" name="url" type="text" autocomplete="off"
                         class="form-control w-100" data-testid="rss-url-field">
                  <label for="url-input"></label>
                </div>
              </div>
              <div class="col-auto">
                <button type="submit" class="h-100 btn btn-lg btn-primary px-sm-5"
                        data-testid="rss-btn-submit"></button>
              </div>
            </div>
          </form>
          <p class="feedback m-0 position-absolute small"></p>
        </div>
      </div>
    </section>
    <section class="container-fluid container-xxl p-5">
      <div class="row">
        <div class="col-md-10 col-lg-8 order-1 mx-auto posts"></div>
        <div class="col-md-10 col-lg-4 mx-auto order-0 order-lg-1 feeds"></div>
      </div>
    </section>
  </main>
  <div class="modal" id="modal" tabindex="-1" role="dialog">
    <div class="modal-dialog" role="document">
      <div class="modal-content">
        <div class="modal-header">
          <h5 class="modal-title"></h5>
        </div>
        <div class="modal-body text-break"></div>
        <div class="modal-footer">
          <a class="btn btn-primary full-article" href="#" role="button"
             target="_blank" rel="noopener noreferrer"></a>
          <form action="/modal/close" method="post" class="modal-close">
            <button type="submit" class="btn btn-secondary"></button>
          </form>
        </div>
      </div>
    </div>
  </div>
</body>
</html>
"""


class Page:
    """The rendered document and the elements handlers write to."""

    def __init__(self, lng: str = DEFAULT_LANGUAGE):
        self.soup = BeautifulSoup(INDEX_HTML.replace("{lng}", lng), "html.parser")
        self.form = self._select(".rss-form")
        self.input = self._select(".rss-form input")
        self.submit = self._select('.rss-form button[type="submit"]')
        self.feedback = self._select(".feedback")
        self.feeds_container = self._select(".feeds")
        self.posts_container = self._select(".posts")
        self.modal = self._select("#modal")

        self.input["placeholder"] = translate("form.placeholder", lng)
        self._select('label[for="url-input"]').string = translate("form.placeholder", lng)
        self.submit.string = translate("form.submit", lng)
        self._select(".modal-footer .full-article").string = translate("modal.readFull", lng)
        self._select(".modal-close button").string = translate("modal.close", lng)

    def _select(self, selector: str) -> Tag:
        element = self.soup.select_one(selector)
        if element is None:
            raise LookupError(f"Page has no element matching {selector!r}")
        return element

    def new_tag(self, name: str, text: str | None = None, **attrs: str) -> Tag:
        tag = self.soup.new_tag(name, attrs=attrs)
        if text is not None:
            tag.string = text
        return tag

    def html(self) -> str:
        return str(self.soup)


def add_class(element: Tag, name: str) -> None:
    classes = element.get("class", [])
    if name not in classes:
        element["class"] = [*classes, name]


def remove_class(element: Tag, name: str) -> None:
    element["class"] = [c for c in element.get("class", []) if c != name]


class View:
    """Render handlers bound to a page."""

    def __init__(self, page: Page | None = None, lng: str = DEFAULT_LANGUAGE):
        self.lng = lng
        self.page = page or Page(lng)
        self._status_handlers: dict[LoadingStatus, Callable[[State], None]] = {
            LoadingStatus.IDLE: self._render_idle,
            LoadingStatus.LOADING: self._render_loading,
            LoadingStatus.FAILED: self._render_failed,
        }

    def handlers(self) -> dict[str, Callable[[State], None]]:
        """Watched state paths and the handler for each."""
        return {
            "form": self.render_form,
            "loading_process.status": self.render_loading_status,
            "feeds": self.render_feeds,
            "posts": self.render_posts,
            "seen_posts": self.render_posts,
            "modal.post_id": self.render_modal,
        }

    def watch(self, store: Store) -> Callable[[], None]:
        """Subscribe every handler to its path; returns an unsubscribe-all callable."""
        unsubscribers = [
            store.subscribe(path, handler) for path, handler in self.handlers().items()
        ]

        def unwatch() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return unwatch

    def html(self) -> str:
        return self.page.html()

    # ─────────────────────────────────────────────────────────────
    # Form
    # ─────────────────────────────────────────────────────────────

    def render_form(self, state: State) -> None:
        page = self.page
        page.input["value"] = state.form.value

        if state.form.valid:
            remove_class(page.input, "is-invalid")
            return

        add_class(page.input, "is-invalid")
        remove_class(page.feedback, "text-success")
        add_class(page.feedback, "text-danger")
        page.feedback.string = error_message(state.form.error, self.lng)

    # ─────────────────────────────────────────────────────────────
    # Loading process
    # ─────────────────────────────────────────────────────────────

    def render_loading_status(self, state: State) -> None:
        status = state.loading_process.status
        if status not in self._status_handlers:
            raise ValueError(f"Unknown loading_process status: {status!r}")
        self._status_handlers[status](state)

    def _render_idle(self, state: State) -> None:
        page = self.page
        self._unlock_form()
        page.input["value"] = ""
        remove_class(page.feedback, "text-danger")
        add_class(page.feedback, "text-success")
        page.feedback.string = translate("loading.success", self.lng)

    def _render_failed(self, state: State) -> None:
        page = self.page
        self._unlock_form()
        remove_class(page.feedback, "text-success")
        add_class(page.feedback, "text-danger")
        page.feedback.string = error_message(state.loading_process.error, self.lng)

    def _render_loading(self, state: State) -> None:
        page = self.page
        page.submit["disabled"] = ""
        page.input["readonly"] = ""
        remove_class(page.feedback, "text-success")
        remove_class(page.feedback, "text-danger")
        page.feedback.clear()

    def _unlock_form(self) -> None:
        del self.page.submit["disabled"]
        del self.page.input["readonly"]

    # ─────────────────────────────────────────────────────────────
    # Lists
    # ─────────────────────────────────────────────────────────────

    def _card(self, title_key: str) -> tuple[Tag, Tag]:
        """Build an empty list card; returns (card, list element)."""
        page = self.page
        card = page.new_tag("div", **{"class": "card border-0"})
        body = page.new_tag("div", **{"class": "card-body"})
        body.append(page.new_tag("h2", translate(title_key, self.lng), **{"class": "card-title h4"}))
        card.append(body)
        items = page.new_tag("ul", **{"class": "list-group border-0 rounded-0"})
        card.append(items)
        return card, items

    def _feed_item(self, feed: Feed) -> Tag:
        page = self.page
        item = page.new_tag("li", **{"class": "list-group-item border-0 border-end-0"})
        item.append(page.new_tag("h3", feed.title, **{"class": "h6 m-0"}))
        item.append(page.new_tag("p", feed.description, **{"class": "m-0 small text-black-50"}))
        return item

    def _post_item(self, post: Post, seen: bool) -> Tag:
        page = self.page
        item = page.new_tag(
            "li",
            **{"class": "list-group-item d-flex justify-content-between align-items-start border-0 border-end-0"},
        )
        item.append(page.new_tag(
            "a",
            post.title,
            href=f"/posts/{post.id}/visit",
            target="_blank",
            rel="noopener noreferrer",
            **{
                "class": "fw-normal link-secondary" if seen else "fw-bold",
                "data-id": post.id,
            },
        ))
        preview = page.new_tag("form", method="post", action=f"/posts/{post.id}/open")
        preview.append(page.new_tag(
            "button",
            translate("posts.preview", self.lng),
            type="submit",
            **{"class": "btn btn-outline-primary btn-sm", "data-id": post.id},
        ))
        item.append(preview)
        return item

    def render_feeds(self, state: State) -> None:
        card, items = self._card("feeds.title")
        for feed in state.feeds:
            items.append(self._feed_item(feed))
        self.page.feeds_container.clear()
        self.page.feeds_container.append(card)

    def render_posts(self, state: State) -> None:
        card, items = self._card("posts.title")
        for post in state.posts:
            items.append(self._post_item(post, post.id in state.seen_posts))
        self.page.posts_container.clear()
        self.page.posts_container.append(card)

    # ─────────────────────────────────────────────────────────────
    # Modal
    # ─────────────────────────────────────────────────────────────

    def render_modal(self, state: State) -> None:
        post_id = state.modal.post_id
        post = None
        if post_id is not None:
            post = next((p for p in state.posts if p.id == post_id), None)
            if post is None:
                logger.warning(f"Selected post {post_id} is not in the post list")

        modal = self.page.modal
        title = modal.select_one(".modal-title")
        body = modal.select_one(".modal-body")
        link = modal.select_one(".full-article")

        if post is None:
            title.clear()
            body.clear()
            link["href"] = "#"
            remove_class(modal, "show")
            remove_class(modal, "d-block")
            return

        title.string = post.title
        body.string = post.description
        link["href"] = post.link
        # No Bootstrap JS on the page, so display is set here
        add_class(modal, "show")
        add_class(modal, "d-block")
