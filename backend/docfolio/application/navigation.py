# docfolio/application/navigation.py
"""
Navigation menu data.

The menu is always rebuilt from a full re-query of the pages table. A
change notification carries no data that is merged into a previous
tree; it only signals that the tree must be fetched again.
"""
from __future__ import annotations

import queue
from typing import List, Optional

from flask import current_app

from docfolio.content_store import ChangeEvent, ContentStore, ContentStoreError
from docfolio.content_store.client import column_values
from docfolio.context import ViewerContext
from docfolio.domain.navigation import NavNode, build_nav_tree

NAV_COLUMNS = ("id", "title", "title_native", "slug", "parent_id", "order", "only_for_admin")


def fetch_navigation(store: ContentStore, viewer: ViewerContext) -> List[NavNode]:
    """
    Access-filtered pages as a navigation forest.

    Admin-only pages are only visible to signed-in viewers. A failed
    query is logged and yields an empty menu.
    """
    filters = {} if viewer.is_authenticated else {"only_for_admin": False}

    try:
        rows = store.select("pages", eq=filters, order=["order"])
    except ContentStoreError:
        current_app.logger.error("Navigation: error fetching pages")
        return []

    pages = [column_values(row, NAV_COLUMNS) for row in rows]
    tree = build_nav_tree(pages)
    current_app.logger.debug(f"Navigation: built tree with {len(tree)} root(s) from {len(pages)} page(s)")
    return tree


class NavigationFeed:
    """
    Live navigation for one viewer.

    Subscribes to page changes on creation; `next_tree` waits for the
    next change and answers with a freshly fetched tree. Bursts of
    changes that arrive before the re-fetch are folded into one.
    """

    def __init__(self, store: ContentStore, viewer: ViewerContext):
        self.store = store
        self.viewer = viewer
        self._notifications: "queue.Queue[ChangeEvent]" = queue.Queue()
        self._subscription = store.subscribe("pages", self._on_change)

    def _on_change(self, change: ChangeEvent) -> None:
        self._notifications.put(change)

    def current_tree(self) -> List[NavNode]:
        tree = fetch_navigation(self.store, self.viewer)
        self.store.release()
        return tree

    def next_tree(self, timeout: Optional[float] = None) -> Optional[List[NavNode]]:
        """The rebuilt tree after the next change, or None on timeout."""
        try:
            change = self._notifications.get(timeout=timeout)
        except queue.Empty:
            return None

        current_app.logger.debug(f"Navigation: received {change.type} on {change.table}, refreshing")

        while True:
            try:
                self._notifications.get_nowait()
            except queue.Empty:
                break

        return self.current_tree()

    def close(self) -> None:
        self._subscription.unsubscribe()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
