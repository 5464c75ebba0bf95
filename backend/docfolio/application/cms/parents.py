from typing import Any, Dict
from docfolio.content_store import ContentStore
from docfolio.domain.invariants.page import descendant_ids


def page_parents(store: ContentStore) -> Dict[str, Any]:
    """id -> parent_id for every page."""
    return {page.id: page.parent_id for page in store.select("pages")}


def parent_options(store: ContentStore, *, page_id: str = None):
    """Pages that may be offered as parent: everything but the page and its subtree."""
    excluded = set()
    if page_id:
        excluded = {page_id, *descendant_ids(page_id, page_parents(store))}

    return [
        page for page in store.select("pages", order=["title"])
        if page.id not in excluded
    ]
