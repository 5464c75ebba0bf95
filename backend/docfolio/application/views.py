# docfolio/application/views.py
"""Read-side services behind the public pages."""
from typing import Any, Dict, List, Tuple

from docfolio.content_store import ContentStore
from docfolio.context import ViewerContext
from docfolio.models.page import Page
from docfolio.models.section import Section
from .cms.portfolio import get_portfolio_content


class RedirectTo(Exception):
    """The requested content does not exist (or is hidden); go elsewhere."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def _visible(page: Page, viewer: ViewerContext) -> bool:
    return viewer.is_authenticated or not page.only_for_admin


def landing(store: ContentStore, viewer: ViewerContext) -> Tuple[Any, List[Section]]:
    """Profile row plus sections featured on the landing page."""
    content = get_portfolio_content(store)
    featured = store.select("sections", eq={"show_in_main_page": True}, order=["order"])
    featured = [s for s in featured if s.page is not None and _visible(s.page, viewer)]
    return content, featured


def docs_index(store: ContentStore, viewer: ViewerContext) -> List[Page]:
    """Top-level pages, newest first."""
    filters: Dict[str, Any] = {} if viewer.is_authenticated else {"only_for_admin": False}
    return store.select("pages", eq=filters, is_null=["parent_id"], order=["-created_at"])


def page_view(store: ContentStore, viewer: ViewerContext, slug: str) -> Tuple[Page, List[Section]]:
    page = store.single("pages", eq={"slug": slug})
    if not page:
        raise RedirectTo("/")

    if not _visible(page, viewer):
        raise RedirectTo("/login")

    sections = store.select("sections", eq={"page_id": page.id}, order=["order"])
    return page, sections


def section_view(store: ContentStore, viewer: ViewerContext, page_slug: str, section_slug: str) -> Tuple[Page, Section]:
    page = store.single("pages", eq={"slug": page_slug})
    if not page:
        raise RedirectTo("/")

    if not _visible(page, viewer):
        raise RedirectTo("/login")

    section = store.single("sections", eq={"page_id": page.id, "slug": section_slug})
    if not section:
        raise RedirectTo(f"/{page_slug}")

    return page, section
