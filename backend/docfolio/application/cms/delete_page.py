from typing import List
from flask import current_app
from werkzeug.exceptions import NotFound
from docfolio.content_store import ContentStore
from docfolio.domain.invariants.page import descendant_ids
from .parents import page_parents


def delete_page(
    store: ContentStore,
    *,
    page_id: str,
) -> List[str]:
    """
    Hard-delete a page, every page below it and all of their sections.

    Returns the ids of the deleted pages.
    """
    page = store.single("pages", eq={"id": page_id})
    if not page:
        raise NotFound("Page not found")

    ids = [page.id, *descendant_ids(page.id, page_parents(store))]

    # Sections go with their page through the ORM cascade
    deleted = store.delete("pages", in_={"id": ids})

    current_app.logger.info(f"Deleted page {page_id} and {len(deleted) - 1} subpage(s)")
    return deleted
