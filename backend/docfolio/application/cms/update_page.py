from typing import Any, Dict
from flask import current_app
from werkzeug.exceptions import NotFound
from docfolio.content_store import ContentStore, ConstraintViolation
from docfolio.domain.invariants.exceptions import InvariantViolation
from docfolio.domain.invariants.page import assert_page, assert_parent
from docfolio.models.page import Page
from .create_page import PAGE_FIELDS
from .fields import clean_fields
from .parents import page_parents


def update_page(
    store: ContentStore,
    *,
    page_id: str,
    data: Dict[str, Any],
) -> Page:
    """
    Update mutable fields on a page.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op requests
    - Invariants always revalidated
    - Last write wins
    """
    page = store.single("pages", eq={"id": page_id})
    if not page:
        raise NotFound("Page not found")

    values = clean_fields(data, PAGE_FIELDS)
    if not values:
        raise InvariantViolation("No valid fields provided for update")

    changed = {
        field: value
        for field, value in values.items()
        if getattr(page, field) != value
    }
    if not changed:
        return page

    merged = {field: getattr(page, field) for field in PAGE_FIELDS}
    merged.update(changed)
    assert_page(merged)

    if "parent_id" in changed:
        assert_parent(page.id, changed["parent_id"], page_parents(store))

    try:
        store.update("pages", changed, eq={"id": page.id})
    except ConstraintViolation as exc:
        raise ConstraintViolation("A page with this slug already exists") from exc

    current_app.logger.info(f"Updated page {page.id}: {sorted(changed)}")
    return page
