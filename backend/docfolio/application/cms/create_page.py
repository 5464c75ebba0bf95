from typing import Any, Dict
from flask import current_app
from docfolio.content_store import ContentStore, ConstraintViolation
from docfolio.domain.invariants.page import assert_page, assert_parent
from docfolio.domain.invariants.slug import slugify
from docfolio.models.page import Page
from .fields import clean_fields
from .parents import page_parents

PAGE_FIELDS = (
    "title",
    "title_native",
    "description",
    "description_native",
    "slug",
    "parent_id",
    "order",
    "only_for_admin",
)


def create_page(
    store: ContentStore,
    *,
    data: Dict[str, Any],
) -> Page:
    """
    Create a page.

    Edge cases handled:
    - Missing title
    - Slug derived from the title when not given
    - Unknown parent page
    - Duplicate slug
    """
    values = clean_fields(data, PAGE_FIELDS)

    if not values.get("slug"):
        values["slug"] = slugify(values.get("title"))
    values.setdefault("order", 0)
    values.setdefault("only_for_admin", False)

    assert_page(values)
    assert_parent(None, values.get("parent_id"), page_parents(store))

    try:
        page = store.insert("pages", values)
    except ConstraintViolation as exc:
        raise ConstraintViolation("A page with this slug already exists") from exc

    current_app.logger.info(f"Created page {page.id} ({page.slug})")
    return page
