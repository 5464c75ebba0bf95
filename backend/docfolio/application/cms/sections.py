from typing import Any, Dict, List
from flask import current_app
from werkzeug.exceptions import NotFound
from docfolio.content_store import ContentStore, ConstraintViolation, storage
from docfolio.domain.invariants.exceptions import InvariantViolation
from docfolio.domain.invariants.section import assert_section
from docfolio.domain.invariants.slug import slugify
from docfolio.models.section import Section
from .fields import clean_fields

SECTION_FIELDS = (
    "title",
    "title_native",
    "description",
    "description_native",
    "slug",
    "order",
    "content",
    "content_native",
    "image_url",
    "show_in_main_page",
)


def next_section_order(store: ContentStore, page_id: str) -> int:
    """One past the highest order on the page; 0 for the first section."""
    last = store.single("sections", eq={"page_id": page_id}, order=["-order"])
    return last.order + 1 if last else 0


def list_sections(store: ContentStore, page_id: str) -> List[Section]:
    return store.select("sections", eq={"page_id": page_id}, order=["order"])


def get_section(store: ContentStore, section_id: str) -> Section:
    section = store.single("sections", eq={"id": section_id})
    if not section:
        raise NotFound("Section not found")
    return section


def create_section(
    store: ContentStore,
    *,
    page_id: str,
    data: Dict[str, Any],
) -> Section:
    """
    Add a section to a page.

    Slug defaults to the slugified title, order to the end of the page.
    """
    page = store.single("pages", eq={"id": page_id})
    if not page:
        raise NotFound("Page not found")

    values = clean_fields(data, SECTION_FIELDS)
    if not values.get("slug"):
        values["slug"] = slugify(values.get("title"))
    if values.get("order") is None:
        values["order"] = next_section_order(store, page.id)
    values.setdefault("show_in_main_page", False)
    values["page_id"] = page.id

    assert_section(values)

    try:
        section = store.insert("sections", values)
    except ConstraintViolation as exc:
        raise ConstraintViolation("A section with this slug already exists on this page") from exc

    current_app.logger.info(f"Created section {section.id} on page {page.id}")
    return section


def update_section(
    store: ContentStore,
    *,
    section_id: str,
    data: Dict[str, Any],
) -> Section:
    section = get_section(store, section_id)

    values = clean_fields(data, SECTION_FIELDS)
    if not values:
        raise InvariantViolation("No valid fields provided for update")

    changed = {
        field: value
        for field, value in values.items()
        if getattr(section, field) != value
    }
    if not changed:
        return section

    merged = {field: getattr(section, field) for field in SECTION_FIELDS}
    merged.update(changed)
    assert_section(merged)

    previous_image = section.image_url

    try:
        store.update("sections", changed, eq={"id": section.id})
    except ConstraintViolation as exc:
        raise ConstraintViolation("A section with this slug already exists on this page") from exc

    if "image_url" in changed:
        storage.remove(storage.path_from_url(previous_image))

    current_app.logger.info(f"Updated section {section.id}: {sorted(changed)}")
    return section


def delete_section(store: ContentStore, *, section_id: str) -> None:
    section = get_section(store, section_id)
    image_path = storage.path_from_url(section.image_url)

    store.delete("sections", eq={"id": section.id})
    storage.remove(image_path)
    current_app.logger.info(f"Deleted section {section_id}")
