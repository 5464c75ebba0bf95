from typing import Any, Dict, Iterable
from docfolio.domain import richtext
from docfolio.domain.invariants.exceptions import InvariantViolation

RICH_TEXT_FIELDS = {"description", "description_native", "content", "content_native"}
BOOLEAN_FIELDS = {"only_for_admin", "show_in_main_page"}


def richtext_value(value: Any):
    """Editor input -> serialized document (or None when empty)."""
    try:
        doc = richtext.coerce(value)
    except richtext.RichTextError as exc:
        raise InvariantViolation(f"Invalid rich text: {exc}") from exc
    return richtext.serialize(doc) if doc is not None else None


def clean_fields(data: Dict[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """
    Whitelist incoming fields and convert them to their stored form.

    Empty strings become None; rich text is serialized.
    """
    values: Dict[str, Any] = {}
    for field in allowed:
        if field not in data:
            continue

        value = data[field]
        if field in RICH_TEXT_FIELDS:
            value = richtext_value(value)
        elif field in BOOLEAN_FIELDS:
            value = bool(value)
        elif value == "":
            value = None

        values[field] = value
    return values
