from typing import Any, Dict, Optional
from flask import current_app
from docfolio.content_store import ContentStore
from docfolio.domain.invariants.exceptions import InvariantViolation
from docfolio.domain.invariants.portfolio import normalize_quick_stats
from docfolio.models.portfolio_content import (
    DEFAULTS,
    LOCALIZED_FIELDS,
    SOCIAL_LINK_FIELDS,
    PortfolioContent,
)

PORTFOLIO_FIELDS = (
    "image_url",
    "years_of_experience",
    "quick_stats",
    *SOCIAL_LINK_FIELDS,
    *LOCALIZED_FIELDS,
    *(f"{field}_native" for field in LOCALIZED_FIELDS),
)


def get_portfolio_content(store: ContentStore) -> Optional[PortfolioContent]:
    return store.single("portfolio_content", order=["created_at"])


def save_portfolio_content(store: ContentStore, *, data: Dict[str, Any]) -> PortfolioContent:
    """
    Upsert the single profile row.

    Empty strings are stored as null; quick stats are validated and
    renumbered.
    """
    values: Dict[str, Any] = {}
    for field in PORTFOLIO_FIELDS:
        if field not in data:
            continue
        value = data[field]
        values[field] = None if value == "" else value

    if "quick_stats" in values:
        values["quick_stats"] = normalize_quick_stats(values["quick_stats"])

    if "years_of_experience" in values:
        years = values["years_of_experience"] or 0
        if not isinstance(years, int) or isinstance(years, bool) or years < 0:
            raise InvariantViolation("years_of_experience must be a non-negative integer.")
        values["years_of_experience"] = years

    content = get_portfolio_content(store)

    if content:
        store.update("portfolio_content", values, eq={"id": content.id})
        current_app.logger.info(f"Updated portfolio content {content.id}")
        return content

    initial = dict(DEFAULTS)
    initial.setdefault("quick_stats", [])
    initial.update({k: v for k, v in values.items() if v is not None})
    content = store.insert("portfolio_content", initial)
    current_app.logger.info(f"Created portfolio content {content.id}")
    return content
