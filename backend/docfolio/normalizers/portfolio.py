from docfolio.models.portfolio_content import DEFAULTS, LOCALIZED_FIELDS, SOCIAL_LINK_FIELDS
from .section import normalize_featured_section

LABEL_FIELDS = (
    "portfolio_label",
    "portfolio_label_native",
    "native_language_label",
    "native_language_label_native",
)


def _get(content, field):
    value = getattr(content, field, None) if content is not None else None
    if value is None or value == "":
        return DEFAULTS.get(field)
    return value


def normalize_portfolio_admin(content):
    """Every stored field, null where unset, with defaults filled in."""
    data = {"id": content.id if content is not None else None}
    for field in LOCALIZED_FIELDS:
        data[field] = _get(content, field)
        data[f"{field}_native"] = _get(content, f"{field}_native")
    for field in SOCIAL_LINK_FIELDS:
        data[field] = _get(content, field)
    data["image_url"] = _get(content, "image_url")
    data["years_of_experience"] = _get(content, "years_of_experience") or 0
    data["quick_stats"] = list(_get(content, "quick_stats") or [])
    return data


def normalize_labels(content, viewer=None):
    data = {field: _get(content, field) for field in LABEL_FIELDS}
    if viewer is not None:
        data["display_portfolio_label"] = (
            data["portfolio_label_native"] if viewer.language == "native" else data["portfolio_label"]
        )
        data["display_language_label"] = (
            data["native_language_label_native"] if viewer.language == "native" else "English"
        )
    return data


def normalize_quick_stat(stat, viewer):
    text = stat.get("text")
    if viewer.language == "native" and stat.get("text_native"):
        text = stat["text_native"]
    return {
        "icon": stat.get("icon"),
        "color": stat.get("color"),
        "order": stat.get("order", 0),
        "text": text,
    }


def normalize_portfolio(content, viewer, featured_sections=()):
    """Localized landing page payload."""
    defaults = normalize_portfolio_admin(content)
    data = {
        "image_url": defaults["image_url"],
        "years_of_experience": defaults["years_of_experience"],
        "links": {field: defaults[field] for field in SOCIAL_LINK_FIELDS if defaults[field]},
    }

    for field in LOCALIZED_FIELDS:
        data[field] = viewer.localize(defaults, field)

    stats = sorted(defaults["quick_stats"], key=lambda s: s.get("order", 0))
    data["quick_stats"] = [normalize_quick_stat(s, viewer) for s in stats]
    data["featured_sections"] = [
        normalize_featured_section(s, viewer) for s in featured_sections
    ]
    return data
