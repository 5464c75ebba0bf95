from .richtext import normalize_richtext
from .section import normalize_section

def normalize_page(page, viewer=None, admin=False, sections=None):
    data = {
        "id": page.id,
        "title": page.title,
        "title_native": page.title_native,
        "slug": page.slug,
        "parent_id": page.parent_id,
        "order": page.order,
        "only_for_admin": page.only_for_admin,
        "description": normalize_richtext(page.description),
        "description_native": normalize_richtext(page.description_native),
    }

    if viewer is not None:
        data["display_title"] = viewer.localize(page, "title")
        data["display_description"] = normalize_richtext(viewer.localize(page, "description"))

    if admin:
        data["created_at"] = page.created_at.isoformat() if page.created_at else None
        data["updated_at"] = page.updated_at.isoformat() if page.updated_at else None

    if sections is not None:
        data["sections"] = [
            normalize_section(s, viewer=viewer, admin=admin)
            for s in sections
        ]

    return data
