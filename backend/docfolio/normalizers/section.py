from .richtext import normalize_richtext

def normalize_section(section, viewer=None, admin=False, include_content=False):
    data = {
        "id": section.id,
        "page_id": section.page_id,
        "slug": section.slug,
        "order": section.order,
        "title": section.title,
        "title_native": section.title_native,
        "image_url": section.image_url,
        "show_in_main_page": section.show_in_main_page,
        "description": normalize_richtext(section.description),
        "description_native": normalize_richtext(section.description_native),
    }

    if viewer is not None:
        data["display_title"] = viewer.localize(section, "title")
        data["display_description"] = normalize_richtext(viewer.localize(section, "description"))

    if include_content:
        data["content"] = normalize_richtext(section.content)
        data["content_native"] = normalize_richtext(section.content_native)
        if viewer is not None:
            data["display_content"] = normalize_richtext(viewer.localize(section, "content"))

    if admin:
        data["created_at"] = section.created_at.isoformat() if section.created_at else None
        data["updated_at"] = section.updated_at.isoformat() if section.updated_at else None

    return data


def normalize_featured_section(section, viewer):
    """Landing-page card: localized text plus the owning page's slug for links."""
    return {
        "id": section.id,
        "slug": section.slug,
        "page_id": section.page_id,
        "page_slug": section.page.slug if section.page else None,
        "order": section.order,
        "title": viewer.localize(section, "title"),
        "description": normalize_richtext(viewer.localize(section, "description")),
        "image_url": section.image_url,
    }
