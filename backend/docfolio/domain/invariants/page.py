from .exceptions import InvariantViolation
from .slug import assert_slug

def assert_page(data):
    if not data.get("title"):
        raise InvariantViolation("Page title is required.")

    assert_slug(data.get("slug"))

    order = data.get("order", 0)
    if not isinstance(order, int) or isinstance(order, bool):
        raise InvariantViolation(f"Page order must be an integer: {order!r}")

def assert_parent(page_id, parent_id, parents_by_id):
    """
    parent_id must name an existing page, and a page must not become
    its own ancestor.

    parents_by_id maps every page id to its parent_id.
    """
    if parent_id is None:
        return

    if parent_id not in parents_by_id:
        raise InvariantViolation(f"Parent page {parent_id} does not exist.")

    seen = set()
    current = parent_id
    while current is not None and current not in seen:
        if current == page_id:
            raise InvariantViolation("A page cannot be its own ancestor.")
        seen.add(current)
        current = parents_by_id.get(current)

def descendant_ids(page_id, parents_by_id):
    """All ids below page_id, breadth first."""
    children = {}
    for child_id, parent_id in parents_by_id.items():
        children.setdefault(parent_id, []).append(child_id)

    found = []
    seen = {page_id}
    queue = [page_id]
    while queue:
        current = queue.pop(0)
        for child_id in children.get(current, []):
            if child_id not in seen:
                seen.add(child_id)
                found.append(child_id)
                queue.append(child_id)
    return found
