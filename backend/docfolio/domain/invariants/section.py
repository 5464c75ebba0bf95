from .exceptions import InvariantViolation
from .slug import assert_slug

def assert_section(data):
    if not data.get("title"):
        raise InvariantViolation("Section title is required.")

    assert_slug(data.get("slug"))

    order = data.get("order", 0)
    if not isinstance(order, int) or isinstance(order, bool):
        raise InvariantViolation(f"Section order must be an integer: {order!r}")
