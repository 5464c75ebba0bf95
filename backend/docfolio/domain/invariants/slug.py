import re

from slugify import slugify as _slugify

from .exceptions import InvariantViolation

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

def slugify(text):
    """
    Transliterate to ASCII, lowercase, and join words with single hyphens.
    """
    return _slugify(text or "", lowercase=True)

def assert_slug(slug):
    if not slug or not SLUG_PATTERN.match(slug):
        raise InvariantViolation(
            f"Slug must be lowercase letters, digits and single hyphens: {slug!r}"
        )
