class InvariantViolation(Exception):
    """Raised when content would break a domain rule."""
