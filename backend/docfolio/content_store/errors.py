class ContentStoreError(Exception):
    """Raised when a query or mutation against the content store fails."""


class ConstraintViolation(ContentStoreError):
    """A mutation was rejected by a database constraint (e.g. duplicate slug)."""


class StorageError(Exception):
    """Raised when a blob cannot be stored."""
