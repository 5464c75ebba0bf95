from .client import ContentStore, TABLES
from .errors import ContentStoreError, ConstraintViolation, StorageError
from .realtime import ChangeEvent, ChangeFeed, Subscription, change_feed
