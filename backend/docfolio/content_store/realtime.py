# docfolio/content_store/realtime.py
"""
Row-level change notifications for content-store tables.

Changes are collected while a session flushes and are only published once
the surrounding transaction commits. A rollback discards them.

Subscribers are invoked synchronously from the committing session's
``after_commit`` hook, where no SQL may be emitted: callbacks must only
record the notification (e.g. put it on a queue) and re-query elsewhere.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "public"

_PENDING_KEY = "docfolio.pending_changes"


@dataclass(frozen=True)
class ChangeEvent:
    schema: str
    table: str
    type: str  # INSERT | UPDATE | DELETE
    record_id: Optional[str]


Callback = Callable[[ChangeEvent], None]


class Subscription:
    def __init__(self, feed: "ChangeFeed", key: Tuple[str, str], callback: Callback):
        self._feed = feed
        self.key = key
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._feed._remove(self)
            self.active = False


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: Dict[Tuple[str, str], List[Subscription]] = {}

    def subscribe(
        self,
        table: str,
        callback: Callback,
        *,
        schema: str = DEFAULT_SCHEMA,
    ) -> Subscription:
        subscription = Subscription(self, (schema, table), callback)
        with self._lock:
            self._subscribers.setdefault(subscription.key, []).append(subscription)
        logger.debug("Subscribed to %s.%s changes", schema, table)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.key, [])
            if subscription in subscribers:
                subscribers.remove(subscription)
        logger.debug("Unsubscribed from %s.%s changes", *subscription.key)

    def subscriber_count(self, table: str, *, schema: str = DEFAULT_SCHEMA) -> int:
        with self._lock:
            return len(self._subscribers.get((schema, table), []))

    def publish(self, change: ChangeEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers.get((change.schema, change.table), []))

        logger.debug("Publishing %s on %s.%s (%s)", change.type, change.schema, change.table, change.record_id)

        for subscription in subscribers:
            try:
                subscription.callback(change)
            except Exception:
                # One failing subscriber must not block the others
                logger.exception("Change subscriber failed for %s.%s", *subscription.key)


change_feed = ChangeFeed()


def _describe(obj, change_type: str) -> Optional[ChangeEvent]:
    table = getattr(type(obj), "__tablename__", None)
    if table is None:
        return None
    return ChangeEvent(
        schema=DEFAULT_SCHEMA,
        table=table,
        type=change_type,
        record_id=getattr(obj, "id", None),
    )


@event.listens_for(Session, "after_flush")
def collect_changes(session, flush_context):
    pending = session.info.setdefault(_PENDING_KEY, [])

    for obj in session.new:
        change = _describe(obj, "INSERT")
        if change:
            pending.append(change)

    for obj in session.dirty:
        if not session.is_modified(obj, include_collections=False):
            continue
        change = _describe(obj, "UPDATE")
        if change:
            pending.append(change)

    for obj in session.deleted:
        change = _describe(obj, "DELETE")
        if change:
            pending.append(change)


@event.listens_for(Session, "after_commit")
def publish_changes(session):
    pending = session.info.pop(_PENDING_KEY, [])
    for change in pending:
        change_feed.publish(change)


@event.listens_for(Session, "after_rollback")
def discard_changes(session):
    session.info.pop(_PENDING_KEY, None)
