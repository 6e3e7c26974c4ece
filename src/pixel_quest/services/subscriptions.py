"""Publish/subscribe registry for live queries."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from pixel_quest.domain.sessions import SessionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A committed mutation on an owner's records."""

    owner_id: UUID
    kind: str
    todo_id: UUID


@dataclass
class Subscription:
    """Handle returned to a subscriber."""

    id: UUID
    session: SessionRecord
    refresh: Callable[[], None]
    registry: "SubscriptionRegistry"
    on_close: Callable[[], None] | None = None

    def unsubscribe(self) -> None:
        """Stop receiving updates."""
        self.registry.remove(self.id)


@dataclass
class SubscriptionRegistry:
    """Tracks live subscriptions and re-runs them after each commit."""

    _subscriptions: dict[UUID, Subscription] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def register(
        self,
        session: SessionRecord,
        refresh: Callable[[], None],
        on_close: Callable[[], None] | None = None,
    ) -> Subscription:
        """Register a refresh callback scoped to a session.

        ``on_close`` runs when the session ends, not on a plain unsubscribe.
        """
        subscription = Subscription(
            id=uuid4(),
            session=session,
            refresh=refresh,
            registry=self,
            on_close=on_close,
        )
        with self._lock:
            self._subscriptions[subscription.id] = subscription
        return subscription

    def remove(self, subscription_id: UUID) -> None:
        """Drop a subscription if it is still registered."""
        with self._lock:
            self._subscriptions.pop(subscription_id, None)

    def close_session(self, session_id: UUID) -> int:
        """Drop every subscription held by a session."""
        with self._lock:
            stale = [
                subscription
                for subscription in self._subscriptions.values()
                if subscription.session.id == session_id
            ]
            for subscription in stale:
                del self._subscriptions[subscription.id]
        for subscription in stale:
            if subscription.on_close is None:
                continue
            try:
                subscription.on_close()
            except Exception:
                logger.exception(
                    "Subscriber close hook failed",
                    extra={"subscription_id": str(subscription.id)},
                )
        return len(stale)

    def count(self) -> int:
        """Return the number of live subscriptions."""
        with self._lock:
            return len(self._subscriptions)

    def publish(self, event: ChangeEvent) -> None:
        """Re-run every subscription owned by the event's owner."""
        with self._lock:
            targets = [
                subscription
                for subscription in self._subscriptions.values()
                if subscription.session.owner_id == event.owner_id
            ]
        for subscription in targets:
            try:
                subscription.refresh()
            except Exception:
                logger.exception(
                    "Subscriber refresh failed",
                    extra={
                        "subscription_id": str(subscription.id),
                        "event": event.kind,
                    },
                )
