"""Todo store operations scoped to a session."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol
from uuid import UUID

from pixel_quest.domain.errors import InvalidInputError, NotFoundError
from pixel_quest.domain.sessions import SessionRecord
from pixel_quest.domain.todos import Priority, TodoRecord, TodoStats
from pixel_quest.services.subscriptions import (
    ChangeEvent,
    Subscription,
    SubscriptionRegistry,
)

logger = logging.getLogger(__name__)

QueryName = Literal["list", "stats"]


class TodoRepository(Protocol):
    """Persistence interface for todo records."""

    def create_todo(self, owner_id: UUID, text: str, priority: Priority) -> TodoRecord:
        """Insert a todo and return it."""

    def list_todos(self, owner_id: UUID, newest_first: bool) -> list[TodoRecord]:
        """Return an owner's todos in creation order."""

    def toggle_todo(self, owner_id: UUID, todo_id: UUID) -> TodoRecord | None:
        """Atomically flip completion, returning None when missing."""

    def delete_todo(self, owner_id: UUID, todo_id: UUID) -> bool:
        """Delete a todo, returning False when missing."""


@dataclass
class TodoService:
    """Dispatch layer between callers and the todo repository."""

    repository: TodoRepository
    subscriptions: SubscriptionRegistry
    newest_first: bool = False

    def create(
        self, session: SessionRecord, text: str, priority: str | None = None
    ) -> TodoRecord:
        """Create a todo with trimmed text and medium priority by default."""
        cleaned = text.strip() if isinstance(text, str) else ""
        if not cleaned:
            raise InvalidInputError("Todo text must not be empty.")
        resolved = _parse_priority(priority)
        record = self.repository.create_todo(session.owner_id, cleaned, resolved)
        logger.info(
            "Todo created",
            extra={"todo_id": str(record.id), "owner_id": str(session.owner_id)},
        )
        self._publish(session, "create", record.id)
        return record

    def toggle(self, session: SessionRecord, todo_id: UUID) -> TodoRecord:
        """Flip the completed flag of a todo."""
        record = self.repository.toggle_todo(session.owner_id, todo_id)
        if record is None:
            raise NotFoundError(f"Todo {todo_id} not found.")
        logger.info(
            "Todo toggled",
            extra={"todo_id": str(todo_id), "completed": record.completed},
        )
        self._publish(session, "toggle", todo_id)
        return record

    def remove(self, session: SessionRecord, todo_id: UUID) -> None:
        """Permanently delete a todo."""
        if not self.repository.delete_todo(session.owner_id, todo_id):
            raise NotFoundError(f"Todo {todo_id} not found.")
        logger.info("Todo removed", extra={"todo_id": str(todo_id)})
        self._publish(session, "remove", todo_id)

    def list_todos(self, session: SessionRecord) -> list[TodoRecord]:
        """Return the caller's todos."""
        return self.repository.list_todos(session.owner_id, self.newest_first)

    def stats(self, session: SessionRecord) -> TodoStats:
        """Return total, completed and pending counts."""
        return TodoStats.from_records(self.list_todos(session))

    def snapshot(self, session: SessionRecord) -> tuple[list[TodoRecord], TodoStats]:
        """Return the list and its stats from one read."""
        records = self.list_todos(session)
        return records, TodoStats.from_records(records)

    def subscribe(
        self,
        session: SessionRecord,
        query: QueryName,
        callback: Callable[[object], None],
        on_close: Callable[[], None] | None = None,
    ) -> Subscription:
        """Deliver the query result now and after every committed mutation.

        ``on_close`` is called once if the session signs out while subscribed.
        """
        evaluators: dict[str, Callable[[SessionRecord], object]] = {
            "list": self.list_todos,
            "stats": self.stats,
        }
        evaluate = evaluators.get(query)
        if evaluate is None:
            raise InvalidInputError(f"Unknown query: {query}")

        def refresh() -> None:
            callback(evaluate(session))

        subscription = self.subscriptions.register(session, refresh, on_close)
        try:
            refresh()
        except Exception:
            subscription.unsubscribe()
            raise
        return subscription

    def _publish(self, session: SessionRecord, kind: str, todo_id: UUID) -> None:
        self.subscriptions.publish(
            ChangeEvent(owner_id=session.owner_id, kind=kind, todo_id=todo_id)
        )


def _parse_priority(raw: str | None) -> Priority:
    if raw is None:
        return Priority.MEDIUM
    try:
        return Priority(raw)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown priority: {raw}") from exc
