"""Domain models for todo records."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Priority(StrEnum):
    """Priority levels a todo can carry."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class TodoRecord:
    """Represents a persisted todo."""

    id: UUID
    owner_id: UUID
    text: str
    completed: bool
    priority: Priority
    created_at: datetime


@dataclass(frozen=True)
class TodoStats:
    """Aggregate counts over a todo list."""

    total: int
    completed: int
    pending: int

    @classmethod
    def from_records(cls, records: list[TodoRecord]) -> "TodoStats":
        """Count totals from a single read of the list."""
        total = len(records)
        completed = sum(1 for record in records if record.completed)
        return cls(total=total, completed=completed, pending=total - completed)
