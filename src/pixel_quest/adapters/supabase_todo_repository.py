"""Supabase-backed todo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from pixel_quest.domain.todos import Priority, TodoRecord
from pixel_quest.services.todos import TodoRepository

_COLUMNS = "id, owner_id, text, completed, priority, created_at"


@dataclass
class SupabaseTodoRepository(TodoRepository):
    """Supabase implementation for todo records."""

    client: Client

    def create_todo(self, owner_id: UUID, text: str, priority: Priority) -> TodoRecord:
        """Insert a todo row and return it."""
        response = (
            self.client.table("todos")
            .insert(
                {
                    "owner_id": str(owner_id),
                    "text": text,
                    "completed": False,
                    "priority": priority.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create todo in Supabase")
        return _parse_row(response.data[0])

    def list_todos(self, owner_id: UUID, newest_first: bool) -> list[TodoRecord]:
        """Return an owner's todos ordered by insertion sequence."""
        response = (
            self.client.table("todos")
            .select(_COLUMNS)
            .eq("owner_id", str(owner_id))
            .order("seq", desc=newest_first)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def toggle_todo(self, owner_id: UUID, todo_id: UUID) -> TodoRecord | None:
        """Flip completion in a single UPDATE via the toggle_todo function."""
        response = self.client.rpc(
            "toggle_todo",
            {"p_todo_id": str(todo_id), "p_owner_id": str(owner_id)},
        ).execute()
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_todo(self, owner_id: UUID, todo_id: UUID) -> bool:
        """Delete a todo row owned by the caller."""
        response = (
            self.client.table("todos")
            .delete()
            .eq("id", str(todo_id))
            .eq("owner_id", str(owner_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> TodoRecord:
    return TodoRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["owner_id"])),
        text=str(row["text"]),
        completed=bool(row.get("completed", False)),
        priority=Priority(row.get("priority") or Priority.MEDIUM),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
