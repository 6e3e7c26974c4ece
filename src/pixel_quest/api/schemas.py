"""Pydantic request and response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from pixel_quest.domain.sessions import CredentialKind, PasswordFlow, SessionRecord
from pixel_quest.domain.todos import Priority, TodoRecord, TodoStats


class SignInRequest(BaseModel):
    """Sign-in form payload."""

    kind: CredentialKind
    email: str | None = None
    password: str | None = None
    flow: PasswordFlow = PasswordFlow.SIGN_IN


class SessionResponse(BaseModel):
    """Session details returned to the client."""

    session_id: UUID
    owner_id: UUID
    kind: CredentialKind
    created_at: datetime

    @classmethod
    def from_record(cls, session: SessionRecord) -> "SessionResponse":
        return cls(
            session_id=session.id,
            owner_id=session.owner_id,
            kind=session.kind,
            created_at=session.created_at,
        )


class SignInResponse(SessionResponse):
    """Session details plus the bearer token."""

    token: str


class TodoCreateRequest(BaseModel):
    """Payload for creating a todo."""

    text: str = Field(min_length=1)
    priority: Priority | None = None


class TodoResponse(BaseModel):
    """Todo record payload."""

    id: UUID
    text: str
    completed: bool
    priority: Priority
    created_at: datetime

    @classmethod
    def from_record(cls, record: TodoRecord) -> "TodoResponse":
        return cls(
            id=record.id,
            text=record.text,
            completed=record.completed,
            priority=record.priority,
            created_at=record.created_at,
        )


class StatsResponse(BaseModel):
    """Todo counts payload."""

    total: int
    completed: int
    pending: int

    @classmethod
    def from_stats(cls, stats: TodoStats) -> "StatsResponse":
        return cls(total=stats.total, completed=stats.completed, pending=stats.pending)
