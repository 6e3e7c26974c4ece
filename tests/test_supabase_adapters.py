"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from types import SimpleNamespace
from uuid import uuid4

import pytest
from supabase import AuthError

from pixel_quest.adapters.supabase_identity_provider import SupabaseIdentityProvider
from pixel_quest.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from pixel_quest.adapters.supabase_todo_repository import SupabaseTodoRepository
from pixel_quest.domain.errors import InvalidCredentialsError
from pixel_quest.domain.sessions import CredentialKind
from pixel_quest.domain.todos import Priority


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeQuery:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "delete": [],
            "rpc": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeQuery":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def is_(self, column: str, value) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeQuery":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeQuery] = field(default_factory=dict)
    rpc_calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def table(self, name: str) -> FakeQuery:
        if name not in self.tables:
            self.tables[name] = FakeQuery(name=name)
        return self.tables[name]

    def rpc(self, name: str, params: dict[str, object]) -> FakeQuery:
        self.rpc_calls.append((name, params))
        query = self.table(f"rpc:{name}")
        query._action = "rpc"
        return query


def _todo_row(owner_id, **overrides) -> dict[str, object]:  # type: ignore[no-untyped-def]
    row: dict[str, object] = {
        "id": str(uuid4()),
        "owner_id": str(owner_id),
        "text": "Buy milk",
        "completed": False,
        "priority": "high",
        "created_at": "2026-01-05T10:00:00+00:00",
    }
    row.update(overrides)
    return row


def test_supabase_todo_repository_create_and_list() -> None:
    client = FakeSupabaseClient()
    owner_id = uuid4()
    todos_table = client.table("todos")
    row = _todo_row(owner_id)
    todos_table.queue("insert", [row])
    todos_table.queue("select", [row, _todo_row(owner_id, priority=None)])

    repository = SupabaseTodoRepository(client)
    created = repository.create_todo(owner_id, "Buy milk", Priority.HIGH)
    listed = repository.list_todos(owner_id, newest_first=True)

    assert todos_table.last_payload == {
        "owner_id": str(owner_id),
        "text": "Buy milk",
        "completed": False,
        "priority": "high",
    }
    assert created.priority == Priority.HIGH
    assert [todo.priority for todo in listed] == [Priority.HIGH, Priority.MEDIUM]
    assert todos_table.last_order == ("seq", True)
    assert ("owner_id", str(owner_id)) in todos_table.last_filters


def test_supabase_todo_repository_create_without_row_raises() -> None:
    repository = SupabaseTodoRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_todo(uuid4(), "Buy milk", Priority.LOW)


def test_supabase_todo_repository_toggle_uses_rpc() -> None:
    client = FakeSupabaseClient()
    owner_id = uuid4()
    row = _todo_row(owner_id, completed=True)
    client.table("rpc:toggle_todo").queue("rpc", [row])

    repository = SupabaseTodoRepository(client)
    toggled = repository.toggle_todo(owner_id, uuid4())
    missing = repository.toggle_todo(owner_id, uuid4())

    assert toggled is not None
    assert toggled.completed is True
    assert missing is None
    name, params = client.rpc_calls[0]
    assert name == "toggle_todo"
    assert params["p_owner_id"] == str(owner_id)


def test_supabase_todo_repository_delete_reports_missing() -> None:
    client = FakeSupabaseClient()
    owner_id = uuid4()
    todos_table = client.table("todos")
    todos_table.queue("delete", [_todo_row(owner_id)])

    repository = SupabaseTodoRepository(client)

    assert repository.delete_todo(owner_id, uuid4()) is True
    assert repository.delete_todo(owner_id, uuid4()) is False


def test_supabase_session_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    sessions_table = client.table("app_sessions")
    row = {
        "id": str(uuid4()),
        "owner_id": str(uuid4()),
        "kind": "anonymous",
        "created_at": "2026-01-05T10:00:00+00:00",
    }
    sessions_table.queue("insert", [row])
    sessions_table.queue("select", [row])

    repository = SupabaseSessionRepository(client)
    created = repository.create_session(uuid4(), CredentialKind.ANONYMOUS, "digest")
    fetched = repository.get_active_session("digest")
    repository.revoke_session(created.id)

    assert str(created.id) == row["id"]
    assert fetched is not None
    assert fetched.kind == CredentialKind.ANONYMOUS
    assert ("revoked_at", "null") in sessions_table.last_filters
    assert "revoked_at" in sessions_table.last_payload  # type: ignore[operator]
    assert repository.get_active_session("unknown") is None


class _RejectedAuth(AuthError):
    def __init__(self) -> None:
        Exception.__init__(self, "Invalid login credentials")


@dataclass
class FakeAuth:
    user_id: str = field(default_factory=lambda: str(uuid4()))
    reject: bool = False
    identities: list[object] = field(default_factory=lambda: [object()])

    def _response(self) -> SimpleNamespace:
        return SimpleNamespace(
            user=SimpleNamespace(id=self.user_id, identities=self.identities)
        )

    def sign_in_with_password(self, credentials: dict[str, str]) -> SimpleNamespace:
        if self.reject:
            raise _RejectedAuth()
        return self._response()

    def sign_up(self, credentials: dict[str, str]) -> SimpleNamespace:
        if self.reject:
            raise _RejectedAuth()
        return self._response()

    def sign_in_anonymously(self) -> SimpleNamespace:
        if self.reject:
            raise _RejectedAuth()
        return SimpleNamespace(user=SimpleNamespace(id=str(uuid4()), identities=[]))


def _provider(auth: FakeAuth) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(client_factory=lambda: SimpleNamespace(auth=auth))


def test_identity_provider_password_sign_in() -> None:
    auth = FakeAuth()

    identity = _provider(auth).sign_in_with_password("hero@quest.com", "pw")

    assert str(identity.id) == auth.user_id
    assert identity.kind == CredentialKind.PASSWORD


def test_identity_provider_translates_auth_errors() -> None:
    provider = _provider(FakeAuth(reject=True))

    with pytest.raises(InvalidCredentialsError, match="Invalid credentials!"):
        provider.sign_in_with_password("hero@quest.com", "bad")
    with pytest.raises(InvalidCredentialsError, match="Sign up failed!"):
        provider.sign_up("hero@quest.com", "bad")
    with pytest.raises(InvalidCredentialsError, match="Guest sign-in failed"):
        provider.sign_in_anonymously()


def test_identity_provider_rejects_sign_up_for_existing_email() -> None:
    provider = _provider(FakeAuth(identities=[]))

    with pytest.raises(InvalidCredentialsError):
        provider.sign_up("hero@quest.com", "pw")


def test_identity_provider_anonymous_users_are_distinct() -> None:
    provider = _provider(FakeAuth())

    first = provider.sign_in_anonymously()
    second = provider.sign_in_anonymously()

    assert first.kind == CredentialKind.ANONYMOUS
    assert first.id != second.id
