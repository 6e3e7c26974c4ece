"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from pixel_quest.config import Settings
from pixel_quest.containers import AppContainer
from pixel_quest.domain.errors import InvalidCredentialsError
from pixel_quest.domain.sessions import CredentialKind, Identity, SessionRecord
from pixel_quest.domain.todos import Priority, TodoRecord
from pixel_quest.services.auth import AuthService, IdentityProvider, SessionRepository
from pixel_quest.services.subscriptions import SubscriptionRegistry
from pixel_quest.services.todos import TodoRepository, TodoService


@dataclass
class InMemoryTodoRepository(TodoRepository):
    """In-memory todo repository for tests."""

    todos: list[TodoRecord] = field(default_factory=list)

    def create_todo(self, owner_id: UUID, text: str, priority: Priority) -> TodoRecord:
        record = TodoRecord(
            id=uuid4(),
            owner_id=owner_id,
            text=text,
            completed=False,
            priority=priority,
            created_at=datetime.now(tz=UTC),
        )
        self.todos.append(record)
        return record

    def list_todos(self, owner_id: UUID, newest_first: bool) -> list[TodoRecord]:
        owned = [todo for todo in self.todos if todo.owner_id == owner_id]
        return list(reversed(owned)) if newest_first else owned

    def toggle_todo(self, owner_id: UUID, todo_id: UUID) -> TodoRecord | None:
        for index, todo in enumerate(self.todos):
            if todo.id == todo_id and todo.owner_id == owner_id:
                toggled = TodoRecord(
                    id=todo.id,
                    owner_id=todo.owner_id,
                    text=todo.text,
                    completed=not todo.completed,
                    priority=todo.priority,
                    created_at=todo.created_at,
                )
                self.todos[index] = toggled
                return toggled
        return None

    def delete_todo(self, owner_id: UUID, todo_id: UUID) -> bool:
        for index, todo in enumerate(self.todos):
            if todo.id == todo_id and todo.owner_id == owner_id:
                del self.todos[index]
                return True
        return False


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)
    revoked: set[UUID] = field(default_factory=set)

    def create_session(
        self, owner_id: UUID, kind: CredentialKind, token_hash: str
    ) -> SessionRecord:
        session = SessionRecord(
            id=uuid4(),
            owner_id=owner_id,
            kind=kind,
            created_at=datetime.now(tz=UTC),
        )
        self.sessions[token_hash] = session
        return session

    def get_active_session(self, token_hash: str) -> SessionRecord | None:
        session = self.sessions.get(token_hash)
        if session is None or session.id in self.revoked:
            return None
        return session

    def revoke_session(self, session_id: UUID) -> None:
        self.revoked.add(session_id)


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider keeping password accounts in a dict."""

    accounts: dict[str, tuple[str, UUID]] = field(default_factory=dict)
    anonymous_ids: list[UUID] = field(default_factory=list)

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise InvalidCredentialsError("Invalid credentials!")
        return Identity(id=account[1], kind=CredentialKind.PASSWORD)

    def sign_up(self, email: str, password: str) -> Identity:
        if email in self.accounts or "@" not in email:
            raise InvalidCredentialsError("Sign up failed!")
        user_id = uuid4()
        self.accounts[email] = (password, user_id)
        return Identity(id=user_id, kind=CredentialKind.PASSWORD)

    def sign_in_anonymously(self) -> Identity:
        user_id = uuid4()
        self.anonymous_ids.append(user_id)
        return Identity(id=user_id, kind=CredentialKind.ANONYMOUS)


def make_session(owner_id: UUID | None = None) -> SessionRecord:
    """Build a password session without going through the auth service."""
    return SessionRecord(
        id=uuid4(),
        owner_id=owner_id or uuid4(),
        kind=CredentialKind.PASSWORD,
        created_at=datetime.now(tz=UTC),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        supabase_anon_key="header.payload.signature",
    )


@pytest.fixture
def subscriptions() -> SubscriptionRegistry:
    return SubscriptionRegistry()


@pytest.fixture
def todo_repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    provider = FakeIdentityProvider()
    provider.accounts["hero@quest.com"] = ("secret-pass", uuid4())
    return provider


@pytest.fixture
def todo_service(
    todo_repository: InMemoryTodoRepository, subscriptions: SubscriptionRegistry
) -> TodoService:
    return TodoService(repository=todo_repository, subscriptions=subscriptions)


@pytest.fixture
def auth_service(
    identity_provider: FakeIdentityProvider, subscriptions: SubscriptionRegistry
) -> AuthService:
    return AuthService(
        identity_provider=identity_provider,
        session_repository=InMemorySessionRepository(),
        subscriptions=subscriptions,
    )


@pytest.fixture
def container(
    settings: Settings,
    subscriptions: SubscriptionRegistry,
    auth_service: AuthService,
    todo_service: TodoService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        subscriptions=subscriptions,
        auth_service=auth_service,
        todo_service=todo_service,
    )
