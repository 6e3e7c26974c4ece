"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from pixel_quest.adapters.supabase_identity_provider import SupabaseIdentityProvider
from pixel_quest.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from pixel_quest.adapters.supabase_todo_repository import SupabaseTodoRepository
from pixel_quest.config import Settings
from pixel_quest.services.auth import AuthService
from pixel_quest.services.subscriptions import SubscriptionRegistry
from pixel_quest.services.todos import TodoService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    subscriptions: SubscriptionRegistry
    auth_service: AuthService
    todo_service: TodoService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    subscriptions = SubscriptionRegistry()
    identity_provider = SupabaseIdentityProvider.create(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    auth_service = AuthService(
        identity_provider=identity_provider,
        session_repository=SupabaseSessionRepository(supabase_client),
        subscriptions=subscriptions,
    )
    todo_service = TodoService(
        repository=SupabaseTodoRepository(supabase_client),
        subscriptions=subscriptions,
        newest_first=resolved_settings.list_newest_first,
    )
    return AppContainer(
        settings=resolved_settings,
        subscriptions=subscriptions,
        auth_service=auth_service,
        todo_service=todo_service,
    )
