"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from pixel_quest.domain.sessions import CredentialKind, SessionRecord
from pixel_quest.services.auth import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for app sessions."""

    client: Client

    def create_session(
        self, owner_id: UUID, kind: CredentialKind, token_hash: str
    ) -> SessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table("app_sessions")
            .insert(
                {
                    "owner_id": str(owner_id),
                    "kind": kind.value,
                    "token_hash": token_hash,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _parse_row(response.data[0])

    def get_active_session(self, token_hash: str) -> SessionRecord | None:
        """Return the unrevoked session matching a token digest."""
        response = (
            self.client.table("app_sessions")
            .select("id, owner_id, kind, created_at")
            .eq("token_hash", token_hash)
            .is_("revoked_at", "null")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def revoke_session(self, session_id: UUID) -> None:
        """Stamp revoked_at so the token stops resolving."""
        self.client.table("app_sessions").update(
            {"revoked_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(session_id)).execute()


def _parse_row(row: dict[str, object]) -> SessionRecord:
    return SessionRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["owner_id"])),
        kind=CredentialKind(row["kind"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
