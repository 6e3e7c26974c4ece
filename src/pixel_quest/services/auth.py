"""Authentication gate for password and guest sessions."""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pixel_quest.domain.errors import InvalidCredentialsError, UnauthenticatedError
from pixel_quest.domain.sessions import (
    CredentialKind,
    Identity,
    PasswordCredentials,
    PasswordFlow,
    SessionRecord,
)
from pixel_quest.services.subscriptions import SubscriptionRegistry

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Interface to the hosted identity service."""

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Verify credentials for an existing identity."""

    def sign_up(self, email: str, password: str) -> Identity:
        """Register a new password identity."""

    def sign_in_anonymously(self) -> Identity:
        """Create a fresh anonymous identity."""


class SessionRepository(Protocol):
    """Persistence interface for sessions."""

    def create_session(
        self, owner_id: UUID, kind: CredentialKind, token_hash: str
    ) -> SessionRecord:
        """Create a session row and return it."""

    def get_active_session(self, token_hash: str) -> SessionRecord | None:
        """Return the unrevoked session for a token digest, if any."""

    def revoke_session(self, session_id: UUID) -> None:
        """Mark a session as signed out."""


@dataclass(frozen=True)
class IssuedSession:
    """A new session and the bearer token that unlocks it."""

    session: SessionRecord
    token: str


@dataclass
class AuthService:
    """Opens, resolves and closes sessions."""

    identity_provider: IdentityProvider
    session_repository: SessionRepository
    subscriptions: SubscriptionRegistry

    def sign_in(
        self, kind: CredentialKind, credentials: PasswordCredentials | None = None
    ) -> IssuedSession:
        """Open a session for the given credential kind."""
        if kind == CredentialKind.ANONYMOUS:
            identity = self.identity_provider.sign_in_anonymously()
        elif kind == CredentialKind.PASSWORD:
            identity = self._password_identity(credentials)
        else:
            raise InvalidCredentialsError(f"Unsupported credential kind: {kind}")

        token = secrets.token_urlsafe(32)
        session = self.session_repository.create_session(
            owner_id=identity.id, kind=identity.kind, token_hash=hash_token(token)
        )
        logger.info(
            "Session opened",
            extra={"session_id": str(session.id), "kind": str(session.kind)},
        )
        return IssuedSession(session=session, token=token)

    def authenticate(self, token: str | None) -> SessionRecord:
        """Resolve a bearer token to its live session."""
        if not token:
            raise UnauthenticatedError("Sign in to continue.")
        session = self.session_repository.get_active_session(hash_token(token))
        if session is None:
            raise UnauthenticatedError("Session is not valid.")
        return session

    def sign_out(self, token: str | None) -> None:
        """Revoke the session and close its live queries."""
        session = self.authenticate(token)
        self.session_repository.revoke_session(session.id)
        closed = self.subscriptions.close_session(session.id)
        logger.info(
            "Session closed",
            extra={"session_id": str(session.id), "subscriptions": closed},
        )

    def _password_identity(self, credentials: PasswordCredentials | None) -> Identity:
        if credentials is None or not credentials.email or not credentials.password:
            raise InvalidCredentialsError("Email and password are required.")
        email = credentials.email.strip()
        if credentials.flow == PasswordFlow.SIGN_UP:
            return self.identity_provider.sign_up(email, credentials.password)
        return self.identity_provider.sign_in_with_password(
            email, credentials.password
        )


def hash_token(token: str) -> str:
    """Return the stored digest for a bearer token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
