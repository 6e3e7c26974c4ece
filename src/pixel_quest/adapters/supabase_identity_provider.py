"""Supabase Auth identity provider."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client, create_client

from pixel_quest.domain.errors import InvalidCredentialsError
from pixel_quest.domain.sessions import CredentialKind, Identity
from pixel_quest.services.auth import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Verifies identities with Supabase Auth.

    Each call gets its own client because a signed-in Supabase client swaps
    its request headers to the user's token.
    """

    client_factory: Callable[[], Client]

    @classmethod
    def create(cls, url: str, anon_key: str) -> "SupabaseIdentityProvider":
        """Create a provider that builds anon-key clients on demand."""
        return cls(client_factory=lambda: create_client(url, anon_key))

    def sign_in_with_password(self, email: str, password: str) -> Identity:
        """Verify an email and password."""
        client = self.client_factory()
        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            logger.info("Password sign-in rejected", extra={"reason": str(exc)})
            raise InvalidCredentialsError("Invalid credentials!") from exc
        return _identity(response, CredentialKind.PASSWORD, "Invalid credentials!")

    def sign_up(self, email: str, password: str) -> Identity:
        """Register a password identity."""
        client = self.client_factory()
        try:
            response = client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            logger.info("Sign-up rejected", extra={"reason": str(exc)})
            raise InvalidCredentialsError("Sign up failed!") from exc
        # An existing email comes back as a user with no identities.
        user = getattr(response, "user", None)
        if user is not None and not getattr(user, "identities", None):
            raise InvalidCredentialsError("Sign up failed!")
        return _identity(response, CredentialKind.PASSWORD, "Sign up failed!")

    def sign_in_anonymously(self) -> Identity:
        """Create an anonymous Supabase user."""
        client = self.client_factory()
        try:
            response = client.auth.sign_in_anonymously()
        except AuthError as exc:
            logger.info("Guest sign-in rejected", extra={"reason": str(exc)})
            raise InvalidCredentialsError("Guest sign-in failed") from exc
        return _identity(response, CredentialKind.ANONYMOUS, "Guest sign-in failed")


def _identity(response: object, kind: CredentialKind, failure: str) -> Identity:
    user = getattr(response, "user", None)
    if user is None:
        raise InvalidCredentialsError(failure)
    return Identity(id=UUID(str(user.id)), kind=kind)
