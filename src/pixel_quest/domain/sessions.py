"""Domain models for authenticated sessions."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class CredentialKind(StrEnum):
    """Ways a caller can open a session."""

    PASSWORD = "password"
    ANONYMOUS = "anonymous"


class PasswordFlow(StrEnum):
    """Password form flow tag."""

    SIGN_IN = "signIn"
    SIGN_UP = "signUp"


@dataclass(frozen=True)
class PasswordCredentials:
    """Email and password submitted by the sign-in form."""

    email: str
    password: str
    flow: PasswordFlow = PasswordFlow.SIGN_IN


@dataclass(frozen=True)
class Identity:
    """An identity confirmed by the identity provider."""

    id: UUID
    kind: CredentialKind


@dataclass(frozen=True)
class SessionRecord:
    """Represents a live session bound to one identity."""

    id: UUID
    owner_id: UUID
    kind: CredentialKind
    created_at: datetime
