"""Auth endpoints and the bearer-token dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, Response, status

from pixel_quest.api.schemas import SessionResponse, SignInRequest, SignInResponse
from pixel_quest.domain.sessions import (
    CredentialKind,
    PasswordCredentials,
    SessionRecord,
)

if TYPE_CHECKING:
    from pixel_quest.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the token from an `Authorization: Bearer` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def require_session(
    request: Request, token: str | None = Depends(bearer_token)
) -> SessionRecord:
    """Resolve the caller's session or fail with 401."""
    container: AppContainer = request.app.state.container
    return container.auth_service.authenticate(token)


@router.post("/sign-in")
async def sign_in(payload: SignInRequest, request: Request) -> SignInResponse:
    """Open a password or guest session."""
    container: AppContainer = request.app.state.container
    credentials = None
    if payload.kind == CredentialKind.PASSWORD:
        credentials = PasswordCredentials(
            email=payload.email or "",
            password=payload.password or "",
            flow=payload.flow,
        )
    issued = container.auth_service.sign_in(payload.kind, credentials)
    session = SessionResponse.from_record(issued.session)
    return SignInResponse(**session.model_dump(), token=issued.token)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    request: Request, token: str | None = Depends(bearer_token)
) -> Response:
    """Revoke the current session."""
    container: AppContainer = request.app.state.container
    container.auth_service.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session")
async def current_session(
    session: SessionRecord = Depends(require_session),
) -> SessionResponse:
    """Return the session behind the bearer token."""
    return SessionResponse.from_record(session)
