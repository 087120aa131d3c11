"""Bearer-token authentication for API requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from event_snaps.domain.models import AuthIdentity  # noqa: TC001

if TYPE_CHECKING:
    from event_snaps.containers import AppContainer

_BEARER_PREFIX = "bearer "


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def require_identity(
    request: Request,
    authorization: str | None = Header(default=None),
) -> AuthIdentity:
    """Resolve the caller from the Authorization header and ensure a profile."""
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    token = authorization[len(_BEARER_PREFIX) :].strip()
    container = get_container(request)
    identity = container.auth_verifier.verify(token)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container.user_service.ensure_user(identity)
    return identity
