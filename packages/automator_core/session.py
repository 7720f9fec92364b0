"""Session guard: resolve the authenticated caller from request context.

Sessions are issued elsewhere; this module only reads (and, for whichever
collaborator signs users in, writes) the identity stored in the signed
Starlette session cookie.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from fastapi import Request

from packages.automator_shared.envelope import EnvelopeKind, EnvelopeMeta, new_meta
from packages.automator_shared.http import UnauthenticatedError
from packages.automator_shared.logging import bind_context, fields

SESSION_IDENTITY_KEY = "user"


@dataclass(frozen=True)
class SessionIdentity:
    """Authenticated caller identity carried by one session."""

    user_id: str
    name: str | None = None
    email: str | None = None


class SessionResolver(Protocol):
    """Protocol for resolving the caller identity of one request."""

    def resolve(self, request: Request) -> SessionIdentity | None:
        """Return the caller identity, or ``None`` when no valid session exists."""


class StarletteSessionResolver:
    """Resolve identities from the signed cookie managed by ``SessionMiddleware``."""

    def resolve(self, request: Request) -> SessionIdentity | None:
        if "session" not in request.scope:
            return None
        return _identity_from_payload(request.session.get(SESSION_IDENTITY_KEY))


def start_session(request: Request, identity: SessionIdentity) -> None:
    """Store one identity in the request session cookie."""
    user_id = identity.user_id.strip()
    if user_id == "":
        raise ValueError("session identity requires a user_id")
    request.session[SESSION_IDENTITY_KEY] = {
        "user_id": user_id,
        "name": identity.name,
        "email": identity.email,
    }


def end_session(request: Request) -> None:
    """Clear the request session cookie payload."""
    request.session.clear()


def resolve_identity(request: Request) -> SessionIdentity | None:
    """Resolve the caller through the resolver installed on the app."""
    resolver: SessionResolver | None = getattr(
        request.app.state, "session_resolver", None
    )
    if resolver is None:
        return None
    return resolver.resolve(request)


async def require_identity(request: Request) -> SessionIdentity:
    """FastAPI dependency returning the caller identity or raising 401."""
    identity = resolve_identity(request)
    if identity is None:
        raise UnauthenticatedError(message="Unauthorized")
    bind_context(**{fields.PRINCIPAL: identity.user_id})
    return identity


def identity_meta(
    identity: SessionIdentity, *, kind: EnvelopeKind, source: str
) -> EnvelopeMeta:
    """Build envelope metadata scoped to one authenticated caller."""
    return new_meta(kind=kind, source=source, principal=identity.user_id)


def _identity_from_payload(payload: Any) -> SessionIdentity | None:
    """Parse one stored session payload, rejecting malformed shapes."""
    if not isinstance(payload, dict):
        return None
    user_id = payload.get("user_id")
    if not isinstance(user_id, str) or user_id.strip() == "":
        return None
    name = payload.get("name")
    email = payload.get("email")
    return SessionIdentity(
        user_id=user_id.strip(),
        name=name if isinstance(name, str) else None,
        email=email if isinstance(email, str) else None,
    )
