"""Request dependencies: service bundle and calling actor."""

from __future__ import annotations

from fastapi import Header, HTTPException, Request

from linguaqa.core.exceptions import PermissionDeniedError
from linguaqa.models.quality import Actor, Role
from linguaqa.services import QualityServices


def get_services(request: Request) -> QualityServices:
    return request.app.state.services


def get_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
    x_actor_email: str = Header(default=""),
) -> Actor:
    """Identity asserted by the authenticating gateway."""
    if not x_actor_id or not x_actor_role:
        raise HTTPException(status_code=401, detail="Missing actor headers")
    try:
        role = Role(x_actor_role)
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role {x_actor_role!r}") from None
    if role is Role.SYSTEM:
        raise HTTPException(status_code=401, detail="System role cannot be asserted over HTTP")
    return Actor(id=x_actor_id, email=x_actor_email, role=role)


def require_admin(actor: Actor, action: str) -> None:
    if actor.role is not Role.ADMIN:
        raise PermissionDeniedError(action, actor.role)
