"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from nutrilog.domain.errors import AuthenticationError
from nutrilog.domain.users import UserProfile  # noqa: TC001

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer


def current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserProfile:
    """Resolve the bearer token on the request to a user profile."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("No token provided. Please log in.")
    container: AppContainer = request.app.state.container
    return container.user_service.authenticate(token.strip())
