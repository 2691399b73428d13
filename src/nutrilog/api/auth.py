"""Registration and login endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from nutrilog.api.schemas import LoginRequest, RegisterRequest  # noqa: TC001

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an account and return the new profile with an access token."""
    container: AppContainer = request.app.state.container
    user, session = container.user_service.register(
        body.email, body.password, body.name
    )
    return {"user": user, "access_token": session.access_token}


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for an access token."""
    container: AppContainer = request.app.state.container
    user, session = container.user_service.login(body.email, body.password)
    return {"user": user, "access_token": session.access_token}
