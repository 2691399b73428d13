"""Profile, onboarding and device endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from nutrilog.api.dependencies import current_user
from nutrilog.api.schemas import (  # noqa: TC001
    OnboardingRequest,
    ProfileUpdateRequest,
    PushTokenRequest,
)
from nutrilog.domain.users import UserProfile  # noqa: TC001

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile")
async def get_profile(user: UserProfile = Depends(current_user)) -> dict[str, object]:
    return {
        "user": user,
        "activity_level_description": user.activity_level_description,
    }


@router.put("/profile")
async def update_profile(
    body: ProfileUpdateRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Update profile fields; BMI and calorie goal follow the new values."""
    container: AppContainer = request.app.state.container
    updated = container.user_service.update_profile(
        user.id, body.model_dump(exclude_none=True)
    )
    return {"user": updated}


@router.post("/onboarding")
async def complete_onboarding(
    body: OnboardingRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    result = container.user_service.complete_onboarding(
        user.id, body.model_dump(exclude_none=True)
    )
    return {"user": result.user, "health_metrics": result.health_metrics}


@router.get("/stats")
async def get_stats(
    request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"stats": container.user_service.get_stats(user.id)}


@router.patch("/push-token")
async def update_push_token(
    body: PushTokenRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, str]:
    """Register the device that should receive push notifications."""
    container: AppContainer = request.app.state.container
    await container.user_service.update_push_token(
        user.id, body.token, is_login=body.is_login
    )
    return {"status": "ok"}
