"""Analytics endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request

from nutrilog.api.dependencies import current_user
from nutrilog.domain.users import UserProfile  # noqa: TC001

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/daily")
async def daily(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Return intake against the goal for ``day``, today by default."""
    container: AppContainer = request.app.state.container
    return {"daily": container.analytics_service.daily_analytics(user.id, day)}


@router.get("/weekly")
async def weekly(
    request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"weekly": container.analytics_service.weekly_analytics(user.id)}


@router.get("/monthly")
async def monthly(
    request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"monthly": container.analytics_service.monthly_analytics(user.id)}


@router.get("/overview")
async def overview(
    request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"overview": container.analytics_service.overview(user.id)}
