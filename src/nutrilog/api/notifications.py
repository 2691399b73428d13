"""Notification endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from nutrilog.api.dependencies import current_user
from nutrilog.api.schemas import NotificationCreateRequest  # noqa: TC001
from nutrilog.domain.users import UserProfile  # noqa: TC001

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_notification(
    body: NotificationCreateRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Store a notification for the caller and push it to their device."""
    container: AppContainer = request.app.state.container
    notification = await container.notification_service.create_and_send(
        user.id, body.title, body.body, body.type
    )
    return {"notification": notification}


@router.get("")
async def list_notifications(
    request: Request,
    limit: int = 20,
    offset: int = 0,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    notifications = container.notification_service.list_notifications(
        user.id, limit=limit, offset=offset
    )
    return {"notifications": notifications}


@router.patch("/read-all")
async def mark_all_read(
    request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, int]:
    container: AppContainer = request.app.state.container
    return {"updated": container.notification_service.mark_all_read(user.id)}


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: UUID,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.notification_service.mark_read(notification_id, user.id)
    return {"status": "ok"}


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: UUID,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.notification_service.delete_notification(notification_id, user.id)
    return {"status": "deleted"}
