"""Meal logging endpoints."""

from __future__ import annotations

import logging
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from nutrilog.api.dependencies import current_user
from nutrilog.api.schemas import (  # noqa: TC001
    MealCreateRequest,
    MealUpdateRequest,
    QuickLogRequest,
)
from nutrilog.domain.errors import InvalidInputError
from nutrilog.domain.meals import MealDraft, MealPatch, MealType
from nutrilog.domain.users import UserProfile  # noqa: TC001
from nutrilog.services.images import EXTENSIONS

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

MAX_IMAGE_BYTES = 5 * 1024 * 1024

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meals", tags=["meals"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(
    body: MealCreateRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Log a meal with its food items."""
    container: AppContainer = request.app.state.container
    draft = MealDraft(
        meal_type=body.meal_type,
        description=body.description,
        image_url=body.image_url,
        total_calories=body.total_calories,
        protein=body.protein,
        carbs=body.carbs,
        fats=body.fats,
        fiber=body.fiber,
        meal_date=body.meal_date,
        food_items=[item.to_domain() for item in body.food_items],
    )
    meal = await container.meal_service.create_meal(user.id, draft)
    return {"meal": meal}


@router.get("")
async def list_meals(  # noqa: PLR0913
    request: Request,
    page: int = 1,
    limit: int = 10,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    meal_type: MealType | None = None,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Return meal history, newest first."""
    container: AppContainer = request.app.state.container
    result = container.meal_service.list_meals(
        user.id,
        page=page,
        limit=limit,
        start=start_date,
        end=end_date,
        meal_type=meal_type,
    )
    return {
        "meals": result.meals,
        "pagination": {
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "total_pages": -(-result.total // result.limit),
        },
    }


@router.get("/today")
async def todays_meals(
    request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"today": container.meal_service.todays_meals(user.id)}


@router.post("/analyze")
async def analyze_meal(
    request: Request,
    image: UploadFile | None = File(default=None),
    description: str | None = Form(default=None),
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Estimate nutrition from a photo or a text description.

    The photo is only hosted once the analysis succeeds.
    """
    container: AppContainer = request.app.state.container
    if image is not None:
        content_type = image.content_type or ""
        if content_type not in EXTENSIONS:
            allowed = ", ".join(EXTENSIONS)
            raise InvalidInputError(f"Invalid file type. Allowed types: {allowed}")
        image_bytes = await image.read()
        if len(image_bytes) > MAX_IMAGE_BYTES:
            raise InvalidInputError("Image must be 5MB or smaller")
        analysis = await container.food_analysis_service.analyze_image(image_bytes)
        image_url = None
        if analysis.success:
            image_url = container.image_storage.upload(image_bytes, content_type)
        logger.info(
            "Analyzed meal image",
            extra={"user_id": user.id, "success": analysis.success},
        )
        return {"analysis": analysis, "image_url": image_url}
    if description and description.strip():
        analysis = await container.food_analysis_service.analyze_description(
            description.strip()
        )
        return {"analysis": analysis, "image_url": None}
    raise InvalidInputError("Provide an image or a description to analyze")


@router.post("/quick-log", status_code=status.HTTP_201_CREATED)
async def quick_log(
    body: QuickLogRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Log a meal straight from an analysis result."""
    container: AppContainer = request.app.state.container
    meal = await container.meal_service.quick_log(
        user.id, body.meal_type, body.analysis, body.image_url
    )
    return {"meal": meal}


@router.get("/{meal_id}")
async def get_meal(
    meal_id: UUID, request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"meal": container.meal_service.get_meal(meal_id, user.id)}


@router.put("/{meal_id}")
async def update_meal(
    meal_id: UUID,
    body: MealUpdateRequest,
    request: Request,
    user: UserProfile = Depends(current_user),
) -> dict[str, object]:
    """Update a meal; a ``food_items`` list replaces all existing items."""
    container: AppContainer = request.app.state.container
    changes = body.model_dump(exclude_none=True, exclude={"food_items"})
    food_items = (
        [item.to_domain() for item in body.food_items]
        if body.food_items is not None
        else None
    )
    meal = container.meal_service.update_meal(
        meal_id, user.id, MealPatch(changes=changes, food_items=food_items)
    )
    return {"meal": meal}


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: UUID, request: Request, user: UserProfile = Depends(current_user)
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.meal_service.delete_meal(meal_id, user.id)
    return {"status": "deleted"}
