"""Food analysis using LLM vision and text prompts."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutrilog.domain.vision import FoodAnalysis
from nutrilog.services.images import to_data_url

logger = logging.getLogger(__name__)

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}

_NUTRITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "calories": {"type": "integer", "minimum": 0},
        "protein": _NULLABLE_NUMBER,
        "carbs": _NULLABLE_NUMBER,
        "fats": _NULLABLE_NUMBER,
        "fiber": _NULLABLE_NUMBER,
    },
    "required": ["calories", "protein", "carbs", "fats", "fiber"],
    "additionalProperties": False,
}

FOOD_ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "success": {"type": "boolean"},
        "food_items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "food_name": {"type": "string"},
                    "quantity": {"type": "number", "exclusiveMinimum": 0},
                    "unit": {"type": "string"},
                    "calories": {"type": "integer", "minimum": 0},
                    "protein": _NULLABLE_NUMBER,
                    "carbs": _NULLABLE_NUMBER,
                    "fats": _NULLABLE_NUMBER,
                    "fiber": _NULLABLE_NUMBER,
                },
                "required": [
                    "food_name",
                    "quantity",
                    "unit",
                    "calories",
                    "protein",
                    "carbs",
                    "fats",
                    "fiber",
                ],
                "additionalProperties": False,
            },
        },
        "total_nutrition": {"anyOf": [_NUTRITION_SCHEMA, {"type": "null"}]},
        "meal_description": {"type": "string"},
        "error": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": [
        "success",
        "food_items",
        "total_nutrition",
        "meal_description",
        "error",
    ],
    "additionalProperties": False,
}

IMAGE_PROMPT = (
    "Analyze this food image and identify all food items visible. "
    "For each item give its name, an estimated quantity and unit "
    "(grams, ml, pieces), calories in kcal and protein, carbs, fats and "
    "fiber in grams. Add the meal totals and a brief meal description. "
    "Use standard portion sizes when the quantity is unclear. "
    "If the image is not food or the food cannot be identified, set success "
    "to false, leave food_items empty, total_nutrition null and explain in error."
)

DESCRIPTION_PROMPT = (
    "Estimate the nutritional values of this food description:\n\n"
    '"{description}"\n\n'
    "List each food item with an estimated quantity and unit, calories in kcal "
    "and protein, carbs, fats and fiber in grams, plus the meal totals. "
    "If the description is not food-related or too vague, set success to false, "
    "leave food_items empty, total_nutrition null and explain in error."
)


class VisionClient(Protocol):
    """Interface for LLM structured food analysis."""

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> str:
        """Return the raw JSON text produced by the model."""


@dataclass
class FoodAnalysisService:
    """Service that prepares analysis prompts and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze_image(self, image_bytes: bytes) -> FoodAnalysis:
        """Identify foods in a photo and estimate their nutrition."""
        raw = await self.client.analyze(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=IMAGE_PROMPT,
            schema=FOOD_ANALYSIS_SCHEMA,
            image_data_url=to_data_url(image_bytes),
        )
        return _parse_analysis(
            raw, "Failed to parse nutrition data from image analysis"
        )

    async def analyze_description(self, description: str) -> FoodAnalysis:
        """Estimate nutrition from a free-text meal description."""
        raw = await self.client.analyze(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=DESCRIPTION_PROMPT.format(description=description),
            schema=FOOD_ANALYSIS_SCHEMA,
        )
        analysis = _parse_analysis(raw, "Failed to parse nutrition data")
        if analysis.success and not analysis.meal_description:
            analysis.meal_description = description
        return analysis


def _parse_analysis(raw: str, error_message: str) -> FoodAnalysis:
    try:
        return FoodAnalysis.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError):
        logger.warning("Discarding malformed food analysis", exc_info=True)
        return FoodAnalysis(success=False, error=error_message)
