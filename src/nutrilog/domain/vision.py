"""Models for AI food analysis results."""

from pydantic import BaseModel, Field


class AnalyzedFoodItem(BaseModel):
    """Single food detected in an image or description."""

    food_name: str
    quantity: float = Field(gt=0)
    unit: str
    calories: int = Field(ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)


class NutritionEstimate(BaseModel):
    """Estimated nutrition for the whole meal."""

    calories: int = Field(ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fats: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)


class FoodAnalysis(BaseModel):
    """Structured output of a food analysis."""

    success: bool
    food_items: list[AnalyzedFoodItem] = Field(default_factory=list)
    total_nutrition: NutritionEstimate | None = None
    meal_description: str = ""
    error: str | None = None
