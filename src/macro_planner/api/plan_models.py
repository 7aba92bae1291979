"""Pydantic models for the plan generation endpoint."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from macro_planner.domain.planning import MealSlot


class GeneratePlanRequest(BaseModel):
    """Request payload for generating a weekly plan."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(alias="userId")
    week_start: date = Field(alias="weekStart")


class AssignmentPayload(BaseModel):
    """Single planned meal."""

    recipe_id: UUID
    recipe_name: str
    servings: int = Field(gt=0)
    day_of_week: int = Field(ge=0, le=6)
    meal_slot: MealSlot


class MacroTotalsPayload(BaseModel):
    """Weekly macro totals, rounded for display."""

    kcal: float
    protein: float
    carbs: float
    fat: float


class MissingIngredientPayload(BaseModel):
    """Ingredient quantity missing from the pantry."""

    ingredient_id: UUID
    ingredient_name: str
    needed_quantity: float
    unit: str
    available_quantity: float


class MacroAccuracyPayload(BaseModel):
    """Signed accuracy percentages per macro."""

    calories: int
    protein: int
    carbs: int
    fat: int


class GeneratePlanResponse(BaseModel):
    """Response payload for a generated weekly plan."""

    meal_plan_id: UUID
    week_start: date
    assignments: list[AssignmentPayload]
    weekly_totals: MacroTotalsPayload
    missing_ingredients: list[MissingIngredientPayload]
    macro_accuracy: MacroAccuracyPayload
