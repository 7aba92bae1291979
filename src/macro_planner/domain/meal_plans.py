"""Domain models for persisted meal plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from macro_planner.domain.planning import MealSlot


@dataclass(frozen=True)
class MealPlanRecord:
    """Stored weekly plan header."""

    id: UUID
    user_id: UUID
    week_start: date
    total_kcal: int
    total_protein: int
    total_carbs: int
    total_fat: int


@dataclass(frozen=True)
class MealRecord:
    """Stored meal within a weekly plan."""

    id: UUID
    meal_plan_id: UUID
    recipe_id: UUID
    servings: int
    day_of_week: int
    meal_slot: MealSlot
