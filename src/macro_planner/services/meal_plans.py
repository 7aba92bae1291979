"""Application service for generating and storing weekly meal plans."""

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from macro_planner.domain.errors import ProfileNotFoundError
from macro_planner.domain.meal_plans import MealPlanRecord, MealRecord
from macro_planner.domain.planning import (
    Assignment,
    Ingredient,
    MacroProfile,
    MacroTarget,
    PantryEntry,
    PlanResult,
    Recipe,
)
from macro_planner.services.nutrition import rounded
from macro_planner.services.planner import generate_plan

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user macro targets."""

    def get_target(self, user_id: UUID) -> MacroTarget | None:
        """Return the user's daily target, if the profile exists."""


class CatalogueRepository(Protocol):
    """Persistence interface for ingredients and recipes."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return the full ingredient catalogue."""

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes with their requirements."""


class PantryRepository(Protocol):
    """Persistence interface for user pantries."""

    def list_pantry(self, user_id: UUID) -> list[PantryEntry]:
        """Return the user's pantry entries."""


class MealPlanRepository(Protocol):
    """Persistence interface for weekly meal plans."""

    def delete_plan(self, user_id: UUID, week_start: date) -> None:
        """Delete the plan for a week, if any."""

    def create_plan(
        self, user_id: UUID, week_start: date, totals: MacroProfile
    ) -> MealPlanRecord:
        """Create a plan header and return it."""

    def create_meal(self, meal_plan_id: UUID, assignment: Assignment) -> MealRecord:
        """Create a meal row for an assignment."""


@dataclass(frozen=True)
class GeneratedPlan:
    """A planning result together with its stored rows."""

    plan: MealPlanRecord
    meals: list[MealRecord]
    result: PlanResult


@dataclass
class MealPlanService:
    """Loads planning inputs, runs the planner and stores the plan."""

    profile_repository: ProfileRepository
    catalogue_repository: CatalogueRepository
    pantry_repository: PantryRepository
    meal_plan_repository: MealPlanRepository
    random_seed: int | None = None

    def generate(self, user_id: UUID, week_start: date) -> GeneratedPlan:
        """Generate the plan for a week, replacing any existing one."""
        target = self.profile_repository.get_target(user_id)
        if target is None:
            raise ProfileNotFoundError(user_id)
        ingredients = {
            ingredient.id: ingredient
            for ingredient in self.catalogue_repository.list_ingredients()
        }
        recipes = self.catalogue_repository.list_recipes()
        pantry = {
            entry.ingredient_id: entry
            for entry in self.pantry_repository.list_pantry(user_id)
        }

        result = generate_plan(
            target,
            recipes,
            ingredients,
            pantry,
            rng=random.Random(self.random_seed),
        )

        self.meal_plan_repository.delete_plan(user_id, week_start)
        plan = self.meal_plan_repository.create_plan(
            user_id, week_start, rounded(result.weekly_totals)
        )
        _logger.info(
            "Stored meal plan %s for user %s week %s", plan.id, user_id, week_start
        )
        meals = []
        for assignment in result.assignments:
            try:
                meals.append(self.meal_plan_repository.create_meal(plan.id, assignment))
            except RuntimeError:
                _logger.warning(
                    "Failed to store meal",
                    extra={"meal_plan_id": str(plan.id)},
                    exc_info=True,
                )
        return GeneratedPlan(plan=plan, meals=meals, result=result)
