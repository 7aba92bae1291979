"""Macro Tetris: greedy weekly plan allocation against macro targets.

The planner runs as a pipeline of pure stages:

1. resolve per-serving macros and pantry availability for every recipe
2. fill the daily protein target greedily by protein density
3. add at most one carb-leaning and one fat-leaning snack for the gaps
4. scale servings once when calories are far from target
5. report missing pantry quantities and signed macro accuracy

Every stage returns new values; inputs are never mutated, so concurrent
runs over shared catalogues are safe.
"""

import logging
import math
import random
from collections.abc import Mapping
from uuid import UUID

from macro_planner.domain.errors import EmptyCatalogueError, InvalidTargetError
from macro_planner.domain.planning import (
    Assignment,
    Ingredient,
    MacroAccuracy,
    MacroProfile,
    MacroTarget,
    MealSlot,
    PantryEntry,
    PlannedRecipe,
    PlanResult,
    Recipe,
)
from macro_planner.services.nutrition import (
    ensure_references,
    resolve_recipe_macros,
    round_half_up,
)
from macro_planner.services.pantry import available_servings, find_shortfall

DAYS_IN_WEEK = 7
MAIN_SLOTS = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER)
PROTEIN_FILL_MAX_SERVINGS = 3
GAP_FILL_MAX_SERVINGS = 2
TUNING_TOLERANCE = 0.15
TUNING_LARGE_DEVIATION = 0.5
TUNING_LARGE_FACTOR = 0.8
TUNING_SMALL_FACTOR = 0.9

_logger = logging.getLogger(__name__)


def validate_target(target: MacroTarget) -> None:
    """Reject targets that cannot be planned against."""
    if target.calories <= 0:
        raise InvalidTargetError(f"Energy target must be positive: {target.calories}")
    for name, value in (
        ("protein", target.protein_pct),
        ("carbs", target.carbs_pct),
        ("fat", target.fat_pct),
    ):
        if not 0 <= value <= 100:  # noqa: PLR2004
            raise InvalidTargetError(f"{name} percentage out of range: {value}")


def prepare_recipes(
    recipes: list[Recipe],
    ingredients: Mapping[UUID, Ingredient],
    pantry: Mapping[UUID, PantryEntry],
) -> list[PlannedRecipe]:
    """Resolve macros and availability for each recipe, in input order."""
    ensure_references(recipes, ingredients)
    planned = [
        PlannedRecipe(
            recipe=recipe,
            macros=resolve_recipe_macros(recipe, ingredients),
            available_servings=available_servings(recipe, pantry),
        )
        for recipe in recipes
    ]
    if not any(item.available_servings > 0 for item in planned):
        raise EmptyCatalogueError("No recipe can be made from the pantry")
    return planned


def rank_by_density(recipes: list[PlannedRecipe], macro: str) -> list[PlannedRecipe]:
    """Sort recipes by density descending; ties keep input order."""
    return sorted(recipes, key=lambda item: item.density(macro), reverse=True)


def daily_gap(target_grams: float, accumulated_grams: float) -> float:
    """Return the remaining daily grams given weekly accumulated grams."""
    return max(0.0, target_grams - accumulated_grams / DAYS_IN_WEEK)


def greedy_protein_fill(
    recipes: list[PlannedRecipe], daily_target: MacroProfile
) -> tuple[list[Assignment], MacroProfile]:
    """Assign main-meal servings by protein density until protein is met."""
    assignments: list[Assignment] = []
    accumulated = MacroProfile.zero()
    candidates = [item for item in recipes if item.available_servings > 0]
    for item in rank_by_density(candidates, "protein"):
        gap = daily_gap(daily_target.protein_g, accumulated.protein_g)
        if gap <= 0:
            break
        # a protein-free recipe never closes the gap, so it takes the cap
        needed = (
            math.ceil(gap / item.macros.protein_g)
            if item.macros.protein_g > 0
            else math.inf
        )
        servings = int(
            min(needed, item.available_servings, PROTEIN_FILL_MAX_SERVINGS)
        )
        if servings <= 0:
            continue
        cursor = len(assignments)
        assignments.append(
            Assignment(
                recipe_id=item.recipe.id,
                servings=servings,
                day_of_week=(cursor // len(MAIN_SLOTS)) % DAYS_IN_WEEK,
                meal_slot=MAIN_SLOTS[cursor % len(MAIN_SLOTS)],
            )
        )
        accumulated = accumulated + item.macros.scaled(servings)
    return assignments, accumulated


def fill_remaining_macros(
    recipes: list[PlannedRecipe],
    assignments: list[Assignment],
    accumulated: MacroProfile,
    daily_target: MacroProfile,
    rng: random.Random,
) -> list[Assignment]:
    """Add one carb-leaning and one fat-leaning snack for open gaps."""
    used = {assignment.recipe_id for assignment in assignments}
    unused = [
        item
        for item in recipes
        if item.recipe.id not in used and item.available_servings > 0
    ]
    partitions = {
        "carbs": [item for item in unused if item.macros.carbs_g > item.macros.fat_g],
        "fat": [item for item in unused if item.macros.fat_g > item.macros.carbs_g],
    }

    result = list(assignments)
    for macro, partition in partitions.items():
        gap = daily_gap(daily_target.grams(macro), accumulated.grams(macro))
        if gap <= 0 or not partition:
            continue
        best = rank_by_density(partition, macro)[0]
        servings = int(
            min(
                math.ceil(gap / best.macros.grams(macro)),
                best.available_servings,
                GAP_FILL_MAX_SERVINGS,
            )
        )
        if servings > 0:
            result.append(
                Assignment(
                    recipe_id=best.recipe.id,
                    servings=servings,
                    day_of_week=rng.randrange(DAYS_IN_WEEK),
                    meal_slot=MealSlot.SNACK,
                )
            )
    return result


def weekly_totals(
    assignments: list[Assignment], recipes: Mapping[UUID, PlannedRecipe]
) -> MacroProfile:
    """Sum macros over all assignments."""
    total = MacroProfile.zero()
    for assignment in assignments:
        total = total + recipes[assignment.recipe_id].macros.scaled(
            assignment.servings
        )
    return total


def fine_tune(
    assignments: list[Assignment],
    recipes: Mapping[UUID, PlannedRecipe],
    daily_target: MacroProfile,
) -> list[Assignment]:
    """Scale all servings once when daily calories miss the target by >15%."""
    daily_calories = weekly_totals(assignments, recipes).calories / DAYS_IN_WEEK
    deviation = abs(daily_calories - daily_target.calories) / daily_target.calories
    if deviation <= TUNING_TOLERANCE:
        return list(assignments)
    factor = (
        TUNING_LARGE_FACTOR
        if deviation > TUNING_LARGE_DEVIATION
        else TUNING_SMALL_FACTOR
    )
    return [
        Assignment(
            recipe_id=assignment.recipe_id,
            servings=max(1, round_half_up(assignment.servings * factor)),
            day_of_week=assignment.day_of_week,
            meal_slot=assignment.meal_slot,
        )
        for assignment in assignments
    ]


def macro_accuracy(weekly: MacroProfile, daily_target: MacroProfile) -> MacroAccuracy:
    """Return signed, unclamped accuracy of the daily average per macro."""
    return MacroAccuracy(
        calories=_accuracy(weekly.calories / DAYS_IN_WEEK, daily_target.calories),
        protein=_accuracy(weekly.protein_g / DAYS_IN_WEEK, daily_target.protein_g),
        carbs=_accuracy(weekly.carbs_g / DAYS_IN_WEEK, daily_target.carbs_g),
        fat=_accuracy(weekly.fat_g / DAYS_IN_WEEK, daily_target.fat_g),
    )


def generate_plan(
    target: MacroTarget,
    recipes: list[Recipe],
    ingredients: Mapping[UUID, Ingredient],
    pantry: Mapping[UUID, PantryEntry],
    rng: random.Random | None = None,
) -> PlanResult:
    """Build a weekly plan approximating the daily target from the pantry."""
    validate_target(target)
    daily_target = target.daily_grams()
    try:
        planned = prepare_recipes(recipes, ingredients, pantry)
    except EmptyCatalogueError:
        _logger.info("Planner: no available recipes (%s total)", len(recipes))
        return PlanResult(
            assignments=[],
            weekly_totals=MacroProfile.zero(),
            missing_ingredients=[],
            macro_accuracy=macro_accuracy(MacroProfile.zero(), daily_target),
        )

    by_id = {item.recipe.id: item for item in planned}
    assignments, accumulated = greedy_protein_fill(planned, daily_target)
    assignments = fill_remaining_macros(
        planned, assignments, accumulated, daily_target, rng or random.Random()
    )
    assignments = fine_tune(assignments, by_id, daily_target)
    missing = find_shortfall(
        assignments,
        {recipe_id: item.recipe for recipe_id, item in by_id.items()},
        ingredients,
        pantry,
    )
    totals = weekly_totals(assignments, by_id)
    accuracy = macro_accuracy(totals, daily_target)
    _logger.info(
        "Planner: assignments=%s missing=%s accuracy=%s",
        len(assignments),
        len(missing),
        accuracy,
    )
    used = {assignment.recipe_id for assignment in assignments}
    return PlanResult(
        assignments=assignments,
        weekly_totals=totals,
        missing_ingredients=missing,
        macro_accuracy=accuracy,
        recipes={recipe_id: by_id[recipe_id] for recipe_id in used},
    )


def _accuracy(actual: float, target: float) -> int:
    if target == 0:
        return 100 if actual == 0 else 0
    return round_half_up((1 - abs(actual - target) / target) * 100)
