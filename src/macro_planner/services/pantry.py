"""Pantry availability and shortfall accounting."""

import math
from collections.abc import Mapping
from uuid import UUID

from macro_planner.domain.planning import (
    Assignment,
    Ingredient,
    PantryEntry,
    Recipe,
    RecipeRequirement,
    ShortfallEntry,
)


def available_servings(recipe: Recipe, pantry: Mapping[UUID, PantryEntry]) -> float:
    """Return the whole servings the pantry can produce.

    A recipe without requirements is unbounded and returns ``math.inf``;
    callers cap it before use.
    """
    servings = math.inf
    for requirement in recipe.requirements:
        entry = pantry.get(requirement.ingredient_id)
        if entry is None:
            return 0
        if requirement.quantity <= 0:
            continue
        servings = min(servings, math.floor(entry.quantity / requirement.quantity))
    if servings == math.inf:
        return servings
    return max(int(servings), 0)


def find_shortfall(
    assignments: list[Assignment],
    recipes: Mapping[UUID, Recipe],
    ingredients: Mapping[UUID, Ingredient],
    pantry: Mapping[UUID, PantryEntry],
) -> list[ShortfallEntry]:
    """Return ingredients the whole plan needs beyond pantry stock."""
    required: dict[UUID, float] = {}
    first_seen: dict[UUID, RecipeRequirement] = {}
    for assignment in assignments:
        for requirement in recipes[assignment.recipe_id].requirements:
            key = requirement.ingredient_id
            required[key] = required.get(key, 0.0) + (
                requirement.quantity * assignment.servings
            )
            first_seen.setdefault(key, requirement)

    missing = []
    for ingredient_id, needed in required.items():
        entry = pantry.get(ingredient_id)
        available = entry.quantity if entry else 0.0
        if needed > available:
            missing.append(
                ShortfallEntry(
                    ingredient_id=ingredient_id,
                    name=ingredients[ingredient_id].name,
                    needed_quantity=needed - available,
                    unit=first_seen[ingredient_id].unit,
                    available_quantity=available,
                )
            )
    return missing
