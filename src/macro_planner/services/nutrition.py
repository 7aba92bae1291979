"""Nutrition resolution for recipes."""

import math
from collections.abc import Mapping
from uuid import UUID

from macro_planner.domain.errors import (
    InvalidRequirementError,
    MissingIngredientReferenceError,
)
from macro_planner.domain.planning import Ingredient, MacroProfile, Recipe


def resolve_recipe_macros(
    recipe: Recipe, ingredients: Mapping[UUID, Ingredient]
) -> MacroProfile:
    """Return unrounded macros for one serving of a recipe.

    Each requirement scales its ingredient's per-100-unit profile by
    ``quantity / 100``. Units are summed at face value.
    """
    total = MacroProfile.zero()
    for requirement in recipe.requirements:
        ingredient = ingredients.get(requirement.ingredient_id)
        if ingredient is None:
            raise MissingIngredientReferenceError(recipe.id, requirement.ingredient_id)
        total = total + _per_100(ingredient).scaled(requirement.quantity / 100)
    return total


def ensure_references(
    recipes: list[Recipe], ingredients: Mapping[UUID, Ingredient]
) -> None:
    """Fail on unknown ingredients or negative required quantities.

    A zero quantity is allowed and adds nothing to the recipe.
    """
    for recipe in recipes:
        for requirement in recipe.requirements:
            if requirement.ingredient_id not in ingredients:
                raise MissingIngredientReferenceError(
                    recipe.id, requirement.ingredient_id
                )
            if requirement.quantity < 0:
                raise InvalidRequirementError(
                    recipe.id, requirement.ingredient_id, requirement.quantity
                )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def rounded(profile: MacroProfile) -> MacroProfile:
    """Round every field to a whole unit for display."""
    return MacroProfile(
        calories=float(round_half_up(profile.calories)),
        protein_g=float(round_half_up(profile.protein_g)),
        carbs_g=float(round_half_up(profile.carbs_g)),
        fat_g=float(round_half_up(profile.fat_g)),
    )


def _per_100(ingredient: Ingredient) -> MacroProfile:
    return MacroProfile(
        calories=ingredient.calories,
        protein_g=ingredient.protein_g,
        carbs_g=ingredient.carbs_g,
        fat_g=ingredient.fat_g,
    )
