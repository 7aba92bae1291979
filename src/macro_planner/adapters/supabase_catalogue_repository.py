"""Supabase repository for the ingredient and recipe catalogue."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_planner.domain.planning import (
    Ingredient,
    Recipe,
    RecipeRequirement,
    RecipeStep,
)
from macro_planner.services.meal_plans import CatalogueRepository


@dataclass
class SupabaseCatalogueRepository(CatalogueRepository):
    """Supabase-backed reference data for planning."""

    client: Client

    def list_ingredients(self) -> list[Ingredient]:
        """Return the full ingredient catalogue."""
        response = self.client.table("ingredients").select("*").execute()
        return [_parse_ingredient(row) for row in response.data or []]

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes with their requirements."""
        response = (
            self.client.table("recipes")
            .select("*, recipe_ingredients (ingredient_id, quantity, unit)")
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    return Ingredient(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        unit=str(row.get("unit", "")),
        calories=float(row.get("kcal", 0.0)),
        protein_g=float(row.get("protein", 0.0)),
        carbs_g=float(row.get("carbs", 0.0)),
        fat_g=float(row.get("fat", 0.0)),
    )


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row with embedded requirements into a domain model."""
    requirements = tuple(
        RecipeRequirement(
            ingredient_id=UUID(item["ingredient_id"]),
            quantity=float(item.get("quantity", 0.0)),
            unit=str(item.get("unit", "")),
        )
        for item in row.get("recipe_ingredients") or []
    )
    raw_steps = row.get("steps") or []
    steps = tuple(
        RecipeStep(
            text=str(step.get("text", "")),
            duration_seconds=step.get("time_s"),
        )
        for step in sorted(raw_steps, key=lambda step: step.get("order", 0))
    )
    return Recipe(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        requirements=requirements,
        steps=steps,
        skill_level=str(row.get("skill_level", "beginner")),
        default_servings=int(row.get("default_servings", 1)),
    )
