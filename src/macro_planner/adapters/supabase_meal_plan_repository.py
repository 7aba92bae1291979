"""Supabase repository for weekly meal plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from macro_planner.domain.meal_plans import MealPlanRecord, MealRecord
from macro_planner.domain.planning import Assignment, MacroProfile, MealSlot
from macro_planner.services.meal_plans import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plans and their meals."""

    client: Client

    def delete_plan(self, user_id: UUID, week_start: date) -> None:
        """Delete the plan for a week; meals cascade."""
        self.client.table("meal_plans").delete().eq("user_id", str(user_id)).eq(
            "week_start", week_start.isoformat()
        ).execute()

    def create_plan(
        self, user_id: UUID, week_start: date, totals: MacroProfile
    ) -> MealPlanRecord:
        """Create a plan header and return it."""
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "user_id": str(user_id),
                    "week_start": week_start.isoformat(),
                    "total_kcal": int(totals.calories),
                    "total_protein": int(totals.protein_g),
                    "total_carbs": int(totals.carbs_g),
                    "total_fat": int(totals.fat_g),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return _parse_plan(response.data[0])

    def create_meal(self, meal_plan_id: UUID, assignment: Assignment) -> MealRecord:
        """Create a meal row for an assignment."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "meal_plan_id": str(meal_plan_id),
                    "recipe_id": str(assignment.recipe_id),
                    "servings": assignment.servings,
                    "day_of_week": assignment.day_of_week,
                    "meal_slot": assignment.meal_slot.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        row = response.data[0]
        return MealRecord(
            id=UUID(row["id"]),
            meal_plan_id=UUID(row["meal_plan_id"]),
            recipe_id=UUID(row["recipe_id"]),
            servings=int(row["servings"]),
            day_of_week=int(row["day_of_week"]),
            meal_slot=MealSlot(row["meal_slot"]),
        )


def _parse_plan(row: dict[str, object]) -> MealPlanRecord:
    return MealPlanRecord(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        week_start=date.fromisoformat(str(row["week_start"])),
        total_kcal=int(row.get("total_kcal", 0)),
        total_protein=int(row.get("total_protein", 0)),
        total_carbs=int(row.get("total_carbs", 0)),
        total_fat=int(row.get("total_fat", 0)),
    )
