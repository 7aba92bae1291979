"""Supabase repository for user macro targets."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_planner.domain.planning import MacroTarget
from macro_planner.services.meal_plans import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation reading targets from the users table."""

    client: Client

    def get_target(self, user_id: UUID) -> MacroTarget | None:
        """Return the user's daily target, if the profile exists."""
        response = (
            self.client.table("users")
            .select("kcal_target, protein_pct, carb_pct, fat_pct")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return MacroTarget(
            calories=_or_default(row.get("kcal_target"), 2000),
            protein_pct=_or_default(row.get("protein_pct"), 30),
            carbs_pct=_or_default(row.get("carb_pct"), 40),
            fat_pct=_or_default(row.get("fat_pct"), 30),
        )


def _or_default(value: object, default: float) -> float:
    """Replace a NULL column with the schema default."""
    return float(default if value is None else value)
