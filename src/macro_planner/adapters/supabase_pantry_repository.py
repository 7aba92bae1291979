"""Supabase repository for pantry items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_planner.domain.planning import PantryEntry
from macro_planner.services.meal_plans import PantryRepository


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Supabase implementation for user pantries."""

    client: Client

    def list_pantry(self, user_id: UUID) -> list[PantryEntry]:
        """Return the user's pantry entries."""
        response = (
            self.client.table("pantry_items")
            .select("ingredient_id, quantity, unit")
            .eq("user_id", str(user_id))
            .execute()
        )
        return [
            PantryEntry(
                ingredient_id=UUID(row["ingredient_id"]),
                quantity=float(row.get("quantity", 0.0)),
                unit=str(row.get("unit", "")),
            )
            for row in response.data or []
        ]
