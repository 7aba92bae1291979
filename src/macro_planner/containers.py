"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from macro_planner.adapters.supabase_catalogue_repository import (
    SupabaseCatalogueRepository,
)
from macro_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from macro_planner.adapters.supabase_pantry_repository import SupabasePantryRepository
from macro_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from macro_planner.config import Settings
from macro_planner.services.meal_plans import MealPlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_plan_service: MealPlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_plan_service = MealPlanService(
        profile_repository=SupabaseProfileRepository(supabase_client),
        catalogue_repository=SupabaseCatalogueRepository(supabase_client),
        pantry_repository=SupabasePantryRepository(supabase_client),
        meal_plan_repository=SupabaseMealPlanRepository(supabase_client),
        random_seed=resolved_settings.plan_random_seed,
    )
    return AppContainer(
        settings=resolved_settings,
        meal_plan_service=meal_plan_service,
    )
