"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from macro_planner.api.plan_models import (
    AssignmentPayload,
    GeneratePlanRequest,
    GeneratePlanResponse,
    MacroAccuracyPayload,
    MacroTotalsPayload,
    MissingIngredientPayload,
)
from macro_planner.app_logging import configure_logging
from macro_planner.containers import AppContainer
from macro_planner.domain.errors import (
    InvalidRequirementError,
    InvalidTargetError,
    MissingIngredientReferenceError,
    ProfileNotFoundError,
)
from macro_planner.services.meal_plans import GeneratedPlan
from macro_planner.services.nutrition import rounded


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/plans/generate")
    async def generate_plan(
        payload: GeneratePlanRequest, request: Request
    ) -> GeneratePlanResponse:
        """Generate and store the weekly plan for a user."""
        state_container: AppContainer = request.app.state.container
        try:
            generated = state_container.meal_plan_service.generate(
                payload.user_id, payload.week_start
            )
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except (
            InvalidTargetError,
            InvalidRequirementError,
            MissingIngredientReferenceError,
        ) as exc:
            logger.warning(
                "Plan generation rejected",
                extra={"user_id": str(payload.user_id)},
                exc_info=True,
            )
            raise HTTPException(
                status_code=422, detail=str(exc)
            ) from exc
        return _to_response(generated)

    return app


def _to_response(generated: GeneratedPlan) -> GeneratePlanResponse:
    """Map a generated plan to its response payload."""
    result = generated.result
    totals = rounded(result.weekly_totals)
    return GeneratePlanResponse(
        meal_plan_id=generated.plan.id,
        week_start=generated.plan.week_start,
        assignments=[
            AssignmentPayload(
                recipe_id=assignment.recipe_id,
                recipe_name=result.recipes[assignment.recipe_id].recipe.name,
                servings=assignment.servings,
                day_of_week=assignment.day_of_week,
                meal_slot=assignment.meal_slot,
            )
            for assignment in result.assignments
        ],
        weekly_totals=MacroTotalsPayload(
            kcal=totals.calories,
            protein=totals.protein_g,
            carbs=totals.carbs_g,
            fat=totals.fat_g,
        ),
        missing_ingredients=[
            MissingIngredientPayload(
                ingredient_id=entry.ingredient_id,
                ingredient_name=entry.name,
                needed_quantity=entry.needed_quantity,
                unit=entry.unit,
                available_quantity=entry.available_quantity,
            )
            for entry in result.missing_ingredients
        ],
        macro_accuracy=MacroAccuracyPayload(
            calories=result.macro_accuracy.calories,
            protein=result.macro_accuracy.protein,
            carbs=result.macro_accuracy.carbs,
            fat=result.macro_accuracy.fat,
        ),
    )
