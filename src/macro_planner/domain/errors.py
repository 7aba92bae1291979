"""Errors raised by the planning engine and services."""

from uuid import UUID


class PlanningError(Exception):
    """Base class for planning failures."""


class InvalidTargetError(PlanningError):
    """Raised when a daily target cannot be planned against."""


class EmptyCatalogueError(PlanningError):
    """Raised when no recipe can be made from the pantry."""


class MissingIngredientReferenceError(PlanningError):
    """Raised when a recipe requires an ingredient absent from the catalogue."""

    def __init__(self, recipe_id: UUID, ingredient_id: UUID) -> None:
        super().__init__(
            f"Recipe {recipe_id} references unknown ingredient {ingredient_id}"
        )
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id


class ProfileNotFoundError(PlanningError):
    """Raised when a user has no stored profile with macro targets."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"User profile not found: {user_id}")
        self.user_id = user_id


class InvalidRequirementError(PlanningError):
    """Raised when a recipe requires a negative quantity of an ingredient."""

    def __init__(self, recipe_id: UUID, ingredient_id: UUID, quantity: float) -> None:
        super().__init__(
            f"Recipe {recipe_id} requires negative quantity {quantity} "
            f"of ingredient {ingredient_id}"
        )
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        self.quantity = quantity
