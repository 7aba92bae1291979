"""Domain models for weekly meal planning."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


@dataclass(frozen=True)
class MacroProfile:
    """Energy and macronutrient totals."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @classmethod
    def zero(cls) -> "MacroProfile":
        return cls(calories=0.0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    def scaled(self, factor: float) -> "MacroProfile":
        """Return the profile multiplied by a factor."""
        return MacroProfile(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
        )

    def grams(self, macro: str) -> float:
        """Return grams for protein, carbs or fat by name."""
        return float(getattr(self, f"{macro}_g"))


@dataclass(frozen=True)
class Ingredient:
    """Reference ingredient with macros per 100 units."""

    id: UUID
    name: str
    unit: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class RecipeStep:
    """Single preparation step."""

    text: str
    duration_seconds: int | None = None


@dataclass(frozen=True)
class RecipeRequirement:
    """Ingredient quantity needed for one serving."""

    ingredient_id: UUID
    quantity: float
    unit: str


@dataclass(frozen=True)
class Recipe:
    """Recipe with per-serving ingredient requirements."""

    id: UUID
    name: str
    requirements: tuple[RecipeRequirement, ...]
    steps: tuple[RecipeStep, ...] = ()
    skill_level: str = "beginner"
    default_servings: int = 1


@dataclass(frozen=True)
class PantryEntry:
    """Quantity of an ingredient on hand."""

    ingredient_id: UUID
    quantity: float
    unit: str


@dataclass(frozen=True)
class MacroTarget:
    """Daily energy target with macro split as percent of energy."""

    calories: float
    protein_pct: float
    carbs_pct: float
    fat_pct: float

    def daily_grams(self) -> MacroProfile:
        """Convert the percentage split into daily grams."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.calories * self.protein_pct / 100 / PROTEIN_KCAL_PER_G,
            carbs_g=self.calories * self.carbs_pct / 100 / CARBS_KCAL_PER_G,
            fat_g=self.calories * self.fat_pct / 100 / FAT_KCAL_PER_G,
        )


class MealSlot(str, Enum):
    """Meal slots within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class PlannedRecipe:
    """Recipe with resolved per-serving macros and pantry availability."""

    recipe: Recipe
    macros: MacroProfile
    available_servings: float

    def density(self, macro: str) -> float:
        """Grams of a macro per kcal, zero for energy-free recipes."""
        if self.macros.calories <= 0:
            return 0.0
        return self.macros.grams(macro) / self.macros.calories


@dataclass(frozen=True)
class Assignment:
    """One recipe placement in the weekly plan."""

    recipe_id: UUID
    servings: int
    day_of_week: int
    meal_slot: MealSlot


@dataclass(frozen=True)
class ShortfallEntry:
    """Ingredient quantity the plan needs beyond pantry stock."""

    ingredient_id: UUID
    name: str
    needed_quantity: float
    unit: str
    available_quantity: float


@dataclass(frozen=True)
class MacroAccuracy:
    """Signed accuracy percentages against the daily target."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class PlanResult:
    """Output of a planning run."""

    assignments: list[Assignment]
    weekly_totals: MacroProfile
    missing_ingredients: list[ShortfallEntry]
    macro_accuracy: MacroAccuracy
    recipes: dict[UUID, PlannedRecipe] = field(default_factory=dict)
