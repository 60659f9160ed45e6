"""Common data schemas shared by the recipe and shopping pipelines."""

import uuid
from datetime import date, datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Categories used by inventory, grocery lists and recipe ingredients. Values
# outside this set are accepted and simply never match a different category.
CATEGORIES = (
    "fruits",
    "vegetables",
    "dairy",
    "meat",
    "pantry",
    "beverages",
    "snacks",
    "frozen",
    "other",
)

DIFFICULTIES = ("easy", "medium", "hard")

PurchaseSource = Literal["scanned", "manual", "grocery_list"]
PurchaseStatus = Literal["pending", "confirmed", "modified", "not_purchased"]


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Generate a unique identifier with a readable prefix."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def clamp_unit(value: float) -> float:
    """Clamp a score into [0, 1]."""
    return max(0.0, min(1.0, value))


# =============================================================================
# Recipes
# =============================================================================


class RecipeIngredient(BaseModel):
    """An ingredient requirement as written in a catalog recipe."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: float = Field(gt=0)
    unit: str
    category: str
    is_optional: bool = False


class NutritionInfo(BaseModel):
    """Per-serving nutrition facts."""

    model_config = ConfigDict(frozen=True)

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class Recipe(BaseModel):
    """Static recipe catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    ingredients: tuple[RecipeIngredient, ...] = ()
    instructions: tuple[str, ...] = ()
    prep_time: int = Field(0, ge=0, description="Minutes")
    cook_time: int = Field(0, ge=0, description="Minutes")
    servings: int = Field(1, gt=0)
    difficulty: str = "easy"
    cuisine: str = ""
    tags: tuple[str, ...] = ()
    image_url: str | None = None
    nutrition_info: NutritionInfo | None = None

    @property
    def total_time(self) -> int:
        """Prep plus cook time in minutes."""
        return self.prep_time + self.cook_time

    @property
    def required_ingredients(self) -> list[RecipeIngredient]:
        return [ing for ing in self.ingredients if not ing.is_optional]


class InventoryItem(BaseModel):
    """Read-only snapshot of an item owned by the inventory collaborator."""

    id: str = Field(default_factory=lambda: new_id("inventory"))
    name: str
    category: str
    quantity: float = 1
    unit: str = "piece"
    is_expired: bool = False
    days_until_expiry: int | None = None
    expiration_date: date | None = None
    image_uri: str | None = None
    confidence: float = 1.0

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return clamp_unit(value)


class RecipeSearchFilters(BaseModel):
    """User-selected filters and expiration tuning for a suggestion request."""

    max_prep_time: int | None = None
    difficulty: str | None = None
    cuisine: str | None = None
    tags: list[str] | None = None
    max_missing_ingredients: int | None = None
    prioritize_expiring: bool = False
    expiration_weight_multiplier: float = Field(0.3, ge=0.0)
    expiration_threshold: int = Field(7, ge=0, description="Days")


class RecipeSuggestion(BaseModel):
    """Ranking output for one recipe; recomputed on every request."""

    recipe: Recipe
    match_score: float = Field(ge=0.0, le=1.0)
    missing_ingredients: list[RecipeIngredient] = Field(default_factory=list)
    available_ingredients: list[RecipeIngredient] = Field(default_factory=list)
    can_make_with_substitutions: bool = False
    estimated_prep_time: int = 0
    expiration_priority: float = Field(0.0, ge=0.0, le=1.0)
    expiring_ingredients_count: int = Field(0, ge=0)
    expiring_ingredients: list[RecipeIngredient] = Field(default_factory=list)


# =============================================================================
# Grocery lists and purchases
# =============================================================================


class GroceryItem(BaseModel):
    """Item on a grocery list, consumed from the grocery-list collaborator."""

    id: str = Field(default_factory=lambda: new_id("grocery"))
    name: str
    quantity: float = 1
    unit: str = "piece"
    category: str = "other"
    is_purchased: bool = False
    notes: str | None = None


class GroceryList(BaseModel):
    """A grocery list as handed over when the shopper starts checking out."""

    id: str = Field(default_factory=lambda: new_id("list"))
    name: str = ""
    items: list[GroceryItem] = Field(default_factory=list)


class PurchaseItem(BaseModel):
    """One expected or observed purchase within a shopping trip."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: new_id("purchase"))
    name: str
    quantity: float = 1
    unit: str = "piece"
    category: str = "other"
    confidence: float = 1.0
    source: PurchaseSource
    status: PurchaseStatus = "pending"
    grocery_list_item_id: str | None = None
    expiration_date: date | None = None
    image_uri: str | None = None
    price: float | None = None
    notes: str | None = None

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return clamp_unit(value)

    @classmethod
    def from_grocery_item(cls, item: GroceryItem) -> "PurchaseItem":
        """Seed an expected purchase from a grocery-list entry."""
        return cls(
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            category=item.category,
            confidence=1.0,
            source="grocery_list",
            status="pending",
            grocery_list_item_id=item.id,
            notes=item.notes,
        )


class Conflict(BaseModel):
    """Quantity or unit disagreement between an expected and an observed item."""

    model_config = ConfigDict(frozen=True)

    item_name: str
    expected_quantity: float
    actual_quantity: float
    expected_unit: str
    actual_unit: str


class PurchaseSummary(BaseModel):
    """Aggregate reconciliation state of one shopping trip."""

    id: str = Field(default_factory=lambda: new_id("post_shopping"))
    grocery_list_id: str
    items: list[PurchaseItem] = Field(default_factory=list)
    total_items: int = 0
    confirmed_items: int = 0
    not_purchased_items: int = 0
    additional_items: int = 0
    efficiency: float = Field(0.0, ge=0.0, le=1.0)
    shopping_date: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def find_item(self, item_id: str) -> PurchaseItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None
