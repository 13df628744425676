"""Domain models for the local ingredient catalog."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

IngredientCategory = Literal[
    "protein", "vegetable", "fruit", "grain", "fat", "dairy", "pantry", "other"
]
NutritionSource = Literal["llm_estimated", "usda", "user_entered"]
MatchStatus = Literal["pending", "matched", "no_match"]

INGREDIENT_CATEGORIES: frozenset[str] = frozenset(
    {"protein", "vegetable", "fruit", "grain", "fat", "dairy", "pantry", "other"}
)


def normalize_name(name: str) -> str:
    """Return the uniqueness key for a catalog entry name."""
    return " ".join(name.lower().split())


@dataclass(frozen=True)
class CatalogEntry:
    """An ingredient in the local catalog."""

    id: UUID
    name: str
    normalized_name: str
    category: str
    health_score: int | None
    is_user_added: bool
    source_owner_id: UUID | None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class NutritionRecord:
    """Nutrition per serving for one catalog entry."""

    id: UUID
    entry_id: UUID
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None
    sugar: float | None
    source: str
    external_id: str | None
    match_status: str
    match_confidence: float
    confidence: float
    validated: bool
    data_type: str | None = None
    brand_owner: str | None = None
    ingredients_text: str | None = None

    def __post_init__(self) -> None:
        if self.source == "usda" and not self.external_id:
            raise ValueError("usda nutrition records require an external_id")
        if self.serving_size <= 0:
            raise ValueError("serving_size must be positive")

    @property
    def display_unit(self) -> str:
        """Serving label such as ``100g`` or ``28g``."""
        size = _format_number(self.serving_size)
        if self.serving_size == 1:
            return self.serving_unit
        return f"{size}{self.serving_unit}"


@dataclass(frozen=True)
class CatalogItem:
    """A catalog entry together with its nutrition record."""

    entry: CatalogEntry
    nutrition: NutritionRecord


@dataclass(frozen=True)
class ImportResult:
    """Outcome of materializing an external candidate."""

    entry: CatalogEntry
    nutrition: NutritionRecord
    created: bool


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
