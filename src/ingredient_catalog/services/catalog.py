"""Local ingredient catalog queries and writes."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from ingredient_catalog.domain.catalog import (
    INGREDIENT_CATEGORIES,
    CatalogEntry,
    CatalogItem,
    NutritionRecord,
    normalize_name,
)
from ingredient_catalog.domain.health import HealthScore
from ingredient_catalog.domain.nutrition import NutrientProfile
from ingredient_catalog.domain.search import LocalMatch, NormalizedQuery
from ingredient_catalog.errors import CatalogConflict, NotFound, ValidationError
from ingredient_catalog.services.cache import IMPORTED_ID_TTL_SECONDS, Cache
from ingredient_catalog.services.health import calculate_health_score
from ingredient_catalog.services.produce import ProduceWeightTable
from ingredient_catalog.services.ranking import score_description

PRODUCE_ENTRY_CATEGORIES = frozenset({"fruit", "vegetable"})

# Serving units whose size converts to grams (volume counted 1:1).
GRAMS_PER_SERVING_UNIT: dict[str, float] = {
    "g": 1.0,
    "grm": 1.0,
    "ml": 1.0,
    "mlt": 1.0,
    "oz": 28.3495,
    "lb": 453.592,
    "kg": 1000.0,
}

_logger = logging.getLogger(__name__)


def serving_grams(serving_size: float, serving_unit: str) -> float | None:
    """Return a serving's weight in grams, or None for household units."""
    per_unit = GRAMS_PER_SERVING_UNIT.get(serving_unit.strip().lower())
    if per_unit is None:
        return None
    return serving_size * per_unit


class CatalogRepository(Protocol):
    """Persistence interface for catalog entries and their nutrition."""

    def search_entries(self, text: str, limit: int) -> list[CatalogItem]:
        """Return non-deleted entries whose normalized name contains text."""

    def get_entry(self, entry_id: UUID) -> CatalogEntry | None:
        """Return an entry by id, including soft-deleted ones."""

    def find_entry_by_normalized_name(self, normalized_name: str) -> CatalogEntry | None:
        """Return the non-deleted entry holding a normalized name."""

    def find_nutrition_by_external_id(self, external_id: str) -> NutritionRecord | None:
        """Return the nutrition record imported from an external id."""

    def get_nutrition_for_entry(self, entry_id: UUID) -> NutritionRecord | None:
        """Return the primary nutrition record of an entry."""

    def list_imported_external_ids(self, external_ids: list[str]) -> set[str]:
        """Return the subset of external ids already present in the catalog."""

    def create_entry(self, payload: dict[str, object]) -> CatalogEntry:
        """Insert an entry; raises CatalogConflict on a duplicate name."""

    def update_health_score(self, entry_id: UUID, health_score: int) -> None:
        """Set an entry's health score."""

    def create_nutrition(self, payload: dict[str, object]) -> NutritionRecord:
        """Insert a nutrition record; raises CatalogConflict on a duplicate id."""

    def soft_delete_entry(self, entry_id: UUID, deleted_at: datetime) -> None:
        """Mark an entry deleted."""


@dataclass
class ManualEntry:
    """A user-entered ingredient with nutrition per serving."""

    name: str
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    category: str = "other"
    fiber: float | None = None
    sugar: float | None = None


@dataclass
class CatalogService:
    """Application service for the local catalog."""

    repository: CatalogRepository
    cache: Cache
    weights: ProduceWeightTable
    search_limit: int = 20

    def search(self, query: NormalizedQuery) -> list[LocalMatch]:
        """Search non-deleted entries and score them against the query."""
        items = self.repository.search_entries(query.text, self.search_limit)
        if not items and len(query.tokens) > 1:
            longest = max(query.tokens, key=len)
            items = self.repository.search_entries(longest, self.search_limit)

        matches = [
            LocalMatch(
                entry=item.entry,
                nutrition=item.nutrition,
                score=score_description(query.tokens, item.entry.name),
                default_grams=self._default_grams(item.entry),
            )
            for item in items
            if not item.entry.is_deleted
        ]
        return sorted(matches, key=lambda match: match.score, reverse=True)

    def imported_external_ids(self, external_ids: list[str]) -> set[str]:
        """Return which external ids already exist in the catalog."""
        known = {
            external_id
            for external_id in external_ids
            if self.cache.get(_imported_key(external_id)) is not None
        }
        remaining = [
            external_id for external_id in dict.fromkeys(external_ids)
            if external_id not in known
        ]
        if remaining:
            stored = self.repository.list_imported_external_ids(remaining)
            for external_id in stored:
                self.mark_imported(external_id)
            known |= stored
        return known

    def mark_imported(self, external_id: str) -> None:
        self.cache.set(_imported_key(external_id), True, ttl_seconds=IMPORTED_ID_TTL_SECONDS)

    def get(self, entry_id: UUID) -> CatalogItem:
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.is_deleted:
            raise NotFound(f"Ingredient {entry_id} not found")
        nutrition = self.repository.get_nutrition_for_entry(entry_id)
        if nutrition is None:
            raise NotFound(f"Ingredient {entry_id} has no nutrition record")
        return CatalogItem(entry=entry, nutrition=nutrition)

    def create_manual_entry(self, user_id: UUID, manual: ManualEntry) -> CatalogItem:
        """Create a user-entered ingredient.

        Raises CatalogConflict when a non-deleted entry already uses the
        normalized name.
        """
        name = manual.name.strip()
        if not name:
            raise ValidationError("Ingredient name is required")
        category = manual.category.strip().lower() or "other"
        if category not in INGREDIENT_CATEGORIES:
            raise ValidationError(f"Unknown category: {manual.category}")
        if manual.serving_size <= 0:
            raise ValidationError("Serving size must be positive")

        normalized = normalize_name(name)
        if self.repository.find_entry_by_normalized_name(normalized) is not None:
            raise CatalogConflict(f"Ingredient '{name}' already exists")

        entry = self.repository.create_entry(
            {
                "name": name,
                "normalized_name": normalized,
                "category": category,
                "health_score": None,
                "is_user_added": True,
                "source_owner_id": user_id,
            }
        )
        try:
            nutrition = self.repository.create_nutrition(
                {
                    "entry_id": entry.id,
                    "serving_size": manual.serving_size,
                    "serving_unit": manual.serving_unit.strip() or "g",
                    "calories": manual.calories,
                    "protein": manual.protein,
                    "carbs": manual.carbs,
                    "fat": manual.fat,
                    "fiber": manual.fiber,
                    "sugar": manual.sugar,
                    "source": "user_entered",
                    "external_id": None,
                    "match_status": "pending",
                    "match_confidence": 0.0,
                    "confidence": 0.8,
                    "validated": False,
                }
            )
        except Exception:
            self.discard_orphan(entry.id)
            raise
        return CatalogItem(entry=entry, nutrition=nutrition)

    def soft_delete(self, entry_id: UUID) -> None:
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.is_deleted:
            raise NotFound(f"Ingredient {entry_id} not found")
        self.repository.soft_delete_entry(entry_id, datetime.now(tz=UTC))
        _logger.info("Soft-deleted ingredient", extra={"entry_id": str(entry_id)})

    def discard_orphan(self, entry_id: UUID) -> None:
        """Soft-delete an entry left without nutrition by a failed write."""
        _logger.warning("Discarding orphan ingredient", extra={"entry_id": str(entry_id)})
        self.repository.soft_delete_entry(entry_id, datetime.now(tz=UTC))

    def recompute_health(self, entry_id: UUID) -> HealthScore:
        """Recompute the health score from the stored nutrition record."""
        item = self.get(entry_id)
        nutrition = item.nutrition
        grams = serving_grams(nutrition.serving_size, nutrition.serving_unit)
        factor = 100 / grams if grams else 1.0
        per_100 = NutrientProfile(
            calories=nutrition.calories * factor,
            protein=nutrition.protein * factor,
            carbs=nutrition.carbs * factor,
            fat=nutrition.fat * factor,
            fiber=nutrition.fiber * factor if nutrition.fiber is not None else None,
            sugar=nutrition.sugar * factor if nutrition.sugar is not None else None,
        )
        health = calculate_health_score(
            nutrition.data_type, nutrition.ingredients_text, per_100
        )
        if health.score != item.entry.health_score:
            self.repository.update_health_score(entry_id, health.score)
        return health

    def _default_grams(self, entry: CatalogEntry) -> float | None:
        if entry.category not in PRODUCE_ENTRY_CATEGORIES:
            return None
        return self.weights.default_grams(entry.name)


def _imported_key(external_id: str) -> str:
    return f"catalog:imported:{external_id}"
