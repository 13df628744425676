"""Materializes external reference foods into the local catalog."""

import logging
from dataclasses import dataclass, replace
from uuid import UUID

from ingredient_catalog.domain.catalog import (
    INGREDIENT_CATEGORIES,
    CatalogEntry,
    ImportResult,
    normalize_name,
)
from ingredient_catalog.domain.nutrition import ExternalCandidate, NutrientProfile
from ingredient_catalog.errors import CatalogConflict, NotFound, ValidationError
from ingredient_catalog.services.catalog import CatalogService, serving_grams
from ingredient_catalog.services.category import FALLBACK_CATEGORY, CategoryDetector
from ingredient_catalog.services.external import ExternalNutritionService
from ingredient_catalog.services.health import score_candidate

DEFAULT_SERVING_SIZE = 100.0
DEFAULT_SERVING_UNIT = "g"
IMPORTED_CONFIDENCE = 0.95
OVERRIDDEN_CONFIDENCE = 0.8
NAME_PARTS = 3

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportRequest:
    """A user's request to import one external candidate."""

    external_id: str
    category: str | None = None
    name_override: str | None = None
    calories_override: float | None = None
    protein_override: float | None = None
    carbs_override: float | None = None
    fat_override: float | None = None
    serving_size_override: float | None = None
    serving_unit_override: str | None = None

    @property
    def has_overrides(self) -> bool:
        return any(
            value is not None
            for value in (
                self.name_override,
                self.calories_override,
                self.protein_override,
                self.carbs_override,
                self.fat_override,
                self.serving_size_override,
                self.serving_unit_override,
            )
        )


@dataclass(frozen=True)
class ServingNutrition:
    serving_size: float
    serving_unit: str
    nutrients: NutrientProfile


def clean_description(description: str) -> str:
    """Keep the first three comma-separated parts of a reference description."""
    parts = [part.strip() for part in description.split(",") if part.strip()]
    return ", ".join(parts[:NAME_PARTS])


def resolve_serving(
    candidate: ExternalCandidate,
    size_override: float | None = None,
    unit_override: str | None = None,
) -> ServingNutrition:
    """Pick the default serving for an import and scale nutrients to it.

    Order: explicit override, declared serving, first common portion, 100 g.
    Nutrients stay per 100 units when the serving unit has no gram weight.
    """
    per_100 = candidate.nutrients
    if size_override is not None and size_override > 0:
        unit = (unit_override or DEFAULT_SERVING_UNIT).strip() or DEFAULT_SERVING_UNIT
        return _scaled(per_100, size_override, unit)
    if candidate.serving_size and candidate.serving_unit:
        return _scaled(per_100, candidate.serving_size, candidate.serving_unit)
    for portion in candidate.portions:
        if portion.gram_weight > 0:
            return _scaled(per_100, portion.gram_weight, DEFAULT_SERVING_UNIT)
    return _scaled(per_100, DEFAULT_SERVING_SIZE, DEFAULT_SERVING_UNIT)


def _scaled(per_100: NutrientProfile, size: float, unit: str) -> ServingNutrition:
    grams = serving_grams(size, unit)
    multiplier = grams / 100 if grams is not None else 1.0
    return ServingNutrition(
        serving_size=size, serving_unit=unit, nutrients=per_100.scaled(multiplier)
    )


@dataclass
class ImportService:
    """Turns an external candidate into a catalog entry with nutrition."""

    catalog: CatalogService
    external: ExternalNutritionService
    categories: CategoryDetector | None = None

    async def import_candidate(self, request: ImportRequest, user_id: UUID) -> ImportResult:
        """Import a candidate once; repeated imports return the first result."""
        external_id = request.external_id.strip()
        if not external_id:
            raise ValidationError("externalId is required")
        category = (request.category or "").strip().lower() or None
        if category is not None and category not in INGREDIENT_CATEGORIES:
            raise ValidationError(f"Unknown category: {request.category}")

        existing = self._existing(external_id)
        if existing is not None:
            return existing

        candidate = await self.external.get_details(external_id)
        if category is None:
            category = await self._detect_category(candidate.description)
        health = score_candidate(candidate)
        name = (request.name_override or "").strip() or clean_description(
            candidate.description
        )
        if not name:
            raise ValidationError("Imported ingredient has no name")

        entry, entry_created = self._attach_entry(
            name=name,
            category=category,
            health_score=health.score,
            request=request,
            user_id=user_id,
        )

        payload = self._nutrition_payload(entry, candidate, request)
        try:
            nutrition = self.catalog.repository.create_nutrition(payload)
        except CatalogConflict:
            if entry_created:
                self.catalog.discard_orphan(entry.id)
            winner = self._existing(external_id)
            if winner is None:
                raise
            _logger.info(
                "Concurrent import resolved", extra={"external_id": external_id}
            )
            return winner
        except Exception:
            if entry_created:
                self.catalog.discard_orphan(entry.id)
            raise

        self.catalog.mark_imported(external_id)
        _logger.info(
            "Imported reference food",
            extra={
                "external_id": external_id,
                "entry_id": str(entry.id),
                "attached": not entry_created,
            },
        )
        return ImportResult(entry=entry, nutrition=nutrition, created=True)

    async def _detect_category(self, description: str) -> str:
        if self.categories is None:
            return FALLBACK_CATEGORY
        return await self.categories.detect(description)

    def _existing(self, external_id: str) -> ImportResult | None:
        nutrition = self.catalog.repository.find_nutrition_by_external_id(external_id)
        if nutrition is None:
            return None
        entry = self.catalog.repository.get_entry(nutrition.entry_id)
        if entry is None:
            raise NotFound(f"Ingredient {nutrition.entry_id} not found")
        self.catalog.mark_imported(external_id)
        return ImportResult(entry=entry, nutrition=nutrition, created=False)

    def _attach_entry(
        self,
        *,
        name: str,
        category: str,
        health_score: int,
        request: ImportRequest,
        user_id: UUID,
    ) -> tuple[CatalogEntry, bool]:
        repository = self.catalog.repository
        normalized = normalize_name(name)
        entry = repository.find_entry_by_normalized_name(normalized)
        if entry is not None:
            repository.update_health_score(entry.id, health_score)
            return replace(entry, health_score=health_score), False

        user_added = request.has_overrides
        try:
            created = repository.create_entry(
                {
                    "name": name,
                    "normalized_name": normalized,
                    "category": category,
                    "health_score": health_score,
                    "is_user_added": user_added,
                    "source_owner_id": user_id if user_added else None,
                }
            )
        except CatalogConflict:
            entry = repository.find_entry_by_normalized_name(normalized)
            if entry is None:
                raise
            repository.update_health_score(entry.id, health_score)
            return replace(entry, health_score=health_score), False
        return created, True

    @staticmethod
    def _nutrition_payload(
        entry: CatalogEntry, candidate: ExternalCandidate, request: ImportRequest
    ) -> dict[str, object]:
        serving = resolve_serving(
            candidate, request.serving_size_override, request.serving_unit_override
        )
        nutrients = serving.nutrients
        overridden = request.has_overrides
        return {
            "entry_id": entry.id,
            "serving_size": serving.serving_size,
            "serving_unit": serving.serving_unit,
            "calories": _override(request.calories_override, nutrients.calories),
            "protein": _override(request.protein_override, nutrients.protein),
            "carbs": _override(request.carbs_override, nutrients.carbs),
            "fat": _override(request.fat_override, nutrients.fat),
            "fiber": nutrients.fiber,
            "sugar": nutrients.sugar,
            "source": "usda",
            "external_id": candidate.external_id,
            "match_status": "matched",
            "match_confidence": 1.0,
            "confidence": OVERRIDDEN_CONFIDENCE if overridden else IMPORTED_CONFIDENCE,
            "validated": not overridden,
            "data_type": candidate.data_type,
            "brand_owner": candidate.brand_owner,
            "ingredients_text": candidate.ingredients_text,
        }


def _override(value: float | None, computed: float) -> float:
    return computed if value is None else float(value)

