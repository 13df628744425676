"""Supabase implementation of the ingredient catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from ingredient_catalog.domain.catalog import CatalogEntry, CatalogItem, NutritionRecord
from ingredient_catalog.errors import CatalogConflict
from ingredient_catalog.services.catalog import CatalogRepository

ENTRIES_TABLE = "ingredients"
NUTRITION_TABLE = "ingredient_nutrition"
UNIQUE_VIOLATION = "23505"

# Domain field -> column.
_ENTRY_COLUMNS = {
    "name": "name",
    "normalized_name": "name_normalized",
    "category": "category",
    "health_score": "health_score",
    "is_user_added": "is_user_added",
    "source_owner_id": "added_by_user_id",
}
_NUTRITION_COLUMNS = {
    "entry_id": "ingredient_id",
    "serving_size": "serving_size",
    "serving_unit": "serving_unit",
    "calories": "calories",
    "protein": "protein",
    "carbs": "carbs",
    "fat": "fat",
    "fiber": "fiber",
    "sugar": "sugar",
    "source": "source",
    "external_id": "usda_fdc_id",
    "match_status": "usda_match_status",
    "match_confidence": "usda_match_confidence",
    "confidence": "confidence_score",
    "validated": "validated",
    "data_type": "usda_data_type",
    "brand_owner": "usda_brand_owner",
    "ingredients_text": "usda_ingredients_list",
}


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for catalog entries and nutrition."""

    client: Client

    def search_entries(self, text: str, limit: int) -> list[CatalogItem]:
        """Search live entries by normalized name."""
        response = (
            self.client.table(ENTRIES_TABLE)
            .select("*")
            .is_("deleted_at", "null")
            .ilike("name_normalized", f"%{text}%")
            .limit(limit)
            .execute()
        )
        entries = [_parse_entry(row) for row in response.data or []]
        if not entries:
            return []

        nutrition_response = (
            self.client.table(NUTRITION_TABLE)
            .select("*")
            .in_("ingredient_id", [str(entry.id) for entry in entries])
            .execute()
        )
        nutrition_by_entry: dict[UUID, NutritionRecord] = {}
        for row in nutrition_response.data or []:
            record = _parse_nutrition(row)
            nutrition_by_entry.setdefault(record.entry_id, record)
        return [
            CatalogItem(entry=entry, nutrition=nutrition_by_entry[entry.id])
            for entry in entries
            if entry.id in nutrition_by_entry
        ]

    def get_entry(self, entry_id: UUID) -> CatalogEntry | None:
        response = (
            self.client.table(ENTRIES_TABLE)
            .select("*")
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def find_entry_by_normalized_name(self, normalized_name: str) -> CatalogEntry | None:
        response = (
            self.client.table(ENTRIES_TABLE)
            .select("*")
            .eq("name_normalized", normalized_name)
            .is_("deleted_at", "null")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def find_nutrition_by_external_id(self, external_id: str) -> NutritionRecord | None:
        response = (
            self.client.table(NUTRITION_TABLE)
            .select("*")
            .eq("usda_fdc_id", external_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_nutrition(response.data[0])

    def get_nutrition_for_entry(self, entry_id: UUID) -> NutritionRecord | None:
        response = (
            self.client.table(NUTRITION_TABLE)
            .select("*")
            .eq("ingredient_id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_nutrition(response.data[0])

    def list_imported_external_ids(self, external_ids: list[str]) -> set[str]:
        if not external_ids:
            return set()
        response = (
            self.client.table(NUTRITION_TABLE)
            .select("usda_fdc_id")
            .in_("usda_fdc_id", external_ids)
            .execute()
        )
        return {
            str(row["usda_fdc_id"])
            for row in response.data or []
            if row.get("usda_fdc_id") is not None
        }

    def create_entry(self, payload: dict[str, object]) -> CatalogEntry:
        """Create an entry and return it."""
        row = _to_columns(payload, _ENTRY_COLUMNS)
        try:
            response = self.client.table(ENTRIES_TABLE).insert(row).execute()
        except APIError as exc:
            _raise_conflict(exc)
            raise
        if not response.data:
            raise RuntimeError("Failed to create ingredient")
        return _parse_entry(response.data[0])

    def update_health_score(self, entry_id: UUID, health_score: int) -> None:
        self.client.table(ENTRIES_TABLE).update({"health_score": health_score}).eq(
            "id", str(entry_id)
        ).execute()

    def create_nutrition(self, payload: dict[str, object]) -> NutritionRecord:
        """Create a nutrition record and return it."""
        row = _to_columns(payload, _NUTRITION_COLUMNS)
        try:
            response = self.client.table(NUTRITION_TABLE).insert(row).execute()
        except APIError as exc:
            _raise_conflict(exc)
            raise
        if not response.data:
            raise RuntimeError("Failed to create nutrition record")
        return _parse_nutrition(response.data[0])

    def soft_delete_entry(self, entry_id: UUID, deleted_at: datetime) -> None:
        self.client.table(ENTRIES_TABLE).update(
            {"deleted_at": deleted_at.isoformat()}
        ).eq("id", str(entry_id)).execute()


def _raise_conflict(exc: APIError) -> None:
    if exc.code == UNIQUE_VIOLATION:
        raise CatalogConflict(exc.message or "Duplicate catalog record") from exc


def _to_columns(payload: dict[str, object], columns: dict[str, str]) -> dict[str, object]:
    row: dict[str, object] = {}
    for key, value in payload.items():
        row[columns[key]] = str(value) if isinstance(value, UUID) else value
    return row


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _parse_entry(row: dict[str, object]) -> CatalogEntry:
    """Parse an ingredients row into a domain model."""
    deleted_raw = row.get("deleted_at")
    owner_raw = row.get("added_by_user_id")
    health_raw = row.get("health_score")
    return CatalogEntry(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        normalized_name=str(row.get("name_normalized", "")),
        category=str(row.get("category") or "other"),
        health_score=int(health_raw) if health_raw is not None else None,
        is_user_added=bool(row.get("is_user_added", False)),
        source_owner_id=UUID(str(owner_raw)) if owner_raw else None,
        deleted_at=datetime.fromisoformat(deleted_raw)
        if isinstance(deleted_raw, str) and deleted_raw
        else None,
    )


def _parse_nutrition(row: dict[str, object]) -> NutritionRecord:
    """Parse an ingredient_nutrition row into a domain model."""
    external_raw = row.get("usda_fdc_id")
    return NutritionRecord(
        id=UUID(str(row["id"])),
        entry_id=UUID(str(row["ingredient_id"])),
        serving_size=float(row.get("serving_size") or 100),
        serving_unit=str(row.get("serving_unit") or "g"),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        fiber=_optional_float(row.get("fiber")),
        sugar=_optional_float(row.get("sugar")),
        source=str(row.get("source") or "llm_estimated"),
        external_id=str(external_raw) if external_raw is not None else None,
        match_status=str(row.get("usda_match_status") or "pending"),
        match_confidence=float(row.get("usda_match_confidence") or 0.0),
        confidence=float(row.get("confidence_score") or 0.0),
        validated=bool(row.get("validated", False)),
        data_type=row.get("usda_data_type"),
        brand_owner=row.get("usda_brand_owner"),
        ingredients_text=row.get("usda_ingredients_list"),
    )
