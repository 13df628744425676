"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import httpx
import pytest

from ingredient_catalog.adapters.fdc_client import FdcClient
from ingredient_catalog.config import Settings
from ingredient_catalog.containers import AppContainer
from ingredient_catalog.domain.catalog import CatalogEntry, CatalogItem, NutritionRecord
from ingredient_catalog.errors import CatalogConflict
from ingredient_catalog.services.auth import AuthResolver, UserIdentity
from ingredient_catalog.services.cache import InMemoryCache
from ingredient_catalog.services.catalog import CatalogRepository, CatalogService
from ingredient_catalog.services.category import CategoryDetectionClient, CategoryDetector
from ingredient_catalog.services.external import ExternalNutritionService
from ingredient_catalog.services.importer import ImportService
from ingredient_catalog.services.produce import (
    ProduceEstimationClient,
    ProduceExtractionService,
    ProduceWeightResolver,
    ProduceWeightTable,
)
from ingredient_catalog.services.search import SearchService

USER_ID = UUID("00000000-0000-0000-0000-0000000000aa")
TOKEN = "user-token"


def fdc_food(  # noqa: PLR0913
    fdc_id: int,
    description: str,
    data_type: str = "Foundation",
    calories: float = 100.0,
    protein: float = 10.0,
    carbs: float = 10.0,
    fat: float = 2.0,
    fiber: float | None = None,
    sugar: float | None = None,
    **extra: object,
) -> dict[str, object]:
    """Build an FDC search-shaped food payload."""
    nutrients = [
        {"nutrientId": 1008, "value": calories},
        {"nutrientId": 1003, "value": protein},
        {"nutrientId": 1005, "value": carbs},
        {"nutrientId": 1004, "value": fat},
    ]
    if fiber is not None:
        nutrients.append({"nutrientId": 1079, "value": fiber})
    if sugar is not None:
        nutrients.append({"nutrientId": 2000, "value": sugar})
    return {
        "fdcId": fdc_id,
        "description": description,
        "dataType": data_type,
        "foodNutrients": nutrients,
        **extra,
    }


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog repository enforcing the store's unique constraints."""

    entries: dict[UUID, CatalogEntry] = field(default_factory=dict)
    nutrition: dict[UUID, NutritionRecord] = field(default_factory=dict)
    nutrition_error: Exception | None = None
    search_error: Exception | None = None
    race_winner: dict[str, object] | None = None
    search_calls: list[str] = field(default_factory=list)
    id_lookups: list[list[str]] = field(default_factory=list)

    def add(self, entry: CatalogEntry, nutrition: NutritionRecord) -> None:
        self.entries[entry.id] = entry
        self.nutrition[nutrition.id] = nutrition

    def search_entries(self, text: str, limit: int) -> list[CatalogItem]:
        self.search_calls.append(text)
        if self.search_error is not None:
            raise self.search_error
        items = []
        for entry in self.entries.values():
            if entry.is_deleted or text not in entry.normalized_name:
                continue
            record = self.get_nutrition_for_entry(entry.id)
            if record is not None:
                items.append(CatalogItem(entry=entry, nutrition=record))
        return items[:limit]

    def get_entry(self, entry_id: UUID) -> CatalogEntry | None:
        return self.entries.get(entry_id)

    def find_entry_by_normalized_name(self, normalized_name: str) -> CatalogEntry | None:
        for entry in self.entries.values():
            if entry.normalized_name == normalized_name and not entry.is_deleted:
                return entry
        return None

    def find_nutrition_by_external_id(self, external_id: str) -> NutritionRecord | None:
        for record in self.nutrition.values():
            if record.external_id == external_id:
                return record
        return None

    def get_nutrition_for_entry(self, entry_id: UUID) -> NutritionRecord | None:
        for record in self.nutrition.values():
            if record.entry_id == entry_id:
                return record
        return None

    def list_imported_external_ids(self, external_ids: list[str]) -> set[str]:
        self.id_lookups.append(list(external_ids))
        stored = {record.external_id for record in self.nutrition.values()}
        return {external_id for external_id in external_ids if external_id in stored}

    def create_entry(self, payload: dict[str, object]) -> CatalogEntry:
        if self.find_entry_by_normalized_name(str(payload["normalized_name"])):
            raise CatalogConflict("duplicate key value violates unique constraint")
        entry = CatalogEntry(id=uuid4(), deleted_at=None, **payload)
        self.entries[entry.id] = entry
        return entry

    def update_health_score(self, entry_id: UUID, health_score: int) -> None:
        self.entries[entry_id] = replace(self.entries[entry_id], health_score=health_score)

    def create_nutrition(self, payload: dict[str, object]) -> NutritionRecord:
        if self.race_winner is not None:
            winner, self.race_winner = self.race_winner, None
            self.create_nutrition(winner)
        if self.nutrition_error is not None:
            raise self.nutrition_error
        external_id = payload.get("external_id")
        if external_id and self.find_nutrition_by_external_id(str(external_id)):
            raise CatalogConflict("duplicate key value violates unique constraint")
        record = NutritionRecord(id=uuid4(), **payload)
        self.nutrition[record.id] = record
        return record

    def soft_delete_entry(self, entry_id: UUID, deleted_at: datetime) -> None:
        self.entries[entry_id] = replace(self.entries[entry_id], deleted_at=deleted_at)


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client serving canned payloads per query and id."""

    search_results: dict[str, object] = field(default_factory=dict)
    foods: dict[str, object] = field(default_factory=dict)
    search_calls: list[tuple[str, int]] = field(default_factory=list)
    food_calls: list[str] = field(default_factory=list)

    async def search_foods(
        self, query: str, page_size: int = 10, data_types: list[str] | None = None
    ) -> dict[str, object]:
        self.search_calls.append((query, page_size))
        result = self.search_results.get(query, {"foods": [], "totalHits": 0})
        if isinstance(result, Exception):
            raise result
        return result

    async def get_food(self, fdc_id: str) -> dict[str, object]:
        self.food_calls.append(fdc_id)
        result = self.foods.get(fdc_id)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise _not_found(fdc_id)
        return result


def _not_found(fdc_id: str) -> Exception:
    request = httpx.Request("GET", f"https://api.test/food/{fdc_id}")
    return httpx.HTTPStatusError(
        "Not Found", request=request, response=httpx.Response(404, request=request)
    )


@dataclass
class FakeProduceClient(ProduceEstimationClient):
    """Fake LLM estimation client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=lambda: {"items": []})
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeCategoryClient(CategoryDetectionClient):
    """Fake LLM classification client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=lambda: {"category": "other"})
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
        schema_name: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeAuthResolver(AuthResolver):
    tokens: dict[str, UserIdentity] = field(
        default_factory=lambda: {TOKEN: UserIdentity(user_id=USER_ID)}
    )

    def resolve(self, token: str) -> UserIdentity | None:
        return self.tokens.get(token)


def make_entry(  # noqa: PLR0913
    name: str,
    category: str = "other",
    calories: float = 100.0,
    external_id: str | None = None,
    deleted: bool = False,
    serving_size: float = 100.0,
    serving_unit: str = "g",
) -> tuple[CatalogEntry, NutritionRecord]:
    """Build a stored entry with a nutrition record."""
    entry = CatalogEntry(
        id=uuid4(),
        name=name,
        normalized_name=" ".join(name.lower().split()),
        category=category,
        health_score=None,
        is_user_added=False,
        source_owner_id=None,
        deleted_at=datetime(2024, 1, 1) if deleted else None,
    )
    nutrition = NutritionRecord(
        id=uuid4(),
        entry_id=entry.id,
        serving_size=serving_size,
        serving_unit=serving_unit,
        calories=calories,
        protein=5.0,
        carbs=10.0,
        fat=1.0,
        fiber=None,
        sugar=None,
        source="usda" if external_id else "llm_estimated",
        external_id=external_id,
        match_status="matched" if external_id else "pending",
        match_confidence=1.0 if external_id else 0.0,
        confidence=0.95,
        validated=True,
    )
    return entry, nutrition


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        openai_api_key="openai-key",
        fdc_api_key="fdc-key",
        environment="test",
    )


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def produce_client() -> FakeProduceClient:
    return FakeProduceClient()


@pytest.fixture
def category_client() -> FakeCategoryClient:
    return FakeCategoryClient()


@pytest.fixture
def catalog_service(repository: InMemoryCatalogRepository) -> CatalogService:
    return CatalogService(
        repository=repository, cache=InMemoryCache(), weights=ProduceWeightTable()
    )


@pytest.fixture
def external_service(fdc_client: FakeFdcClient) -> ExternalNutritionService:
    return ExternalNutritionService(fdc_client=fdc_client, cache=InMemoryCache())


@pytest.fixture
def search_service(
    catalog_service: CatalogService, external_service: ExternalNutritionService
) -> SearchService:
    return SearchService(catalog=catalog_service, external=external_service)


@pytest.fixture
def import_service(
    catalog_service: CatalogService,
    external_service: ExternalNutritionService,
    category_client: FakeCategoryClient,
) -> ImportService:
    return ImportService(
        catalog=catalog_service,
        external=external_service,
        categories=CategoryDetector(client=category_client, model="gpt-5.2"),
    )


@pytest.fixture
def produce_resolver(produce_client: FakeProduceClient) -> ProduceWeightResolver:
    return ProduceWeightResolver(
        table=ProduceWeightTable(), client=produce_client, model="gpt-5.2"
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    catalog_service: CatalogService,
    external_service: ExternalNutritionService,
    search_service: SearchService,
    import_service: ImportService,
    produce_resolver: ProduceWeightResolver,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_resolver=FakeAuthResolver(),
        catalog_service=catalog_service,
        external_service=external_service,
        search_service=search_service,
        import_service=import_service,
        produce_service=ProduceExtractionService(resolver=produce_resolver),
        close_resources=close_resources,
    )
