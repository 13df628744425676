"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from ingredient_catalog.adapters.fdc_client import HttpxFdcClient
from ingredient_catalog.adapters.openai_structured_client import OpenAIStructuredClient
from ingredient_catalog.adapters.supabase_auth import SupabaseAuthResolver
from ingredient_catalog.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from ingredient_catalog.config import Settings
from ingredient_catalog.services.auth import AuthResolver
from ingredient_catalog.services.cache import InMemoryCache
from ingredient_catalog.services.catalog import CatalogService
from ingredient_catalog.services.category import CategoryDetector
from ingredient_catalog.services.external import ExternalNutritionService
from ingredient_catalog.services.importer import ImportService
from ingredient_catalog.services.produce import (
    ProduceExtractionService,
    ProduceWeightResolver,
    ProduceWeightTable,
)
from ingredient_catalog.services.search import SearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_resolver: AuthResolver
    catalog_service: CatalogService
    external_service: ExternalNutritionService
    search_service: SearchService
    import_service: ImportService
    produce_service: ProduceExtractionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    cache = InMemoryCache()
    weights = ProduceWeightTable()

    catalog_service = CatalogService(
        repository=SupabaseCatalogRepository(supabase_client),
        cache=cache,
        weights=weights,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    external_service = ExternalNutritionService(fdc_client=fdc_client, cache=cache)
    search_service = SearchService(
        catalog=catalog_service,
        external=external_service,
        fuzzy_threshold=resolved_settings.fuzzy_threshold,
        max_fallback_queries=resolved_settings.max_fallback_queries,
        external_limit_max=resolved_settings.external_limit_max,
    )
    openai_client = OpenAIStructuredClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.llm_timeout_seconds,
    )
    import_service = ImportService(
        catalog=catalog_service,
        external=external_service,
        categories=CategoryDetector(
            client=openai_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
            timeout_seconds=resolved_settings.llm_timeout_seconds,
        ),
    )
    produce_service = ProduceExtractionService(
        resolver=ProduceWeightResolver(
            table=weights,
            client=openai_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
            timeout_seconds=resolved_settings.llm_timeout_seconds,
        )
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_resolver=SupabaseAuthResolver(supabase_client),
        catalog_service=catalog_service,
        external_service=external_service,
        search_service=search_service,
        import_service=import_service,
        produce_service=produce_service,
        close_resources=close_resources,
    )
