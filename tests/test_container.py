"""Tests for container wiring."""

import asyncio

from ingredient_catalog.adapters.fdc_client import HttpxFdcClient
from ingredient_catalog.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.search_service.catalog is container.catalog_service
    assert container.import_service.external is container.external_service
    assert container.search_service.fuzzy_threshold == settings.fuzzy_threshold
    assert isinstance(container.external_service.fdc_client, HttpxFdcClient)
    assert (
        container.produce_service.resolver.table
        is container.catalog_service.weights
    )
    categories = container.import_service.categories
    assert categories is not None
    assert categories.client is container.produce_service.resolver.client
    assert categories.model == settings.openai_model
    asyncio.run(container.close_resources())
