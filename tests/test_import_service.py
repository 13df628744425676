"""Tests for importing reference foods into the catalog."""

import asyncio
from dataclasses import asdict

import pytest

from ingredient_catalog.domain.nutrition import ExternalCandidate, NutrientProfile
from ingredient_catalog.errors import ExternalServiceUnavailable, ValidationError
from ingredient_catalog.services.importer import (
    ImportRequest,
    ImportService,
    clean_description,
    resolve_serving,
)
from tests.conftest import (
    USER_ID,
    FakeCategoryClient,
    FakeFdcClient,
    InMemoryCatalogRepository,
    fdc_food,
    make_entry,
)

FUJI_ID = "171688"


def _fuji(**extra: object) -> dict[str, object]:
    return fdc_food(
        int(FUJI_ID),
        "Apples, fuji, with skin, raw",
        calories=52,
        protein=0.3,
        carbs=14,
        fat=0.2,
        fiber=2.4,
        sugar=10.4,
        **extra,
    )


def _candidate(**overrides: object) -> ExternalCandidate:
    values: dict[str, object] = {
        "external_id": "1",
        "description": "Granola",
        "data_type": "Branded",
        "brand_owner": None,
        "ingredients_text": None,
        "nutrients": NutrientProfile(calories=400, protein=10, carbs=60, fat=12),
    }
    values.update(overrides)
    return ExternalCandidate(**values)


def test_clean_description_keeps_three_parts() -> None:
    assert clean_description("Apples, fuji, with skin, raw") == "Apples, fuji, with skin"
    assert clean_description("Broccoli") == "Broccoli"
    assert clean_description("Oats, , rolled") == "Oats, rolled"


def test_resolve_serving_prefers_declared_serving() -> None:
    serving = resolve_serving(_candidate(serving_size=40, serving_unit="g"))

    assert (serving.serving_size, serving.serving_unit) == (40, "g")
    assert serving.nutrients.calories == 160
    assert serving.nutrients.protein == 4


def test_resolve_serving_household_unit_keeps_per_100_values() -> None:
    serving = resolve_serving(_candidate(serving_size=1, serving_unit="cup"))

    assert serving.serving_unit == "cup"
    assert serving.nutrients.calories == 400


def test_resolve_serving_defaults_to_100_grams() -> None:
    serving = resolve_serving(_candidate())

    assert (serving.serving_size, serving.serving_unit) == (100, "g")
    assert serving.nutrients.calories == 400


def test_import_creates_entry_and_nutrition(
    import_service: ImportService,
    repository: InMemoryCatalogRepository,
    fdc_client: FakeFdcClient,
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji(
        foodPortions=[{"gramWeight": 182, "amount": 1, "modifier": "medium"}]
    )

    result = asyncio.run(
        import_service.import_candidate(
            ImportRequest(external_id=FUJI_ID, category="Fruit"), USER_ID
        )
    )

    assert result.created
    assert result.entry.name == "Apples, fuji, with skin"
    assert result.entry.category == "fruit"
    assert result.entry.health_score == 85
    assert not result.entry.is_user_added
    assert result.entry.source_owner_id is None
    nutrition = result.nutrition
    assert (nutrition.serving_size, nutrition.serving_unit) == (182, "g")
    assert nutrition.calories == 95
    assert nutrition.source == "usda"
    assert nutrition.external_id == FUJI_ID
    assert nutrition.match_status == "matched"
    assert nutrition.confidence == 0.95
    assert nutrition.validated
    assert nutrition.data_type == "Foundation"


def test_import_without_category_uses_detected_category(
    import_service: ImportService,
    fdc_client: FakeFdcClient,
    category_client: FakeCategoryClient,
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji()
    category_client.payload = {"category": "fruit"}

    result = asyncio.run(
        import_service.import_candidate(ImportRequest(external_id=FUJI_ID), USER_ID)
    )

    assert result.entry.category == "fruit"
    assert "Apples, fuji, with skin, raw" in category_client.prompts[0]


def test_import_with_category_skips_detection(
    import_service: ImportService,
    fdc_client: FakeFdcClient,
    category_client: FakeCategoryClient,
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji()

    asyncio.run(
        import_service.import_candidate(
            ImportRequest(external_id=FUJI_ID, category="fruit"), USER_ID
        )
    )

    assert category_client.prompts == []


def test_import_falls_back_to_other_when_detection_fails(
    import_service: ImportService,
    fdc_client: FakeFdcClient,
    category_client: FakeCategoryClient,
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji()
    category_client.error = RuntimeError("llm down")

    result = asyncio.run(
        import_service.import_candidate(ImportRequest(external_id=FUJI_ID), USER_ID)
    )

    assert result.created
    assert result.entry.category == "other"


def test_import_is_idempotent(
    import_service: ImportService,
    repository: InMemoryCatalogRepository,
    fdc_client: FakeFdcClient,
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji()
    request = ImportRequest(external_id=FUJI_ID)

    first = asyncio.run(import_service.import_candidate(request, USER_ID))
    second = asyncio.run(import_service.import_candidate(request, USER_ID))

    assert first.created
    assert not second.created
    assert second.nutrition.id == first.nutrition.id
    assert fdc_client.food_calls == [FUJI_ID]
    assert len(repository.nutrition) == 1


def test_import_with_overrides(
    import_service: ImportService, fdc_client: FakeFdcClient
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji()
    request = ImportRequest(
        external_id=FUJI_ID,
        name_override="Fuji apple",
        calories_override=30,
        serving_size_override=50,
    )

    result = asyncio.run(import_service.import_candidate(request, USER_ID))

    assert result.entry.name == "Fuji apple"
    assert result.entry.is_user_added
    assert result.entry.source_owner_id == USER_ID
    assert result.nutrition.serving_size == 50
    assert result.nutrition.calories == 30
    assert result.nutrition.carbs == 7
    assert result.nutrition.confidence == 0.8
    assert not result.nutrition.validated


def test_import_attaches_to_existing_name(
    import_service: ImportService,
    repository: InMemoryCatalogRepository,
    fdc_client: FakeFdcClient,
) -> None:
    existing, nutrition = make_entry("Apples,  Fuji, with skin", category="fruit")
    repository.add(existing, nutrition)
    fdc_client.foods[FUJI_ID] = _fuji()

    result = asyncio.run(
        import_service.import_candidate(ImportRequest(external_id=FUJI_ID), USER_ID)
    )

    assert result.created
    assert result.entry.id == existing.id
    assert result.nutrition.entry_id == existing.id
    assert repository.entries[existing.id].health_score == 85
    assert len(repository.entries) == 1


def test_failed_nutrition_write_discards_new_entry(
    import_service: ImportService,
    repository: InMemoryCatalogRepository,
    fdc_client: FakeFdcClient,
) -> None:
    fdc_client.foods[FUJI_ID] = _fuji()
    repository.nutrition_error = RuntimeError("insert failed")

    with pytest.raises(RuntimeError):
        asyncio.run(
            import_service.import_candidate(ImportRequest(external_id=FUJI_ID), USER_ID)
        )

    assert [entry.is_deleted for entry in repository.entries.values()] == [True]


def test_concurrent_import_returns_winner(
    import_service: ImportService,
    repository: InMemoryCatalogRepository,
    fdc_client: FakeFdcClient,
) -> None:
    winner_entry, winner_nutrition = make_entry(
        "Fuji apple", category="fruit", external_id=FUJI_ID
    )
    repository.entries[winner_entry.id] = winner_entry
    repository.race_winner = {
        key: value for key, value in asdict(winner_nutrition).items() if key != "id"
    }
    fdc_client.foods[FUJI_ID] = _fuji()

    result = asyncio.run(
        import_service.import_candidate(ImportRequest(external_id=FUJI_ID), USER_ID)
    )

    assert not result.created
    assert result.entry.id == winner_entry.id
    orphans = [entry for entry in repository.entries.values() if entry.id != winner_entry.id]
    assert len(orphans) == 1
    assert orphans[0].is_deleted


def test_unavailable_reference_creates_nothing(
    import_service: ImportService, repository: InMemoryCatalogRepository
) -> None:
    with pytest.raises(ExternalServiceUnavailable):
        asyncio.run(
            import_service.import_candidate(ImportRequest(external_id="404"), USER_ID)
        )

    assert repository.entries == {}


@pytest.mark.parametrize(
    "request_",
    [
        ImportRequest(external_id="  "),
        ImportRequest(external_id=FUJI_ID, category="snacks"),
        ImportRequest(external_id="fuji"),
    ],
)
def test_import_rejects_invalid_requests(
    import_service: ImportService, request_: ImportRequest
) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(import_service.import_candidate(request_, USER_ID))


def test_second_import_ignores_overrides(
    import_service: ImportService,
    repository: InMemoryCatalogRepository,
    fdc_client: FakeFdcClient,
) -> None:
    fdc_client.foods["173686"] = fdc_food(173686, "Salmon, Atlantic, wild, raw")

    first = asyncio.run(
        import_service.import_candidate(
            ImportRequest(external_id="173686", name_override="Wild salmon"), USER_ID
        )
    )
    second = asyncio.run(
        import_service.import_candidate(
            ImportRequest(external_id="173686", name_override="Salmon fillet"), USER_ID
        )
    )

    assert second.entry.name == "Wild salmon"
    assert second.nutrition == first.nutrition
    assert len(repository.entries) == 1
    assert len(repository.nutrition) == 1
