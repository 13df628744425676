"""Pydantic request and response models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ingredient_catalog.domain.catalog import CatalogItem
from ingredient_catalog.domain.health import HealthScore
from ingredient_catalog.domain.nutrition import NutrientProfile
from ingredient_catalog.domain.produce import ProduceEstimate, ProduceItem
from ingredient_catalog.domain.search import LocalMatch, RankedCandidate
from ingredient_catalog.services.catalog import ManualEntry
from ingredient_catalog.services.health import health_category_label
from ingredient_catalog.services.importer import ImportRequest


class CamelModel(BaseModel):
    """Base model exchanging camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImportBody(CamelModel):
    external_id: int | str
    category: str | None = None
    name_override: str | None = None
    calories_override: float | None = Field(default=None, ge=0)
    protein_override: float | None = Field(default=None, ge=0)
    carbs_override: float | None = Field(default=None, ge=0)
    fat_override: float | None = Field(default=None, ge=0)
    serving_size_override: float | None = Field(default=None, gt=0)
    serving_unit_override: str | None = None

    @field_validator("external_id")
    @classmethod
    def _external_id_digits(cls, value: int | str) -> int | str:
        if not str(value).strip().isdigit():
            raise ValueError("externalId must be numeric")
        return value

    def to_request(self) -> ImportRequest:
        return ImportRequest(
            external_id=str(self.external_id).strip(),
            category=self.category,
            name_override=self.name_override,
            calories_override=self.calories_override,
            protein_override=self.protein_override,
            carbs_override=self.carbs_override,
            fat_override=self.fat_override,
            serving_size_override=self.serving_size_override,
            serving_unit_override=self.serving_unit_override,
        )


class ManualEntryBody(CamelModel):
    name: str = Field(min_length=1)
    category: str = "other"
    serving_size: float = Field(gt=0)
    serving_unit: str = "g"
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)

    def to_manual_entry(self) -> ManualEntry:
        return ManualEntry(
            name=self.name,
            category=self.category,
            serving_size=self.serving_size,
            serving_unit=self.serving_unit,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
            sugar=self.sugar,
        )


class ProduceIngredientBody(BaseModel):
    """One ingredient of a meal, as sent by clients."""

    name: str = Field(min_length=1)
    estimated_amount: str | int | float = ""
    estimated_unit: str = ""
    category: str | None = None


class ProduceExtractBody(BaseModel):
    ingredients: list[ProduceIngredientBody]

    def to_items(self) -> list[ProduceItem]:
        return [
            ProduceItem(
                index=index,
                name=ingredient.name,
                amount=str(ingredient.estimated_amount).strip(),
                unit=ingredient.estimated_unit,
                category=(ingredient.category or "other").lower(),
            )
            for index, ingredient in enumerate(self.ingredients)
        ]


class IngredientToLog(CamelModel):
    """A catalog ingredient ready to be logged."""

    id: UUID
    name: str
    default_amount: float = 1
    default_unit: str
    calories_per_serving: float
    protein_per_serving: float
    carbs_per_serving: float
    fat_per_serving: float
    source: str
    is_user_added: bool
    is_validated: bool
    category: str
    external_id: str | None = None
    health_score: int | None = None
    data_type: str | None = None
    brand_owner: str | None = None

    @classmethod
    def from_item(cls, item: CatalogItem) -> "IngredientToLog":
        entry, nutrition = item.entry, item.nutrition
        return cls(
            id=entry.id,
            name=entry.name,
            default_unit=nutrition.display_unit,
            calories_per_serving=nutrition.calories,
            protein_per_serving=nutrition.protein,
            carbs_per_serving=nutrition.carbs,
            fat_per_serving=nutrition.fat,
            source=nutrition.source,
            is_user_added=entry.is_user_added,
            is_validated=nutrition.validated,
            category=entry.category,
            external_id=nutrition.external_id,
            health_score=entry.health_score,
            data_type=nutrition.data_type,
            brand_owner=nutrition.brand_owner,
        )


class LocalResult(IngredientToLog):
    default_grams: float | None = None
    score: float

    @classmethod
    def from_match(cls, match: LocalMatch) -> "LocalResult":
        base = IngredientToLog.from_item(
            CatalogItem(entry=match.entry, nutrition=match.nutrition)
        )
        return cls(
            **base.model_dump(), default_grams=match.default_grams, score=match.score
        )


class NutritionPer100g(CamelModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None

    @classmethod
    def from_profile(cls, profile: NutrientProfile) -> "NutritionPer100g":
        return cls(
            calories=profile.calories,
            protein=profile.protein,
            carbs=profile.carbs,
            fat=profile.fat,
            fiber=profile.fiber,
            sugar=profile.sugar,
        )


class ExternalResult(CamelModel):
    external_id: str
    description: str
    data_type: str | None = None
    brand_owner: str | None = None
    nutrition_per_100g: NutritionPer100g = Field(alias="nutritionPer100g")
    fuzzy_score: float
    health_score: int | None = None
    health_category: str | None = None

    @classmethod
    def from_ranked(cls, ranked: RankedCandidate) -> "ExternalResult":
        candidate = ranked.candidate
        return cls(
            external_id=candidate.external_id,
            description=candidate.description,
            data_type=candidate.data_type,
            brand_owner=candidate.brand_owner,
            nutrition_per_100g=NutritionPer100g.from_profile(candidate.nutrients),
            fuzzy_score=ranked.fuzzy_score,
            health_score=ranked.health.score if ranked.health else None,
            health_category=ranked.health.category if ranked.health else None,
        )


class HealthScoreResponse(CamelModel):
    score: int
    category: str
    label: str
    factors: dict[str, bool]

    @classmethod
    def from_health(cls, health: HealthScore) -> "HealthScoreResponse":
        factors = health.factors
        return cls(
            score=health.score,
            category=health.category,
            label=health_category_label(health.category),
            factors={
                "isWholeFood": factors.is_whole_food,
                "hasShortIngredientList": factors.has_short_ingredient_list,
                "noAdditives": factors.no_additives,
                "goodMacroProfile": factors.good_macro_profile,
            },
        )


class ProduceResult(CamelModel):
    name: str
    amount: str
    unit: str
    category: str
    estimated_grams: float
    resolution_method: str

    @classmethod
    def from_estimate(cls, estimate: ProduceEstimate) -> "ProduceResult":
        return cls(
            name=estimate.name,
            amount=estimate.amount,
            unit=estimate.unit,
            category=estimate.category,
            estimated_grams=estimate.estimated_grams,
            resolution_method=estimate.resolution_method,
        )
