"""Response schemas for the USDA FoodData Central API."""

from pydantic import BaseModel, ConfigDict, Field

from ingredient_catalog.domain.nutrition import (
    ExternalCandidate,
    FoodPortion,
    NutrientProfile,
)

ENERGY_IDS = (1008, 2047, 2048)
PROTEIN_IDS = (1003,)
FAT_IDS = (1004,)
CARB_IDS = (1005,)
FIBER_IDS = (1079,)
SUGAR_IDS = (2000, 1063)


class FdcNutrientRef(BaseModel):
    """Nested nutrient descriptor used by the detail endpoint."""

    id: int
    name: str | None = None
    unit_name: str | None = Field(default=None, alias="unitName")


class FdcFoodNutrient(BaseModel):
    """A nutrient amount in either the search or the detail shape."""

    model_config = ConfigDict(populate_by_name=True)

    nutrient_id: int | None = Field(default=None, alias="nutrientId")
    value: float | None = None
    nutrient: FdcNutrientRef | None = None
    amount: float | None = None

    @property
    def resolved_id(self) -> int | None:
        if self.nutrient is not None:
            return self.nutrient.id
        return self.nutrient_id

    @property
    def resolved_amount(self) -> float | None:
        return self.amount if self.amount is not None else self.value


class FdcMeasureUnit(BaseModel):
    name: str | None = None
    abbreviation: str | None = None


class FdcFoodPortion(BaseModel):
    """A household portion from the detail endpoint."""

    gram_weight: float = Field(alias="gramWeight")
    amount: float | None = None
    measure_unit: FdcMeasureUnit | None = Field(default=None, alias="measureUnit")
    modifier: str | None = None
    portion_description: str | None = Field(default=None, alias="portionDescription")


class FdcFood(BaseModel):
    """A food record from the search or detail endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    fdc_id: int = Field(alias="fdcId")
    description: str
    data_type: str | None = Field(default=None, alias="dataType")
    brand_owner: str | None = Field(default=None, alias="brandOwner")
    ingredients: str | None = None
    serving_size: float | None = Field(default=None, alias="servingSize")
    serving_size_unit: str | None = Field(default=None, alias="servingSizeUnit")
    food_nutrients: list[FdcFoodNutrient] = Field(
        default_factory=list, alias="foodNutrients"
    )
    food_portions: list[FdcFoodPortion] = Field(
        default_factory=list, alias="foodPortions"
    )

    def to_candidate(self) -> ExternalCandidate:
        """Convert the wire record into a domain candidate."""
        return ExternalCandidate(
            external_id=str(self.fdc_id),
            description=self.description,
            data_type=self.data_type,
            brand_owner=self.brand_owner,
            ingredients_text=self.ingredients or None,
            nutrients=self._nutrients(),
            serving_size=self.serving_size,
            serving_unit=self.serving_size_unit,
            portions=tuple(self._portions()),
        )

    def _nutrients(self) -> NutrientProfile:
        def find(ids: tuple[int, ...]) -> float | None:
            for nutrient_id in ids:
                for entry in self.food_nutrients:
                    amount = entry.resolved_amount
                    if entry.resolved_id == nutrient_id and amount is not None:
                        return amount
            return None

        return NutrientProfile(
            calories=find(ENERGY_IDS) or 0.0,
            protein=find(PROTEIN_IDS) or 0.0,
            carbs=find(CARB_IDS) or 0.0,
            fat=find(FAT_IDS) or 0.0,
            fiber=find(FIBER_IDS),
            sugar=find(SUGAR_IDS),
        )

    def _portions(self) -> list[FoodPortion]:
        portions = []
        for portion in self.food_portions:
            if portion.gram_weight <= 0:
                continue
            unit_name = None
            if portion.measure_unit is not None:
                unit_name = portion.measure_unit.abbreviation or portion.measure_unit.name
            amount = portion.amount or 1.0
            description = (
                portion.portion_description
                or portion.modifier
                or f"{amount:g} {unit_name or 'unit'}"
            )
            portions.append(
                FoodPortion(
                    description=description,
                    gram_weight=portion.gram_weight,
                    amount=amount,
                    unit=unit_name or "unit",
                )
            )
        return portions


class FdcSearchResponse(BaseModel):
    """Search endpoint payload."""

    foods: list[FdcFood] = Field(default_factory=list)
    total_hits: int | None = Field(default=None, alias="totalHits")
