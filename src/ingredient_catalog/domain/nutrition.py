"""Nutrition domain models for external reference foods."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values per 100 units (grams or millilitres)."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None

    def scaled(self, multiplier: float) -> "NutrientProfile":
        """Return the profile scaled to a serving, rounded for display."""
        return NutrientProfile(
            calories=float(round(self.calories * multiplier)),
            protein=_round_tenth(self.protein * multiplier),
            carbs=_round_tenth(self.carbs * multiplier),
            fat=_round_tenth(self.fat * multiplier),
            fiber=_round_tenth(self.fiber * multiplier)
            if self.fiber is not None
            else None,
            sugar=_round_tenth(self.sugar * multiplier)
            if self.sugar is not None
            else None,
        )


@dataclass(frozen=True)
class FoodPortion:
    """A common household portion with its gram weight."""

    description: str
    gram_weight: float
    amount: float
    unit: str


@dataclass(frozen=True)
class ExternalCandidate:
    """A food record from the external reference database."""

    external_id: str
    description: str
    data_type: str | None
    brand_owner: str | None
    ingredients_text: str | None
    nutrients: NutrientProfile
    serving_size: float | None = None
    serving_unit: str | None = None
    portions: tuple[FoodPortion, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExternalSearchPage:
    """One page of external search results."""

    candidates: list[ExternalCandidate]
    total_hits: int


def _round_tenth(value: float) -> float:
    return round(value * 10) / 10
