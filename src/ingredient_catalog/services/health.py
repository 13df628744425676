"""Health score calculation for foods.

Scores range from 0 to 100 and estimate how minimally processed a food is:

- 80-100: whole foods
- 60-79: minimally processed
- 40-59: healthy processed
- 0-39: heavily processed
"""

import re

from ingredient_catalog.domain.health import HealthCategory, HealthFactors, HealthScore
from ingredient_catalog.domain.nutrition import ExternalCandidate, NutrientProfile

REFERENCE_DATA_TYPES = frozenset({"Foundation", "SR Legacy"})
SURVEY_DATA_TYPE = "Survey (FNDDS)"
BRANDED_DATA_TYPE = "Branded"

ADDITIVES = (
    "high fructose corn syrup",
    "high fructose",
    "artificial",
    "preservative",
    "bha",
    "bht",
    "tbhq",
    "sodium nitrate",
    "sodium nitrite",
    "monosodium glutamate",
    "msg",
    "aspartame",
    "sucralose",
    "acesulfame",
    "red 40",
    "yellow 5",
    "yellow 6",
    "blue 1",
    "caramel color",
    "carrageenan",
    "polysorbate",
    "sodium benzoate",
    "potassium sorbate",
)

ADDITIVE_PENALTY = 15

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_BRACKETED = re.compile(r"\[[^\]]*\]")

_CATEGORY_LABELS: dict[str, str] = {
    "whole": "Whole Food",
    "minimally_processed": "Minimally Processed",
    "healthy_processed": "Lightly Processed",
    "heavily_processed": "Processed",
}


def health_category(score: float) -> HealthCategory:
    """Map a numeric score to its processing category."""
    if score >= 80:
        return "whole"
    if score >= 60:
        return "minimally_processed"
    if score >= 40:
        return "healthy_processed"
    return "heavily_processed"


def health_category_label(category: str) -> str:
    """Return the display label for a health category."""
    return _CATEGORY_LABELS[category]


def count_ingredients(ingredients_text: str) -> int:
    """Count top-level comma-separated ingredients, ignoring sub-lists."""
    cleaned = _BRACKETED.sub("", _PARENTHETICAL.sub("", ingredients_text))
    return len([part for part in cleaned.split(",") if part.strip()])


def has_additives(ingredients_text: str) -> bool:
    lowered = ingredients_text.lower()
    return any(additive in lowered for additive in ADDITIVES)


def macro_adjustment(nutrients: NutrientProfile) -> int:
    """Reward protein and fiber, penalize sugar (all per 100 units)."""
    adjustment = 0
    if nutrients.protein >= 20:
        adjustment += 5
    elif nutrients.protein >= 15:
        adjustment += 3

    if nutrients.fiber is not None:
        if nutrients.fiber >= 8:
            adjustment += 5
        elif nutrients.fiber >= 5:
            adjustment += 3

    if nutrients.sugar is not None:
        if nutrients.sugar >= 30:
            adjustment -= 15
        elif nutrients.sugar >= 20:
            adjustment -= 10
        elif nutrients.sugar >= 15:
            adjustment -= 5
    return adjustment


def calculate_health_score(
    data_type: str | None,
    ingredients_text: str | None,
    nutrients: NutrientProfile,
) -> HealthScore:
    """Score a food from its data tier, ingredient list and macro profile."""
    is_whole_food = False
    short_list = False
    no_additives = True

    if data_type in REFERENCE_DATA_TYPES:
        score: float = 85
        is_whole_food = True
        short_list = True
    elif data_type == SURVEY_DATA_TYPE:
        score = 60
    else:
        score = 50

    if ingredients_text:
        count = count_ingredients(ingredients_text)
        if count <= 3:
            score = max(score, 75)
            short_list = True
        elif count <= 5:
            score = max(score, 65)
            short_list = True
        elif count <= 10:
            score = min(score, 55)
        elif count <= 15:
            score = min(score, 45)
        else:
            score = min(score, 35)

        if has_additives(ingredients_text):
            score -= ADDITIVE_PENALTY
            no_additives = False
    elif data_type == BRANDED_DATA_TYPE:
        score = min(score, 50)

    adjustment = macro_adjustment(nutrients)
    final = max(0, min(100, round(score + adjustment)))
    return HealthScore(
        score=final,
        category=health_category(final),
        factors=HealthFactors(
            is_whole_food=is_whole_food,
            has_short_ingredient_list=short_list,
            no_additives=no_additives,
            good_macro_profile=adjustment > 0,
        ),
    )


def score_candidate(candidate: ExternalCandidate) -> HealthScore:
    """Score an external candidate."""
    return calculate_health_score(
        candidate.data_type, candidate.ingredients_text, candidate.nutrients
    )
