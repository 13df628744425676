"""LLM classification of ingredient names into catalog categories."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ingredient_catalog.domain.catalog import INGREDIENT_CATEGORIES

FALLBACK_CATEGORY = "other"

CATEGORY_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "category": {"type": "string", "enum": sorted(INGREDIENT_CATEGORIES)},
    },
    "required": ["category"],
    "additionalProperties": False,
}

CATEGORY_PROMPT = (
    "Classify the food ingredient below into exactly one category.\n"
    "protein: meat, poultry, seafood, eggs, tofu, tempeh, protein powder.\n"
    "vegetable: vegetables and legumes, including beans, lentils, peas, "
    "chickpeas, potatoes, corn, mushrooms.\n"
    "fruit: fresh, frozen or dried fruit, avocado, 100% fruit juice.\n"
    "grain: rice, pasta, bread, tortillas, oats, quinoa, cereal, granola, "
    "crackers, flour.\n"
    "fat: cooking oils, nuts, seeds, nut butters.\n"
    "dairy: milk including plant milks, cheese, yogurt, butter, cream.\n"
    "pantry: condiments, sauces, sweeteners, baking staples, spices.\n"
    "other: only when nothing above fits.\n"
    "Branded or mixed foods go by their dominant ingredient.\n\n"
    'Ingredient: "{name}"'
)

_logger = logging.getLogger(__name__)


class CategoryDetectionClient(Protocol):
    """Interface for LLM structured classification."""

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
        """Return structured classification data."""


class CategoryExtract(BaseModel):
    category: str


@dataclass
class CategoryDetector:
    """Picks a catalog category for an ingredient name, degrading to other."""

    client: CategoryDetectionClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    timeout_seconds: float = 20.0

    async def detect(self, name: str) -> str:
        if not name.strip():
            return FALLBACK_CATEGORY
        try:
            raw = await asyncio.wait_for(
                self.client.estimate(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    schema=CATEGORY_SCHEMA,
                    prompt=CATEGORY_PROMPT.format(name=name.strip()),
                    schema_name="ingredient_category",
                ),
                timeout=self.timeout_seconds,
            )
            extract = CategoryExtract.model_validate(raw)
        except (TimeoutError, PydanticValidationError) as exc:
            _logger.warning(
                "Category detection unusable", extra={"name": name, "error": str(exc)}
            )
            return FALLBACK_CATEGORY
        except Exception:
            _logger.exception("Category detection failed", extra={"name": name})
            return FALLBACK_CATEGORY

        category = extract.category.strip().lower()
        if category not in INGREDIENT_CATEGORIES:
            _logger.warning(
                "Category detection returned unknown category",
                extra={"name": name, "category": category},
            )
            return FALLBACK_CATEGORY
        return category
