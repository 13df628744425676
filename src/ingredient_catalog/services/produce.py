"""Gram weight resolution for fruit and vegetable items.

Items resolve from the reference weight table when possible. Whatever the
table cannot answer goes to the LLM in one batch, and anything still missing
falls back to a flat 100 g.
"""

import asyncio
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from ingredient_catalog.data.produce_weights import PRODUCE_WEIGHTS
from ingredient_catalog.domain.produce import (
    PRODUCE_CATEGORIES,
    ProduceEstimate,
    ProduceEstimationExtract,
    ProduceItem,
    ProduceWeightEntry,
)

DEFAULT_GRAMS = 100.0
DEFAULT_UNIT_PRIORITY = ("medium", "cup", "cup_raw", "cup_chopped", "cup_cooked")

GRAMS_PER_MASS_UNIT: dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.3495,
    "lb": 453.592,
}

_UNIT_ALIASES: dict[str, str] = {
    "gram": "g",
    "gr": "g",
    "grm": "g",
    "kilogram": "kg",
    "kilo": "kg",
    "ounce": "oz",
    "pound": "lb",
    "lbs": "lb",
    "whole": "medium",
    "each": "medium",
    "piece": "medium",
    "item": "medium",
    "leave": "leaf",
    "halve": "half",
    "c": "cup",
}

_WORD_SPLIT = re.compile(r"[\s_]+")
_UNIT_PUNCTUATION = re.compile(r"[^\w\s]")
_MIXED_NUMBER = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_RANGE = re.compile(r"^(\d+(?:\.\d+)?)\s*(?:-|–|to)\s*(\d+(?:\.\d+)?)$")
_DECIMAL = re.compile(r"^\d*\.?\d+$")

PRODUCE_ESTIMATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "estimated_grams": {"type": "number", "minimum": 0},
                },
                "required": ["name", "estimated_grams"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}

PRODUCE_ESTIMATION_PROMPT = (
    "You estimate the edible weight in grams of fruit and vegetable portions. "
    "For each line below, return the item name exactly as written and your "
    "best estimate of its total weight in grams for the stated amount and "
    "unit. Reference points: 1 cup raw spinach is about 30 g, 1 cup chopped "
    "broccoli about 90 g, 1 medium apple about 180 g, 1 medium banana about "
    "120 g, 1 cup berries about 150 g. Be slightly conservative and round to "
    "the nearest 10 g.\n\n"
)

_logger = logging.getLogger(__name__)


def singularize(word: str) -> str:
    """Return a naive singular form of an English produce word."""
    if len(word) > 3 and word.endswith("ies"):
        return f"{word[:-3]}y"
    if word.endswith(("oes", "ches", "shes", "xes", "sses")):
        return word[:-2]
    if len(word) > 2 and word.endswith("s") and not word.endswith(("ss", "us")):
        return word[:-1]
    return word


def normalize_produce_name(name: str) -> str:
    """Lowercase, collapse whitespace and singularize the last word."""
    words = name.lower().split()
    if not words:
        return ""
    words[-1] = singularize(words[-1])
    return " ".join(words)


def normalize_produce_unit(unit: str) -> str:
    """Map a free-form unit to the reference table's unit vocabulary."""
    cleaned = _UNIT_PUNCTUATION.sub("", unit.lower()).strip()
    words = [word for word in _WORD_SPLIT.split(cleaned) if word]
    if not words:
        return "medium"
    words = [singularize(word) for word in words]
    words[0] = _UNIT_ALIASES.get(words[0], words[0])
    return "_".join(words)


def parse_amount(amount: str | float | int | None) -> float:
    """Parse quantities like ``2``, ``1.5``, ``1/2``, ``1 1/2`` or ``2-3``.

    Ranges resolve to their midpoint; anything unparseable counts as one.
    """
    if isinstance(amount, (int, float)):
        return float(amount) if amount > 0 else 1.0
    if amount is None:
        return 1.0
    text = amount.strip().lower()
    if not text:
        return 1.0

    value: float | None = None
    if match := _MIXED_NUMBER.match(text):
        whole, numerator, denominator = (int(group) for group in match.groups())
        if denominator:
            value = whole + numerator / denominator
    elif match := _FRACTION.match(text):
        numerator, denominator = (int(group) for group in match.groups())
        if denominator:
            value = numerator / denominator
    elif match := _RANGE.match(text):
        low, high = (float(group) for group in match.groups())
        value = (low + high) / 2
    elif _DECIMAL.match(text):
        value = float(text)

    if value is None or value <= 0:
        return 1.0
    return value


@dataclass(frozen=True)
class ProduceWeightTable:
    """Read-only lookup over the reference produce weights."""

    entries: tuple[ProduceWeightEntry, ...] = PRODUCE_WEIGHTS
    _by_name: dict[str, dict[str, float]] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        for entry in self.entries:
            units = self._by_name.setdefault(
                normalize_produce_name(entry.canonical_name), {}
            )
            units.setdefault(entry.unit, float(entry.grams_per_unit))

    def grams_per_unit(self, name: str, unit: str) -> float | None:
        """Return the weight of one unit, or the name's default unit weight."""
        units = self._by_name.get(normalize_produce_name(name))
        if not units:
            return None
        exact = units.get(normalize_produce_unit(unit))
        if exact is not None:
            return exact
        return self._default(units)

    def default_grams(self, name: str) -> float | None:
        """Return the weight of the name's most common unit, if known."""
        units = self._by_name.get(normalize_produce_name(name))
        if not units:
            return None
        return self._default(units)

    @staticmethod
    def _default(units: dict[str, float]) -> float:
        for unit in DEFAULT_UNIT_PRIORITY:
            if unit in units:
                return units[unit]
        return next(iter(units.values()))


class ProduceEstimationClient(Protocol):
    """Interface for LLM structured estimation."""

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured estimation data."""


@dataclass
class ProduceWeightResolver:
    """Resolves every produce item to grams, keyed by its original index."""

    table: ProduceWeightTable
    client: ProduceEstimationClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    timeout_seconds: float = 20.0

    async def resolve(self, items: list[ProduceItem]) -> dict[int, ProduceEstimate]:
        resolved: dict[int, ProduceEstimate] = {}
        pending: list[ProduceItem] = []
        for item in items:
            grams = self.resolve_deterministic(item)
            if grams is None:
                pending.append(item)
                continue
            resolved[item.index] = _estimate(item, grams, "deterministic")

        if pending:
            estimated = await self._estimate_batch(pending)
            for item in pending:
                grams = estimated.get(item.name.strip().lower())
                if grams is None:
                    resolved[item.index] = _estimate(
                        item, DEFAULT_GRAMS, "default_fallback"
                    )
                else:
                    resolved[item.index] = _estimate(item, grams, "estimated")
        return resolved

    def resolve_deterministic(self, item: ProduceItem) -> float | None:
        """Return grams from the reference table, or None when unknown."""
        quantity = parse_amount(item.amount)
        unit = normalize_produce_unit(item.unit)
        mass = GRAMS_PER_MASS_UNIT.get(unit)
        if mass is not None:
            return float(round(quantity * mass))
        per_unit = self.table.grams_per_unit(item.name, item.unit)
        if per_unit is None:
            return None
        return float(round(quantity * per_unit))

    async def _estimate_batch(self, items: list[ProduceItem]) -> dict[str, float]:
        lines = "\n".join(
            f"{position}. {_describe(item)}"
            for position, item in enumerate(items, start=1)
        )
        try:
            raw = await asyncio.wait_for(
                self.client.estimate(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    schema=PRODUCE_ESTIMATION_SCHEMA,
                    prompt=PRODUCE_ESTIMATION_PROMPT + lines,
                ),
                timeout=self.timeout_seconds,
            )
            extract = ProduceEstimationExtract.model_validate(raw)
        except (TimeoutError, PydanticValidationError) as exc:
            _logger.warning(
                "Produce estimation unusable", extra={"items": len(items), "error": str(exc)}
            )
            return {}
        except Exception:
            _logger.exception("Produce estimation failed", extra={"items": len(items)})
            return {}

        estimates: dict[str, float] = {}
        for estimate in extract.items:
            estimates.setdefault(
                estimate.name.strip().lower(), float(round(estimate.estimated_grams))
            )
        return estimates


def _describe(item: ProduceItem) -> str:
    parts = (item.amount.strip() or "1", item.unit.strip(), item.name.strip())
    return " ".join(part for part in parts if part)


def _estimate(item: ProduceItem, grams: float, method: str) -> ProduceEstimate:
    return ProduceEstimate(
        index=item.index,
        name=item.name,
        amount=item.amount,
        unit=item.unit,
        category=item.category,
        estimated_grams=grams,
        resolution_method=method,
    )


@dataclass
class ProduceExtractionService:
    """Filters a mixed ingredient list to produce and resolves gram weights."""

    resolver: ProduceWeightResolver

    async def extract(self, ingredients: Iterable[ProduceItem]) -> list[ProduceEstimate]:
        items = [
            item
            for item in ingredients
            if item.category.strip().lower() in PRODUCE_CATEGORIES
        ]
        if not items:
            return []
        resolved = await self.resolver.resolve(items)
        return [resolved[item.index] for item in items]
