"""Produce weight models."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

ResolutionMethod = Literal["deterministic", "estimated", "default_fallback"]
PRODUCE_CATEGORIES: frozenset[str] = frozenset({"fruit", "vegetable"})


@dataclass(frozen=True)
class ProduceWeightEntry:
    """Reference gram weight of one produce unit."""

    canonical_name: str
    unit: str
    grams_per_unit: float
    category: str


@dataclass(frozen=True)
class ProduceItem:
    """A produce item to resolve, keyed by its position in the caller's list."""

    index: int
    name: str
    amount: str
    unit: str
    category: str


@dataclass(frozen=True)
class ProduceEstimate:
    """Resolved gram weight for a produce item."""

    index: int
    name: str
    amount: str
    unit: str
    category: str
    estimated_grams: float
    resolution_method: ResolutionMethod


class EstimatedProduceItem(BaseModel):
    """Single gram estimate returned by the LLM."""

    name: str
    estimated_grams: float = Field(ge=0.0)


class ProduceEstimationExtract(BaseModel):
    """Structured output for batch produce estimation."""

    items: list[EstimatedProduceItem]
