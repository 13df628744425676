"""Search result models."""

from dataclasses import dataclass, field

from ingredient_catalog.domain.catalog import CatalogEntry, NutritionRecord
from ingredient_catalog.domain.health import HealthScore
from ingredient_catalog.domain.nutrition import ExternalCandidate


@dataclass(frozen=True)
class NormalizedQuery:
    """A cleaned query string and its tokens."""

    text: str
    tokens: list[str]


@dataclass(frozen=True)
class LocalMatch:
    """A catalog entry matched by a local search."""

    entry: CatalogEntry
    nutrition: NutritionRecord
    score: float
    default_grams: float | None = None


@dataclass(frozen=True)
class RankedCandidate:
    """An external candidate scored against the query."""

    candidate: ExternalCandidate
    fuzzy_score: float
    health: HealthScore | None = None

    @property
    def external_id(self) -> str:
        return self.candidate.external_id


@dataclass(frozen=True)
class SearchResults:
    """Merged local and external results for one query."""

    local: list[LocalMatch] = field(default_factory=list)
    external: list[RankedCandidate] = field(default_factory=list)
    external_total_available: int = 0
    external_available: bool = True
