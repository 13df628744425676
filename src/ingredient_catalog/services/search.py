"""Blended local and reference food search."""

import asyncio
import logging
from dataclasses import dataclass, field, replace

from ingredient_catalog.config import clamp_external_limit
from ingredient_catalog.domain.search import (
    LocalMatch,
    NormalizedQuery,
    RankedCandidate,
    SearchResults,
)
from ingredient_catalog.errors import (
    ExternalServiceUnavailable,
    SearchUnavailable,
)
from ingredient_catalog.services.catalog import CatalogService
from ingredient_catalog.services.dedup import dedupe_by_external_id, filter_already_imported
from ingredient_catalog.services.external import ExternalNutritionService
from ingredient_catalog.services.health import score_candidate
from ingredient_catalog.services.normalizer import normalize_query
from ingredient_catalog.services.ranking import (
    FUZZY_THRESHOLD,
    MAX_FALLBACK_QUERIES,
    FuzzyRanker,
    RankedList,
    generate_fallback_queries,
    should_fallback,
)

MIN_QUERY_LENGTH = 2

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalOutcome:
    ranked: list[RankedCandidate] = field(default_factory=list)
    total_available: int = 0
    available: bool = True


@dataclass
class SearchService:
    """Runs the local catalog and the reference chain side by side."""

    catalog: CatalogService
    external: ExternalNutritionService
    ranker: FuzzyRanker = field(default_factory=FuzzyRanker)
    fuzzy_threshold: float = FUZZY_THRESHOLD
    max_fallback_queries: int = MAX_FALLBACK_QUERIES
    external_limit_max: int = 50

    async def search(
        self,
        raw_query: str,
        include_external: bool = False,
        external_limit: int | None = None,
    ) -> SearchResults:
        """Search both sources; a failing source degrades to no results.

        Raises SearchUnavailable only when no requested source answered.
        """
        if len(raw_query.strip()) < MIN_QUERY_LENGTH:
            return SearchResults()

        query = normalize_query(raw_query)
        limit = clamp_external_limit(external_limit, self.external_limit_max)

        if include_external:
            local, external = await asyncio.gather(
                self._search_local(query), self._search_external(query, limit)
            )
        else:
            local = await self._search_local(query)
            external = ExternalOutcome(available=False)

        if local is None and not external.available:
            raise SearchUnavailable("No search source is available")

        ranked = external.ranked
        if ranked:
            ranked = await self._without_imported(ranked)
        ranked = [
            replace(item, health=score_candidate(item.candidate)) for item in ranked
        ]
        return SearchResults(
            local=local or [],
            external=ranked,
            external_total_available=external.total_available,
            external_available=external.available,
        )

    async def _search_local(self, query: NormalizedQuery) -> list[LocalMatch] | None:
        try:
            return await asyncio.to_thread(self.catalog.search, query)
        except Exception:
            _logger.exception("Local catalog search failed", extra={"query": query.text})
            return None

    async def _search_external(self, query: NormalizedQuery, limit: int) -> ExternalOutcome:
        try:
            page = await self.external.search(query.text, limit)
        except ExternalServiceUnavailable as exc:
            _logger.warning(
                "Reference search unavailable",
                extra={"query": query.text, "detail": exc.detail},
            )
            return ExternalOutcome(available=False)

        ranked = self.ranker.rank(query.tokens, page.candidates)
        ranked = await self._apply_fallbacks(query, limit, ranked)
        return ExternalOutcome(
            ranked=dedupe_by_external_id(ranked.items),
            total_available=page.total_hits,
        )

    async def _apply_fallbacks(
        self, query: NormalizedQuery, limit: int, ranked: RankedList
    ) -> RankedList:
        """Try relaxed queries in order until one beats the current best."""
        best = ranked.top_score()
        if not should_fallback(best, query.tokens, self.fuzzy_threshold):
            return ranked

        attempts = generate_fallback_queries(query.tokens)[: self.max_fallback_queries]
        for attempt in attempts:
            try:
                page = await self.external.search(attempt, limit)
            except ExternalServiceUnavailable as exc:
                _logger.warning(
                    "Fallback search unavailable",
                    extra={"query": attempt, "detail": exc.detail},
                )
                continue
            candidate = self.ranker.rank(query.tokens, page.candidates)
            if candidate.top_score() > best:
                _logger.debug(
                    "Fallback query improved results: %s (%.3f > %.3f)",
                    attempt,
                    candidate.top_score(),
                    best,
                )
                return RankedList(items=candidate.items + ranked.items)
        return ranked

    async def _without_imported(self, ranked: list[RankedCandidate]) -> list[RankedCandidate]:
        ids = [item.external_id for item in ranked]
        try:
            imported = await asyncio.to_thread(self.catalog.imported_external_ids, ids)
        except Exception:
            _logger.exception("Imported id lookup failed", extra={"count": len(ids)})
            return ranked
        return filter_already_imported(ranked, imported)
