"""Reference food lookups against USDA FoodData Central."""

import logging
from dataclasses import dataclass

import httpx

from ingredient_catalog.adapters.fdc_client import MAX_PAGE_SIZE, FdcClient
from ingredient_catalog.domain.fdc import FdcFood, FdcSearchResponse
from ingredient_catalog.domain.nutrition import ExternalCandidate, ExternalSearchPage
from ingredient_catalog.errors import ExternalServiceUnavailable, ValidationError
from ingredient_catalog.services.cache import (
    DETAILS_TTL_SECONDS,
    SEARCH_TTL_SECONDS,
    Cache,
)

SERVICE_NAME = "fdc"

_logger = logging.getLogger(__name__)


def _status_code(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


@dataclass
class ExternalNutritionService:
    """Parses, caches and normalizes failures of FDC calls.

    Every failure, whether transport, HTTP status, timeout or an unexpected
    payload shape, surfaces as ExternalServiceUnavailable. One attempt is made
    per call.
    """

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = SEARCH_TTL_SECONDS
    details_ttl_seconds: int = DETAILS_TTL_SECONDS

    async def search(
        self, query: str, limit: int = 10, data_types: list[str] | None = None
    ) -> ExternalSearchPage:
        """Search reference foods and return parsed candidates."""
        page_size = max(1, min(limit, MAX_PAGE_SIZE))
        type_key = ",".join(data_types) if data_types else "*"
        cache_key = f"fdc:search:{query.lower()}:{page_size}:{type_key}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, ExternalSearchPage):
            return cached

        try:
            payload = await self.fdc_client.search_foods(
                query, page_size=page_size, data_types=data_types
            )
            parsed = FdcSearchResponse.model_validate(payload)
        except (httpx.HTTPError, ValueError, TypeError) as exc:
            _logger.warning(
                "FDC search failed",
                extra={"query": query, "status": _status_code(exc)},
            )
            raise ExternalServiceUnavailable(SERVICE_NAME, str(exc)) from exc

        candidates = [food.to_candidate() for food in parsed.foods]
        page = ExternalSearchPage(
            candidates=candidates,
            total_hits=parsed.total_hits
            if parsed.total_hits is not None
            else len(candidates),
        )
        self.cache.set(cache_key, page, ttl_seconds=self.search_ttl_seconds)
        _logger.debug("FDC search query=%s results=%s", query, len(candidates))
        return page

    async def get_details(self, external_id: str) -> ExternalCandidate:
        """Fetch full details, including portions, for one reference food."""
        external_id = external_id.strip()
        if not external_id.isdigit():
            raise ValidationError(f"Invalid external id: {external_id!r}")

        cache_key = f"fdc:food:{external_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, ExternalCandidate):
            return cached

        try:
            payload = await self.fdc_client.get_food(external_id)
            candidate = FdcFood.model_validate(payload).to_candidate()
        except (httpx.HTTPError, ValueError, TypeError) as exc:
            _logger.warning(
                "FDC detail fetch failed",
                extra={"external_id": external_id, "status": _status_code(exc)},
            )
            raise ExternalServiceUnavailable(SERVICE_NAME, str(exc)) from exc

        self.cache.set(cache_key, candidate, ttl_seconds=self.details_ttl_seconds)
        return candidate
