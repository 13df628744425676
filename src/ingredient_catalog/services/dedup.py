"""Cross-source deduplication of ranked external candidates."""

from collections.abc import Iterable

from ingredient_catalog.domain.search import RankedCandidate


def filter_already_imported(
    ranked: list[RankedCandidate], imported_ids: Iterable[str]
) -> list[RankedCandidate]:
    """Drop candidates whose external id already lives in the local catalog."""
    excluded = set(imported_ids)
    return [item for item in ranked if item.external_id not in excluded]


def dedupe_by_external_id(ranked: list[RankedCandidate]) -> list[RankedCandidate]:
    """Keep the first occurrence of every external id."""
    seen: set[str] = set()
    unique = []
    for item in ranked:
        if item.external_id in seen:
            continue
        seen.add(item.external_id)
        unique.append(item)
    return unique
