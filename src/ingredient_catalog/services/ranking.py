"""Fuzzy re-ranking of search candidates and query relaxation."""

from dataclasses import dataclass, field

from rapidfuzz.distance import JaroWinkler

from ingredient_catalog.domain.nutrition import ExternalCandidate
from ingredient_catalog.domain.search import RankedCandidate
from ingredient_catalog.services.normalizer import description_tokens, tokenize

FUZZY_THRESHOLD = 0.5
MAX_FALLBACK_QUERIES = 2

NEAR_MATCH_SIMILARITY = 0.85
EXACT_CREDIT = 1.0
SUBSTRING_CREDIT = 0.9
NEAR_MATCH_CREDIT = 0.8
MIN_SUBSTRING_LENGTH = 3
EXTRA_TOKEN_PENALTY = 0.06
MAX_EXTRA_PENALTY = 0.4
COVERAGE_WEIGHT = 0.85
FULL_STRING_WEIGHT = 0.15


def token_credit(query_token: str, description_token: str) -> float:
    """Credit earned by a query token against one description token."""
    if query_token == description_token:
        return EXACT_CREDIT
    if min(len(query_token), len(description_token)) >= MIN_SUBSTRING_LENGTH and (
        query_token in description_token or description_token in query_token
    ):
        return SUBSTRING_CREDIT
    if JaroWinkler.similarity(query_token, description_token) >= NEAR_MATCH_SIMILARITY:
        return NEAR_MATCH_CREDIT
    return 0.0


def token_coverage(query_tokens: list[str], desc_tokens: list[str]) -> float:
    """Length-weighted fraction of query tokens found in the description."""
    total = sum(len(token) for token in query_tokens)
    if total == 0 or not desc_tokens:
        return 0.0
    earned = sum(
        len(token) * max(token_credit(token, other) for other in desc_tokens)
        for token in query_tokens
    )
    return earned / total


def score_description(query_tokens: list[str], description: str) -> float:
    """Score how well a description matches the query tokens, in [0, 1].

    Long compound descriptions are penalized for every token the query does
    not account for, so concise precise matches rank first. The whole-string
    term compares against the literal description, so only a description equal
    to the query reaches 1.0.
    """
    desc_tokens = description_tokens(description)
    if not query_tokens or not desc_tokens:
        return 0.0
    coverage = token_coverage(query_tokens, desc_tokens)
    unmatched = sum(
        1
        for other in desc_tokens
        if all(token_credit(token, other) == 0.0 for token in query_tokens)
    )
    penalty = min(MAX_EXTRA_PENALTY, EXTRA_TOKEN_PENALTY * unmatched)
    full_string = JaroWinkler.similarity(
        " ".join(query_tokens), " ".join(tokenize(description))
    )
    score = COVERAGE_WEIGHT * (coverage - penalty) + FULL_STRING_WEIGHT * full_string
    return round(min(1.0, max(0.0, score)), 4)


@dataclass(frozen=True)
class RankedList:
    """Candidates sorted by fuzzy score, best first."""

    items: list[RankedCandidate] = field(default_factory=list)

    def top_score(self) -> float:
        return self.items[0].fuzzy_score if self.items else 0.0

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class FuzzyRanker:
    """Scores external candidates against normalized query tokens."""

    def rank(
        self, query_tokens: list[str], candidates: list[ExternalCandidate]
    ) -> RankedList:
        """Return candidates sorted by score; ties keep source order."""
        scored = [
            RankedCandidate(
                candidate=candidate,
                fuzzy_score=score_description(query_tokens, candidate.description),
            )
            for candidate in candidates
        ]
        return RankedList(
            items=sorted(scored, key=lambda item: item.fuzzy_score, reverse=True)
        )


def should_fallback(
    top_score: float, query_tokens: list[str], threshold: float = FUZZY_THRESHOLD
) -> bool:
    """Return true when results are poor and the query can be relaxed."""
    return top_score < threshold and len(query_tokens) >= 2


def generate_fallback_queries(query_tokens: list[str]) -> list[str]:
    """Build alternate queries, each omitting one token, left to right."""
    if len(query_tokens) < 2:
        return []
    queries: list[str] = []
    for skipped in range(len(query_tokens)):
        reduced = " ".join(
            token for index, token in enumerate(query_tokens) if index != skipped
        )
        if len(reduced) >= 2 and reduced not in queries:
            queries.append(reduced)
    return queries
