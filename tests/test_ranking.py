"""Tests for fuzzy ranking and query relaxation."""

from ingredient_catalog.domain.nutrition import ExternalCandidate, NutrientProfile
from ingredient_catalog.services.ranking import (
    FuzzyRanker,
    RankedList,
    generate_fallback_queries,
    score_description,
    should_fallback,
    token_credit,
)


def _candidate(external_id: str, description: str) -> ExternalCandidate:
    return ExternalCandidate(
        external_id=external_id,
        description=description,
        data_type="Foundation",
        brand_owner=None,
        ingredients_text=None,
        nutrients=NutrientProfile(calories=100, protein=1, carbs=1, fat=1),
    )


def test_exact_match_scores_one() -> None:
    assert score_description(["broccoli"], "Broccoli") == 1.0
    assert score_description(["chicken", "breast"], "Chicken, breast") == 1.0


def test_extra_tokens_lower_the_score() -> None:
    concise = score_description(["broccoli", "raw"], "Broccoli, raw")
    verbose = score_description(
        ["broccoli", "raw"], "Broccoli, raw, with cheese sauce, frozen, prepared"
    )

    assert concise == 1.0
    assert verbose < concise


def test_unrelated_description_scores_low() -> None:
    assert score_description(["salmon"], "Bread, whole wheat") < 0.5


def test_scores_stay_in_unit_interval() -> None:
    score = score_description(
        ["x"], "one two three four five six seven eight nine ten eleven"
    )

    assert 0.0 <= score <= 1.0


def test_token_credit_tiers() -> None:
    assert token_credit("apple", "apple") == 1.0
    assert token_credit("apple", "applesauce") == 0.9
    assert token_credit("yogurt", "yoghurt") == 0.8
    assert token_credit("fig", "kale") == 0.0


def test_substring_credit_requires_three_characters() -> None:
    assert token_credit("ab", "abc") < 0.9


def test_rank_sorts_descending_and_keeps_ties_stable() -> None:
    ranker = FuzzyRanker()
    candidates = [
        _candidate("1", "Bread, whole wheat"),
        _candidate("2", "Broccoli, raw"),
        _candidate("3", "Broccoli, raw"),
    ]

    ranked = ranker.rank(["broccoli", "raw"], candidates)

    assert [item.external_id for item in ranked.items] == ["2", "3", "1"]
    assert ranked.top_score() == 1.0


def test_top_score_of_empty_list_is_zero() -> None:
    assert RankedList().top_score() == 0.0


def test_generate_fallback_queries_drops_one_token_each() -> None:
    assert generate_fallback_queries(["kirkland", "chicken", "breast"]) == [
        "chicken breast",
        "kirkland breast",
        "kirkland chicken",
    ]


def test_generate_fallback_queries_needs_two_tokens() -> None:
    assert generate_fallback_queries(["apple"]) == []
    assert generate_fallback_queries([]) == []


def test_generate_fallback_queries_skips_short_reductions() -> None:
    assert generate_fallback_queries(["a", "kale"]) == ["kale"]


def test_should_fallback_threshold() -> None:
    assert should_fallback(0.3, ["a", "b"])
    assert not should_fallback(0.5, ["a", "b"])
    assert not should_fallback(0.1, ["apple"])
    assert should_fallback(0.55, ["a", "b"], threshold=0.6)


def test_exact_description_ranks_first() -> None:
    candidates = [
        _candidate("1", "Chicken, breast, roasted, with skin"),
        _candidate("2", "Chicken breast tenders, breaded"),
        _candidate("3", "Chicken breast"),
    ]

    ranked = FuzzyRanker().rank(["chicken", "breast"], candidates)

    assert ranked.items[0].external_id == "3"
    assert ranked.items[0].fuzzy_score == 1.0
    assert all(item.fuzzy_score < 1.0 for item in ranked.items[1:])


def test_literal_match_outranks_noise_padded_description() -> None:
    candidates = [
        _candidate("1", "Chicken breast, Kirkland brand, fresh"),
        _candidate("2", "chicken breast"),
    ]

    ranked = FuzzyRanker().rank(["chicken", "breast"], candidates)

    assert [item.external_id for item in ranked.items] == ["2", "1"]
    assert ranked.items[0].fuzzy_score == 1.0
    assert ranked.items[1].fuzzy_score < 1.0
