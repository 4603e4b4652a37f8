"""Tests for the stateless public API functions.

Covers:
- pairwise_similarity / selection_similarity with and without config
- best_choice / rank_all delegate to a fresh ranker
- top_frequent_specs and recompute_product_rating
- No state carried between calls
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from catalog_compare import (
    ContractViolation,
    DuplicateSpecPolicy,
    ProductSnapshot,
    RankingConfig,
    ReviewRecord,
    SimilarityConfig,
    best_choice,
    pairwise_similarity,
    rank_all,
    recompute_product_rating,
    selection_similarity,
    top_frequent_specs,
)

Factory = Callable[..., ProductSnapshot]


class TestSimilarityFunctions:
    def test_pairwise(self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]) -> None:
        assert pairwise_similarity(*scenario_a) == 80

    def test_pairwise_with_config(self, make_product: Factory) -> None:
        a = make_product("a", specs=[("RAM", "8GB"), ("RAM", "16GB")])
        b = make_product("b", specs={"RAM": "8GB"})
        config = SimilarityConfig(duplicate_policy=DuplicateSpecPolicy.UNMATCHED)
        assert pairwise_similarity(a, b) == 100
        assert pairwise_similarity(a, b, config=config) == 0

    def test_selection(self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]) -> None:
        assert selection_similarity(list(scenario_a)).score == 80

    def test_selection_contract(self, make_product: Factory) -> None:
        with pytest.raises(ContractViolation):
            selection_similarity([make_product("a")])


class TestRankingFunctions:
    def test_best_choice(self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]) -> None:
        assert best_choice(scenario_a).product.id == "p1"

    def test_best_choice_with_config(
        self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]
    ) -> None:
        config = RankingConfig(
            price=0.0, rating=0.0, review_count=100.0, specifications=0.0, features=0.0
        )
        assert best_choice(scenario_a, config=config).product.id == "p2"

    def test_rank_all(self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]) -> None:
        assert [c.product.id for c in rank_all(scenario_a)] == ["p1", "p2"]

    def test_no_state_between_calls(
        self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]
    ) -> None:
        config = RankingConfig(
            price=0.0, rating=0.0, review_count=100.0, specifications=0.0, features=0.0
        )
        best_choice(scenario_a, config=config)
        assert best_choice(scenario_a).product.id == "p1"


class TestCatalogAndReviewFunctions:
    def test_top_frequent_specs(self, make_product: Factory) -> None:
        products = [
            make_product("a", specs={"RAM": "8GB", "OS": "iOS"}),
            make_product("b", specs={"RAM": "16GB"}),
        ]
        facets = top_frequent_specs(products, 1)
        assert [(f.name, f.values, f.frequency) for f in facets] == [
            ("RAM", ("16GB", "8GB"), 2)
        ]

    def test_recompute_product_rating(self, make_review: Callable[..., ReviewRecord]) -> None:
        reviews = [make_review("a", 5), make_review("b", 4)]
        assert recompute_product_rating("p1", reviews).rating == 4.5
