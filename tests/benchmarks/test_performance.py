"""Performance benchmark suite for catalog-compare.

Timing targets on a 3-product selection:
- 10 specifications per product: <1ms
- 100 specifications per product: <10ms
- 500 specifications per product: <50ms

Run with: pytest tests/benchmarks/ --benchmark-only -v
Skip during normal test runs: pytest --benchmark-disable
"""

from __future__ import annotations

from catalog_compare import (
    SpecificationIndex,
    best_choice,
    recompute_product_rating,
    selection_similarity,
)


class TestSelectionSimilarity:
    def test_10spec(self, benchmark, selection_10spec):  # type: ignore[no-untyped-def]
        result = benchmark(selection_similarity, selection_10spec)
        # Verify the result is valid (not just timing)
        assert 0 <= result.score <= 100

    def test_100spec(self, benchmark, selection_100spec):  # type: ignore[no-untyped-def]
        result = benchmark(selection_similarity, selection_100spec)
        assert result.score == 75

    def test_500spec(self, benchmark, selection_500spec):  # type: ignore[no-untyped-def]
        result = benchmark(selection_similarity, selection_500spec)
        assert result.score == 75


class TestBestChoice:
    def test_500spec(self, benchmark, selection_500spec):  # type: ignore[no-untyped-def]
        result = benchmark(best_choice, selection_500spec)
        assert 0.0 <= result.score <= 100.0


class TestCatalogViews:
    def test_facets_500_products(self, benchmark, category_500):  # type: ignore[no-untyped-def]
        facets = benchmark(lambda: SpecificationIndex(category_500).facets())
        assert len(facets) == 5


class TestRatingAggregate:
    def test_1000_reviews(self, benchmark, reviews_1000):  # type: ignore[no-untyped-def]
        result = benchmark(recompute_product_rating, "p0", reviews_1000)
        assert result.review_count == 1000
        assert result.rating == 3.0
