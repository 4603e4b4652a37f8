"""Public API functions for catalog-compare.

Stateless entry points over the scorer, the ranker, the specification index
and the rating aggregate.  Each call builds a fresh ``SimilarityScorer`` or
``BestChoiceRanker`` so no state is shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from catalog_compare.catalog.index import SpecificationIndex
from catalog_compare.catalog.models import ProductSnapshot
from catalog_compare.result import (
    RankedCandidate,
    RatingAggregate,
    SimilarityResult,
    SpecFacet,
)
from catalog_compare.reviews import aggregate
from catalog_compare.reviews.models import ReviewRecord
from catalog_compare.scoring.config import RankingConfig, SimilarityConfig
from catalog_compare.scoring.ranker import BestChoiceRanker
from catalog_compare.scoring.similarity import SimilarityScorer

__all__ = [
    "best_choice",
    "pairwise_similarity",
    "rank_all",
    "recompute_product_rating",
    "selection_similarity",
    "top_frequent_specs",
]


def pairwise_similarity(
    a: ProductSnapshot,
    b: ProductSnapshot,
    config: SimilarityConfig | None = None,
) -> int:
    """Return the 0..100 specification similarity of two products.

    Args:
        a:      First product.
        b:      Second product.
        config: Scoring options.  Defaults to ``SimilarityConfig()`` when None.
    """
    return SimilarityScorer(config=config).pairwise_similarity(a, b)


def selection_similarity(
    selection: Sequence[ProductSnapshot],
    config: SimilarityConfig | None = None,
) -> SimilarityResult:
    """Score a selection of two or three products.

    Returns:
        A ``SimilarityResult`` whose ``score`` is the pair score (two
        products) or the half-up rounded mean of the three pair scores.

    Raises:
        ContractViolation: If the selection is not 2-3 distinct products of
            one category.
    """
    return SimilarityScorer(config=config).selection_similarity(selection)


def best_choice(
    selection: Sequence[ProductSnapshot],
    config: RankingConfig | None = None,
) -> RankedCandidate:
    """Return the best product of a 2-3 product selection, with its reasons.

    Raises:
        ContractViolation: If the selection is invalid.
    """
    return BestChoiceRanker(config=config).rank(selection)


def rank_all(
    selection: Sequence[ProductSnapshot],
    config: RankingConfig | None = None,
) -> list[RankedCandidate]:
    """Return every candidate, best first; ties keep selection order."""
    return BestChoiceRanker(config=config).rank_all(selection)


def top_frequent_specs(products: Sequence[ProductSnapshot], n: int) -> list[SpecFacet]:
    """Return the ``n`` most frequent specification names with their values.

    Raises:
        ValueError: If ``n`` is negative.
    """
    return SpecificationIndex(products).top_frequent_specs(n)


def recompute_product_rating(
    product_id: str,
    reviews: Iterable[ReviewRecord],
    include_disabled: bool = False,
) -> RatingAggregate:
    """Recompute a product's rating and review count from its reviews.

    Disabled reviews are left out unless ``include_disabled`` is True.
    """
    return aggregate.recompute_product_rating(
        product_id, reviews, include_disabled=include_disabled
    )
