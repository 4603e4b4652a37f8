"""Result dataclasses returned by the scoring and aggregation calls.

All results are frozen value objects computed on demand.  None of them is
meant to be persisted as a source of truth: ``ReviewCounts`` in particular
is always recomputed from the live likes/dislikes/replies collections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog_compare.catalog.models import ProductSnapshot

__all__ = [
    "PairScore",
    "RankedCandidate",
    "RatingAggregate",
    "ReviewCounts",
    "SimilarityResult",
    "SpecFacet",
    "SpecRow",
]


@dataclass(frozen=True, slots=True)
class SpecFacet:
    """A specification name with the distinct values observed for it.

    Attributes:
        name:      Specification name.
        values:    Sorted, deduplicated values seen across the products.
        frequency: Number of specification entries carrying this name.
    """

    name: str
    values: tuple[str, ...]
    frequency: int


@dataclass(frozen=True, slots=True)
class SpecRow:
    """One row of a side-by-side comparison table.

    ``values[i]`` is the value of product ``i`` for ``name``, or None when the
    product does not list that specification.
    """

    name: str
    values: tuple[str | None, ...]

    @property
    def all_equal(self) -> bool:
        """True when every product lists the same value for this row."""
        return None not in self.values and len(set(self.values)) == 1


@dataclass(frozen=True, slots=True)
class PairScore:
    """Similarity between two products of a selection."""

    left_id: str
    right_id: str
    score: int


@dataclass(frozen=True, slots=True)
class SimilarityResult:
    """Similarity of a 2- or 3-product selection.

    Attributes:
        score:    Integer percentage in [0, 100].  For three products, the
                  half-up rounded mean of the three pair scores.
        pairwise: Every unordered pair score, in selection order.
    """

    score: int
    pairwise: tuple[PairScore, ...]


@dataclass(frozen=True, slots=True)
class RankedCandidate:
    """A product with its best-choice score and the reasons it earned.

    Attributes:
        product: The ranked snapshot (referenced, not copied).
        score:   Weighted composite in [0, 100].
        reasons: Human-readable reasons, one per criterion on which this
                 product is the sole extremum.  Ties award nothing.
    """

    product: ProductSnapshot
    score: float
    reasons: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ReviewCounts:
    """Derived counters of a review, as seen by one viewer."""

    likes_count: int
    dislikes_count: int
    replies_count: int
    is_liked: bool = False
    is_disliked: bool = False


@dataclass(frozen=True, slots=True)
class RatingAggregate:
    """Average rating and review count of a product.

    Attributes:
        product_id:   Product the aggregate belongs to.
        rating:       Mean review rating rounded half up to one decimal,
                      0.0 when there are no counted reviews.
        review_count: Number of reviews counted in the mean.
    """

    product_id: str
    rating: float
    review_count: int
