"""SimilarityScorer: specification-overlap similarity between products.

The score of a pair is the share of specification names (union of both
products' names) whose values are present on both sides and exactly equal::

    score = round_half_up(100 * matches / |names(a) ∪ names(b)|)

Names present on only one side count in the denominator, so products with
disjoint specification names score 0 and identical products score 100.

A 2- or 3-product selection is scored from its similarity matrix: the
upper triangle holds the unordered pair scores, and the selection score is
their half-up rounded mean.
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence

import numpy as np

from catalog_compare._numeric import round_half_up
from catalog_compare.catalog.index import SpecificationIndex
from catalog_compare.catalog.models import ProductSnapshot
from catalog_compare.errors import InvariantBreach
from catalog_compare.result import PairScore, SimilarityResult
from catalog_compare.scoring.config import (
    MAX_SELECTION,
    DuplicateSpecPolicy,
    SimilarityConfig,
)
from catalog_compare.scoring.contract import validate_selection

__all__ = ["SimilarityScorer"]

# Marker for a name that must never count as a match (UNMATCHED policy)
_AMBIGUOUS = object()


class SimilarityScorer:
    """Scores how alike two or three products are by their specifications.

    The scorer holds configuration only; every call recomputes from the
    snapshots it is given, so results always reflect the current selection.

    Example::

        scorer = SimilarityScorer()
        scorer.pairwise_similarity(phone_a, phone_b)           # 80
        scorer.selection_similarity([a, b, c]).score           # 60
    """

    def __init__(self, config: SimilarityConfig | None = None) -> None:
        self._config: SimilarityConfig = (
            config if config is not None else SimilarityConfig()
        )

    @property
    def config(self) -> SimilarityConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def pairwise_similarity(self, a: ProductSnapshot, b: ProductSnapshot) -> int:
        """Return the similarity of ``a`` and ``b`` as an integer in [0, 100].

        Symmetric in its arguments.  Two products without any specification
        score ``SimilarityConfig.empty_union_score``.

        Raises:
            InvariantBreach: If a product repeats a specification name and the
                duplicate policy is ERROR.
        """
        names = SpecificationIndex((a, b)).spec_names()
        if not names:
            return self._config.empty_union_score

        values_a = self._lookup(a)
        values_b = self._lookup(b)
        matches = 0
        for name in names:
            left = values_a.get(name)
            right = values_b.get(name)
            if left is None or right is None or left is _AMBIGUOUS or right is _AMBIGUOUS:
                continue
            if left == right:
                matches += 1
        return int(round_half_up(100 * matches / len(names)))

    def similarity_matrix(self, products: Sequence[ProductSnapshot]) -> np.ndarray:
        """Return the symmetric ``(N, N)`` int64 matrix of pair scores.

        The diagonal compares each product with itself and is therefore
        ``pairwise_similarity(p, p)``: 100, or ``empty_union_score`` for a
        product without specifications.
        """
        n = len(products)
        matrix = np.zeros((n, n), dtype=np.int64)
        for i in range(n):
            matrix[i, i] = self.pairwise_similarity(products[i], products[i])
        for i, j in itertools.combinations(range(n), 2):
            score = self.pairwise_similarity(products[i], products[j])
            matrix[i, j] = score
            matrix[j, i] = score
        return matrix

    def selection_similarity(
        self, selection: Sequence[ProductSnapshot]
    ) -> SimilarityResult:
        """Score a selection of two or three products.

        Args:
            selection: Selected products, all from the same category.

        Returns:
            A ``SimilarityResult`` whose ``score`` is the pair score for two
            products and the half-up rounded mean of the three pair scores
            for three products.

        Raises:
            ContractViolation: For fewer than 2 or more than 3 products,
                a repeated product, or a mixed-category selection.
        """
        products = validate_selection(selection, max_size=MAX_SELECTION)
        matrix = self.similarity_matrix(products)
        rows, cols = np.triu_indices(len(products), k=1)
        upper = matrix[rows, cols]

        pairwise = tuple(
            PairScore(
                left_id=products[i].id,
                right_id=products[j].id,
                score=int(score),
            )
            for i, j, score in zip(rows.tolist(), cols.tolist(), upper.tolist(), strict=True)
        )
        score = int(round_half_up(float(np.mean(upper))))
        return SimilarityResult(score=score, pairwise=pairwise)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lookup(self, product: ProductSnapshot) -> dict[str, object]:
        """Map each specification name of ``product`` to the value compared."""
        values: dict[str, object] = {}
        policy = self._config.duplicate_policy
        for spec in product.specifications:
            if spec.name not in values:
                values[spec.name] = spec.value
                continue
            if policy == DuplicateSpecPolicy.ERROR:
                msg = (
                    f"product {product.id!r} lists specification "
                    f"{spec.name!r} more than once"
                )
                raise InvariantBreach(msg)
            if policy == DuplicateSpecPolicy.UNMATCHED:
                values[spec.name] = _AMBIGUOUS
        return values
