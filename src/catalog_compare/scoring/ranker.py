"""BestChoiceRanker: weighted multi-criteria "best choice" among selected products.

Each candidate earns a composite score in [0, 100] from five criteria.
Every criterion is normalized against the selection itself (min/max of the
2-3 selected products), never against a catalog-wide scale:

=================  ======  =========  ===========================================
Criterion          Weight  Direction  Term (when the selection's range is > 0)
=================  ======  =========  ===========================================
price              30      lower      (max - price) / (max - min) * w
rating             25      higher     rating / max * w           (skip if max 0)
review count       15      higher     reviews / max * w          (skip if max 0)
specification #    20      higher     len(specs) / max * w       (skip if max 0)
feature #          10      higher     len(features) / max * w    (skip if max 0)
=================  ======  =========  ===========================================

A criterion on which all candidates agree (range 0) adds nothing to anyone.
A candidate that is the *sole* best on a ranged criterion earns that
criterion's reason; ties earn no reason.  The winner is the highest total,
ties going to the candidate selected first.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from catalog_compare.catalog.models import ProductSnapshot
from catalog_compare.result import RankedCandidate
from catalog_compare.scoring.config import Criterion, RankingConfig
from catalog_compare.scoring.contract import validate_selection

__all__ = ["REASONS", "BestChoiceRanker"]

logger = logging.getLogger(__name__)

REASONS: dict[Criterion, str] = {
    Criterion.PRICE: "Best price value",
    Criterion.RATING: "Highest customer rating",
    Criterion.REVIEW_COUNT: "Most customer reviews",
    Criterion.SPECIFICATIONS: "Most detailed specifications",
    Criterion.FEATURES: "Most features included",
}


def _criterion_values(products: Sequence[ProductSnapshot]) -> dict[Criterion, np.ndarray]:
    """Extract the raw per-candidate value of each criterion."""
    return {
        Criterion.PRICE: np.array([p.price for p in products], dtype=float),
        Criterion.RATING: np.array([p.rating for p in products], dtype=float),
        Criterion.REVIEW_COUNT: np.array([p.review_count for p in products], dtype=float),
        Criterion.SPECIFICATIONS: np.array(
            [len(p.specifications) for p in products], dtype=float
        ),
        Criterion.FEATURES: np.array([len(p.features) for p in products], dtype=float),
    }


def _sole_index(values: np.ndarray, target: float) -> int | None:
    """Return the index of the only element equal to ``target``, else None."""
    hits = np.flatnonzero(values == target)
    return int(hits[0]) if hits.size == 1 else None


class BestChoiceRanker:
    """Ranks a 2-3 product selection and explains the winner.

    Example::

        ranker = BestChoiceRanker()
        best = ranker.rank([phone_a, phone_b])
        best.product.id    # "phone-a"
        best.reasons       # ("Best price value", "Highest customer rating")
    """

    def __init__(self, config: RankingConfig | None = None) -> None:
        self._config: RankingConfig = config if config is not None else RankingConfig()

    @property
    def config(self) -> RankingConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def rank(self, selection: Sequence[ProductSnapshot]) -> RankedCandidate:
        """Return the best-choice candidate of ``selection``.

        Raises:
            ContractViolation: For fewer than 2 candidates, more than
                ``RankingConfig.max_candidates``, a repeated product or a
                mixed-category selection.
        """
        products = validate_selection(selection, max_size=self._config.max_candidates)
        scores, reasons = self._score(products)
        # argmax returns the first maximal index: ties go to the first-seen
        winner = int(np.argmax(scores))
        logger.debug(
            "best choice %r scored %.2f over %d candidates",
            products[winner].id,
            scores[winner],
            len(products),
        )
        return RankedCandidate(
            product=products[winner],
            score=float(scores[winner]),
            reasons=tuple(reasons[winner]),
        )

    def rank_all(self, selection: Sequence[ProductSnapshot]) -> list[RankedCandidate]:
        """Return every candidate, best first, each with its own reasons.

        Equal scores keep selection order, so ``rank_all(s)[0]`` is always
        the candidate ``rank(s)`` returns.
        """
        products = validate_selection(selection, max_size=self._config.max_candidates)
        scores, reasons = self._score(products)
        order = np.argsort(-scores, kind="stable")
        return [
            RankedCandidate(
                product=products[i],
                score=float(scores[i]),
                reasons=tuple(reasons[i]),
            )
            for i in order.tolist()
        ]

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _score(
        self, products: Sequence[ProductSnapshot]
    ) -> tuple[np.ndarray, list[list[str]]]:
        """Compute composite scores and per-candidate reasons."""
        scores = np.zeros(len(products), dtype=float)
        reasons: list[list[str]] = [[] for _ in products]

        for criterion, values in _criterion_values(products).items():
            weight = self._config.weight(criterion)
            low = float(values.min())
            high = float(values.max())
            if high - low <= 0.0:
                continue

            if criterion == Criterion.PRICE:
                scores += (high - values) / (high - low) * weight
                best = _sole_index(values, low)
            else:
                # high > low >= 0 here, so the max-is-zero skip cannot trigger
                scores += values / high * weight
                best = _sole_index(values, high)

            if best is not None:
                reasons[best].append(REASONS[criterion])

        return scores, reasons
