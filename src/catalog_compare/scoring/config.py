"""SimilarityConfig and RankingConfig: scoring parameters.

Both are frozen (immutable) dataclasses validated on construction.
DuplicateSpecPolicy selects how repeated specification names are treated
when two products are compared; Criterion names the five best-choice
ranking criteria.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = [
    "Criterion",
    "DuplicateSpecPolicy",
    "RankingConfig",
    "SimilarityConfig",
]

MAX_SELECTION = 3


class DuplicateSpecPolicy(StrEnum):
    """How a product listing the same specification name twice is compared.

    - FIRST:     Use the first entry for that name (default).
    - ERROR:     Raise ``InvariantBreach``.
    - UNMATCHED: Keep the name in the union but never count it as a match.
    """

    FIRST = auto()
    ERROR = auto()
    UNMATCHED = auto()


class Criterion(StrEnum):
    """The five best-choice criteria, in reason order."""

    PRICE = auto()
    RATING = auto()
    REVIEW_COUNT = auto()
    SPECIFICATIONS = auto()
    FEATURES = auto()


@dataclass(frozen=True, slots=True)
class SimilarityConfig:
    """Immutable configuration for ``SimilarityScorer``.

    Attributes:
        duplicate_policy:  Treatment of repeated specification names.
        empty_union_score: Score for two products that list no
            specifications at all (the match ratio is 0/0).  In [0, 100].
    """

    duplicate_policy: DuplicateSpecPolicy = DuplicateSpecPolicy.FIRST
    empty_union_score: int = 100

    def __post_init__(self) -> None:
        if not 0 <= self.empty_union_score <= 100:
            msg = f"empty_union_score must be in [0, 100], got {self.empty_union_score}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RankingConfig:
    """Immutable configuration for ``BestChoiceRanker``.

    Attributes:
        price:          Weight of the price criterion (lower is better).
        rating:         Weight of the customer rating criterion.
        review_count:   Weight of the review count criterion.
        specifications: Weight of the specification count criterion.
        features:       Weight of the feature count criterion.
        max_candidates: Largest selection the ranker accepts (>= 2).

    The five weights must be >= 0 and sum to 100, so a candidate that is
    the unique best on every criterion scores exactly 100.
    """

    price: float = 30.0
    rating: float = 25.0
    review_count: float = 15.0
    specifications: float = 20.0
    features: float = 10.0
    max_candidates: int = MAX_SELECTION

    def __post_init__(self) -> None:
        for criterion in Criterion:
            value = self.weight(criterion)
            if value < 0.0:
                msg = f"{criterion} weight must be >= 0, got {value}"
                raise ValueError(msg)
        total = sum(self.weight(criterion) for criterion in Criterion)
        if abs(total - 100.0) >= 1e-9:
            msg = f"weights must sum to 100, got {total}"
            raise ValueError(msg)
        if self.max_candidates < 2:
            msg = f"max_candidates must be >= 2, got {self.max_candidates}"
            raise ValueError(msg)

    def weight(self, criterion: Criterion) -> float:
        """Return the weight configured for ``criterion``."""
        return float(getattr(self, Criterion(criterion).value))
