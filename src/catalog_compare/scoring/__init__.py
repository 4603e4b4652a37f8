"""scoring subpackage: similarity and best-choice ranking over a selection.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from catalog_compare.scoring import BestChoiceRanker, SimilarityScorer

    SimilarityScorer().selection_similarity([a, b]).score
    BestChoiceRanker().rank([a, b]).reasons
"""

from __future__ import annotations

from catalog_compare.scoring.config import (
    Criterion,
    DuplicateSpecPolicy,
    RankingConfig,
    SimilarityConfig,
)
from catalog_compare.scoring.ranker import BestChoiceRanker
from catalog_compare.scoring.similarity import SimilarityScorer

__all__ = [
    "BestChoiceRanker",
    "Criterion",
    "DuplicateSpecPolicy",
    "RankingConfig",
    "SimilarityConfig",
    "SimilarityScorer",
]
