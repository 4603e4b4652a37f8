"""catalog-compare - product comparison, best-choice ranking and review aggregates."""

from __future__ import annotations

from catalog_compare.api import (
    best_choice,
    pairwise_similarity,
    rank_all,
    recompute_product_rating,
    selection_similarity,
    top_frequent_specs,
)
from catalog_compare.catalog import (
    FacetOrder,
    ProductSnapshot,
    SnapshotBuilder,
    SortKey,
    Specification,
    SpecificationIndex,
    filter_products,
    search_products,
    sort_products,
)
from catalog_compare.errors import (
    CatalogCompareError,
    ContractViolation,
    DuplicateReview,
    DuplicateSelection,
    InvariantBreach,
    PermissionDenied,
    ProductNotFound,
    ReplyNotFound,
    ReviewNotFound,
    SelectionFull,
    WriteConflict,
)
from catalog_compare.result import (
    PairScore,
    RankedCandidate,
    RatingAggregate,
    ReviewCounts,
    SimilarityResult,
    SpecFacet,
    SpecRow,
)
from catalog_compare.reviews import (
    Actor,
    InMemoryReviewStore,
    ReplyRecord,
    ReviewEdit,
    ReviewRecord,
    ReviewService,
    ReviewStatus,
    ServiceConfig,
)
from catalog_compare.scoring import (
    BestChoiceRanker,
    Criterion,
    DuplicateSpecPolicy,
    RankingConfig,
    SimilarityConfig,
    SimilarityScorer,
)
from catalog_compare.selection import SelectionPhase, SelectionState

__version__: str = "0.1.0"
__all__: list[str] = [
    "Actor",
    "BestChoiceRanker",
    "CatalogCompareError",
    "ContractViolation",
    "Criterion",
    "DuplicateReview",
    "DuplicateSelection",
    "DuplicateSpecPolicy",
    "FacetOrder",
    "InMemoryReviewStore",
    "InvariantBreach",
    "PairScore",
    "PermissionDenied",
    "ProductNotFound",
    "ProductSnapshot",
    "RankedCandidate",
    "RankingConfig",
    "RatingAggregate",
    "ReplyNotFound",
    "ReplyRecord",
    "ReviewCounts",
    "ReviewEdit",
    "ReviewNotFound",
    "ReviewRecord",
    "ReviewService",
    "ReviewStatus",
    "SelectionFull",
    "SelectionPhase",
    "SelectionState",
    "ServiceConfig",
    "SimilarityConfig",
    "SimilarityResult",
    "SimilarityScorer",
    "SnapshotBuilder",
    "SortKey",
    "SpecFacet",
    "SpecRow",
    "Specification",
    "SpecificationIndex",
    "WriteConflict",
    "best_choice",
    "filter_products",
    "pairwise_similarity",
    "rank_all",
    "recompute_product_rating",
    "search_products",
    "selection_similarity",
    "sort_products",
    "top_frequent_specs",
]
