"""Reviews: records, pure aggregate operations, and the review service."""

from __future__ import annotations

from catalog_compare.reviews.aggregate import (
    EditOutcome,
    add_reply,
    apply_edit,
    check_review,
    compute_derived,
    dislike,
    find_reply,
    like,
    moderate,
    recompute_product_rating,
    remove_reply,
    visible_reviews,
    vote_state,
)
from catalog_compare.reviews.config import ServiceConfig
from catalog_compare.reviews.memory import InMemoryReviewStore
from catalog_compare.reviews.models import (
    MAX_REVIEW_RATING,
    MIN_REVIEW_RATING,
    Actor,
    ReplyRecord,
    ReviewEdit,
    ReviewRecord,
    ReviewStatus,
    StoredReview,
    Vote,
)
from catalog_compare.reviews.service import ReviewService

__all__ = [
    "MAX_REVIEW_RATING",
    "MIN_REVIEW_RATING",
    "Actor",
    "EditOutcome",
    "InMemoryReviewStore",
    "ReplyRecord",
    "ReviewEdit",
    "ReviewRecord",
    "ReviewService",
    "ReviewStatus",
    "ServiceConfig",
    "StoredReview",
    "Vote",
    "add_reply",
    "apply_edit",
    "check_review",
    "compute_derived",
    "dislike",
    "find_reply",
    "like",
    "moderate",
    "recompute_product_rating",
    "remove_reply",
    "visible_reviews",
    "vote_state",
]
