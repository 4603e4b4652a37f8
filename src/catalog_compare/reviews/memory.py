"""InMemoryReviewStore: thread-safe, versioned reference ``ReviewStore``.

Every review carries an integer version that starts at 1 and grows by one
on each successful ``replace``.  Every product carries a version too, bumped
by any insert, replace or delete of one of its reviews, so a rating computed
from a stale review list cannot be saved.  A write naming a stale version
raises ``WriteConflict``; the caller re-reads and retries.  A single lock
makes each call atomic, which is all the store contract asks for.

Useful for tests, demos, and as a model for real persistence adapters.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from catalog_compare.errors import (
    DuplicateReview,
    ProductNotFound,
    ReviewNotFound,
    WriteConflict,
)
from catalog_compare.result import RatingAggregate
from catalog_compare.reviews.models import ReviewRecord, StoredReview

__all__ = ["InMemoryReviewStore"]

logger = logging.getLogger(__name__)


class InMemoryReviewStore:
    """Versioned in-memory review store.

    Args:
        product_ids: Products known to the store.  Reviews may only be
            written for these, and their ratings start at ``(0.0, 0)``.
    """

    def __init__(self, product_ids: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._reviews: dict[str, StoredReview] = {}
        self._ratings: dict[str, RatingAggregate] = {
            product_id: RatingAggregate(product_id=product_id, rating=0.0, review_count=0)
            for product_id in product_ids
        }
        self._product_versions: dict[str, int] = dict.fromkeys(self._ratings, 0)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def add_product(self, product_id: str) -> None:
        with self._lock:
            self._ratings.setdefault(
                product_id,
                RatingAggregate(product_id=product_id, rating=0.0, review_count=0),
            )
            self._product_versions.setdefault(product_id, 0)

    def has_product(self, product_id: str) -> bool:
        with self._lock:
            return product_id in self._ratings

    def product_rating(self, product_id: str) -> RatingAggregate:
        """Return the last aggregate saved for ``product_id``."""
        with self._lock:
            try:
                return self._ratings[product_id]
            except KeyError:
                raise ProductNotFound(f"unknown product {product_id!r}") from None

    def save_product_rating(self, aggregate: RatingAggregate, expected_version: int) -> None:
        with self._lock:
            if aggregate.product_id not in self._ratings:
                raise ProductNotFound(f"unknown product {aggregate.product_id!r}")
            version = self._product_versions[aggregate.product_id]
            if version != expected_version:
                logger.debug(
                    "rejecting stale rating of product %r (version %d, expected %d)",
                    aggregate.product_id,
                    version,
                    expected_version,
                )
                raise WriteConflict(aggregate.product_id, expected_version, version)
            self._ratings[aggregate.product_id] = aggregate

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def get(self, review_id: str) -> StoredReview | None:
        with self._lock:
            return self._reviews.get(review_id)

    def find_by_product(self, product_id: str) -> list[ReviewRecord]:
        reviews, _ = self.find_by_product_versioned(product_id)
        return reviews

    def find_by_product_versioned(self, product_id: str) -> tuple[list[ReviewRecord], int]:
        """Return the product's reviews with the product version they were read at."""
        with self._lock:
            reviews = [
                stored.record
                for stored in self._reviews.values()
                if stored.record.product_id == product_id
            ]
            return reviews, self._product_versions.get(product_id, 0)

    def find_by_author(self, product_id: str, user_id: str) -> ReviewRecord | None:
        with self._lock:
            for stored in self._reviews.values():
                record = stored.record
                if record.product_id == product_id and record.user_id == user_id:
                    return record
            return None

    def insert(self, record: ReviewRecord) -> int:
        with self._lock:
            if record.product_id not in self._ratings:
                raise ProductNotFound(f"unknown product {record.product_id!r}")
            if record.id in self._reviews:
                raise WriteConflict(record.id, 0, self._reviews[record.id].version)
            for stored in self._reviews.values():
                if (
                    stored.record.product_id == record.product_id
                    and stored.record.user_id == record.user_id
                ):
                    raise DuplicateReview(
                        f"user {record.user_id!r} has already reviewed "
                        f"product {record.product_id!r}"
                    )
            self._reviews[record.id] = StoredReview(record=record, version=1)
            self._product_versions[record.product_id] += 1
            return 1

    def replace(self, record: ReviewRecord, expected_version: int) -> int:
        with self._lock:
            stored = self._reviews.get(record.id)
            if stored is None:
                raise ReviewNotFound(f"unknown review {record.id!r}")
            if stored.version != expected_version:
                logger.debug(
                    "rejecting stale write to review %r (version %d, expected %d)",
                    record.id,
                    stored.version,
                    expected_version,
                )
                raise WriteConflict(record.id, expected_version, stored.version)
            version = stored.version + 1
            self._reviews[record.id] = StoredReview(record=record, version=version)
            self._product_versions[stored.record.product_id] += 1
            return version

    def delete(self, review_id: str) -> None:
        with self._lock:
            stored = self._reviews.pop(review_id, None)
            if stored is None:
                raise ReviewNotFound(f"unknown review {review_id!r}")
            self._product_versions[stored.record.product_id] += 1
