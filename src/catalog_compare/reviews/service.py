"""ReviewService: review mutations against a store, with aggregates kept in sync.

Wires a ``ReviewStore`` to the pure functions of
``catalog_compare.reviews.aggregate`` and applies the application's
authorization rules:

- one review per user and product;
- only the author or a moderator edits or deletes a review;
- only a moderator changes a review's status;
- only the reply's author or a moderator deletes a reply.

Architecture:
- Every mutation of an existing review is a read-modify-write: read the
  stored record and its version, compute the new record with a pure
  function, then ``replace`` it naming the version that was read.  A
  concurrent writer makes the replace raise ``WriteConflict``; the whole
  read-modify-write is then retried with jittered exponential backoff via
  ``tenacity``.  Authorization runs inside the attempt, against the fresh
  record.
- After any rating-relevant change (create, rating edit, status change,
  delete) the product aggregate is recomputed in full from the store and
  saved back naming the product version it was computed from.  A stale
  save raises ``WriteConflict`` and the recompute is retried the same way.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from catalog_compare.errors import (
    ContractViolation,
    DuplicateReview,
    PermissionDenied,
    ProductNotFound,
    ReviewNotFound,
    WriteConflict,
)
from catalog_compare.protocols import ReviewStore
from catalog_compare.result import RatingAggregate, ReviewCounts
from catalog_compare.reviews import aggregate
from catalog_compare.reviews.config import ServiceConfig
from catalog_compare.reviews.models import (
    Actor,
    ReplyRecord,
    ReviewEdit,
    ReviewRecord,
    ReviewStatus,
)

__all__ = ["ReviewService"]

logger = logging.getLogger(__name__)

Mutation = Callable[[ReviewRecord], ReviewRecord]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return uuid.uuid4().hex


class ReviewService:
    """Applies review mutations and keeps product ratings consistent.

    Example::

        store = InMemoryReviewStore(product_ids=["p1"])
        service = ReviewService(store)
        alice = Actor(user_id="u1", name="Alice")

        review = service.create_review(alice, "p1", rating=5, title="Great", text="...")
        service.like(Actor(user_id="u2"), review.id).likes_count   # 1
        store.product_rating("p1")                                 # (5.0, 1)
    """

    def __init__(
        self,
        store: ReviewStore,
        config: ServiceConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialise the service.

        Args:
            store:      Review persistence.
            config:     Retry and aggregation settings.  Defaults to
                ``ServiceConfig()``.
            clock:      Source of timestamps.  Defaults to timezone-aware UTC now.
            id_factory: Source of review and reply ids.  Defaults to uuid4 hex.
        """
        self._store = store
        self._config = config if config is not None else ServiceConfig()
        self._clock = clock if clock is not None else _utcnow
        self._new_id = id_factory if id_factory is not None else _new_id

        _retry = retry(
            retry=retry_if_exception_type(WriteConflict),
            wait=wait_random_exponential(max=self._config.retry_wait_max),
            stop=stop_after_attempt(self._config.max_write_attempts),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        self._mutate = _retry(self._mutate_once)
        self._refresh = _retry(self._refresh_once)

    @property
    def config(self) -> ServiceConfig:
        return self._config

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def create_review(
        self, actor: Actor, product_id: str, rating: int, title: str, text: str
    ) -> ReviewRecord:
        """Create ``actor``'s review of ``product_id`` and refresh its rating.

        The early author lookup only fails fast; ``insert`` enforces the
        one-review-per-user rule atomically.

        Raises:
            ProductNotFound: If the store does not know the product.
            DuplicateReview: If ``actor`` already reviewed the product.
            InvariantBreach: If ``rating`` is outside 1..5.
        """
        if not self._store.has_product(product_id):
            raise ProductNotFound(f"unknown product {product_id!r}")
        if self._store.find_by_author(product_id, actor.user_id) is not None:
            raise DuplicateReview(
                f"user {actor.user_id!r} has already reviewed product {product_id!r}"
            )

        now = self._clock()
        record = aggregate.check_review(
            ReviewRecord(
                id=self._new_id(),
                product_id=product_id,
                user_id=actor.user_id,
                user_name=actor.name,
                rating=rating,
                title=title.strip(),
                text=text.strip(),
                created_at=now,
                updated_at=now,
            )
        )
        self._store.insert(record)
        logger.debug("created review %r on product %r", record.id, product_id)
        self.refresh_product_rating(product_id)
        return record

    def edit_review(self, actor: Actor, review_id: str, edit: ReviewEdit) -> ReviewRecord:
        """Apply a content edit by the author (or a moderator).

        Raises:
            ReviewNotFound:   If the review does not exist.
            PermissionDenied: If ``actor`` is neither author nor moderator.
            InvariantBreach:  If the new rating is outside 1..5.
        """
        outcomes: list[aggregate.EditOutcome] = []

        def _edit(record: ReviewRecord) -> ReviewRecord:
            if not actor.is_moderator and record.user_id != actor.user_id:
                raise PermissionDenied("You can only edit your own reviews")
            outcome = aggregate.apply_edit(record, edit, self._clock())
            # Only the outcome of the attempt that commits is kept
            outcomes[:] = [outcome]
            return outcome.review

        _, updated = self._mutate(review_id, _edit)
        if outcomes and outcomes[0].rating_changed:
            self.refresh_product_rating(updated.product_id)
        return updated

    def moderate_review(
        self, actor: Actor, review_id: str, status: ReviewStatus
    ) -> ReviewRecord:
        """Change a review's status.  Moderators only; content stays unedited.

        Raises:
            ReviewNotFound:   If the review does not exist.
            PermissionDenied: If ``actor`` is not a moderator.
        """
        if not actor.is_moderator:
            raise PermissionDenied("Only administrators can change review status")

        before, updated = self._mutate(
            review_id, lambda record: aggregate.moderate(record, status, self._clock())
        )
        if before.status != updated.status:
            logger.debug("review %r is now %s", review_id, updated.status)
            self.refresh_product_rating(updated.product_id)
        return updated

    def delete_review(self, actor: Actor, review_id: str) -> RatingAggregate:
        """Delete a review and return the product's refreshed rating.

        Raises:
            ReviewNotFound:   If the review does not exist.
            PermissionDenied: If ``actor`` is neither author nor moderator.
        """
        stored = self._store.get(review_id)
        if stored is None:
            raise ReviewNotFound(f"unknown review {review_id!r}")
        record = stored.record
        if not actor.is_moderator and record.user_id != actor.user_id:
            raise PermissionDenied("You can only delete your own reviews")

        self._store.delete(review_id)
        logger.debug("deleted review %r of product %r", review_id, record.product_id)
        return self.refresh_product_rating(record.product_id)

    def product_reviews(self, product_id: str, viewer: Actor | None = None) -> list[ReviewRecord]:
        """Return the reviews ``viewer`` may see, newest first."""
        moderator = viewer is not None and viewer.is_moderator
        return aggregate.visible_reviews(
            self._store.find_by_product(product_id), include_disabled=moderator
        )

    def counts(self, review_id: str, viewer: Actor | None = None) -> ReviewCounts:
        """Return the derived counters of a review for ``viewer``."""
        stored = self._store.get(review_id)
        if stored is None:
            raise ReviewNotFound(f"unknown review {review_id!r}")
        return aggregate.compute_derived(
            stored.record, viewer.user_id if viewer is not None else None
        )

    # ------------------------------------------------------------------
    # Votes and replies
    # ------------------------------------------------------------------

    def like(self, actor: Actor, review_id: str) -> ReviewCounts:
        """Toggle ``actor``'s like and return the counters they now see."""
        _, updated = self._mutate(
            review_id, lambda record: aggregate.like(record, actor.user_id, self._clock())
        )
        return aggregate.compute_derived(updated, actor.user_id)

    def dislike(self, actor: Actor, review_id: str) -> ReviewCounts:
        """Toggle ``actor``'s dislike and return the counters they now see."""
        _, updated = self._mutate(
            review_id, lambda record: aggregate.dislike(record, actor.user_id, self._clock())
        )
        return aggregate.compute_derived(updated, actor.user_id)

    def reply(self, actor: Actor, review_id: str, text: str) -> ReplyRecord:
        """Append a reply by ``actor`` and return it.

        Raises:
            ContractViolation: If ``text`` is blank.
            ReviewNotFound:    If the review does not exist.
        """
        body = text.strip()
        if not body:
            raise ContractViolation("reply text must not be blank")
        now = self._clock()
        new_reply = ReplyRecord(
            id=self._new_id(),
            user_id=actor.user_id,
            user_name=actor.name,
            text=body,
            created_at=now,
        )
        self._mutate(review_id, lambda record: aggregate.add_reply(record, new_reply, now))
        return new_reply

    def delete_reply(self, actor: Actor, review_id: str, reply_id: str) -> ReviewRecord:
        """Delete a reply by its author or a moderator.

        Raises:
            ReviewNotFound:   If the review does not exist.
            ReplyNotFound:    If the review has no such reply.
            PermissionDenied: If ``actor`` is neither reply author nor moderator.
        """

        def _delete(record: ReviewRecord) -> ReviewRecord:
            target = aggregate.find_reply(record, reply_id)
            if not actor.is_moderator and target.user_id != actor.user_id:
                raise PermissionDenied("You can only delete your own replies")
            return aggregate.remove_reply(record, reply_id, self._clock())

        _, updated = self._mutate(review_id, _delete)
        return updated

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def product_rating(self, product_id: str) -> RatingAggregate:
        """Recompute ``product_id``'s rating from the store without saving it.

        Raises:
            ProductNotFound: If the store does not know the product.
        """
        if not self._store.has_product(product_id):
            raise ProductNotFound(f"unknown product {product_id!r}")
        return aggregate.recompute_product_rating(
            product_id,
            self._store.find_by_product(product_id),
            include_disabled=self._config.include_disabled_in_rating,
        )

    def refresh_product_rating(self, product_id: str) -> RatingAggregate:
        """Recompute ``product_id``'s rating from all its reviews and save it.

        Raises:
            WriteConflict: If the product's reviews kept changing through
                every attempt.
        """
        result = self._refresh(product_id)
        logger.info(
            "product %r rating %.1f over %d reviews",
            product_id,
            result.rating,
            result.review_count,
        )
        return result

    # ------------------------------------------------------------------
    # Read-modify-write
    # ------------------------------------------------------------------

    def _mutate_once(
        self, review_id: str, mutation: Mutation
    ) -> tuple[ReviewRecord, ReviewRecord]:
        """Run one read-modify-write attempt; return (before, after)."""
        stored = self._store.get(review_id)
        if stored is None:
            raise ReviewNotFound(f"unknown review {review_id!r}")
        updated = mutation(stored.record)
        if updated is not stored.record:
            self._store.replace(updated, stored.version)
        return stored.record, updated

    def _refresh_once(self, product_id: str) -> RatingAggregate:
        """Recompute and save one product rating against the version read."""
        reviews, version = self._store.find_by_product_versioned(product_id)
        result = aggregate.recompute_product_rating(
            product_id,
            reviews,
            include_disabled=self._config.include_disabled_in_rating,
        )
        self._store.save_product_rating(result, version)
        return result
