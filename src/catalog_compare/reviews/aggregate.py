"""Review aggregate: votes, derived counters, reply threads and product ratings.

Every function here is pure.  Mutations take a ``ReviewRecord`` and return
a new one built with ``dataclasses.replace``; the input is never modified,
so a caller either sees the whole update or none of it.

Vote state machine for one user on one review::

                like()                    dislike()
    NONE    ->  LIKED                     DISLIKED
    LIKED   ->  NONE (toggle off)         DISLIKED (moves the vote)
    DISLIKED->  LIKED (moves the vote)    NONE (toggle off)

Product ratings are always recomputed in full from the review list, never
adjusted incrementally, so the aggregate cannot drift from the reviews.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime

import numpy as np

from catalog_compare._numeric import round_half_up
from catalog_compare.errors import ContractViolation, InvariantBreach, ReplyNotFound
from catalog_compare.result import RatingAggregate, ReviewCounts
from catalog_compare.reviews.models import (
    MAX_REVIEW_RATING,
    MIN_REVIEW_RATING,
    ReplyRecord,
    ReviewEdit,
    ReviewRecord,
    ReviewStatus,
    Vote,
)

__all__ = [
    "EditOutcome",
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


@dataclass(frozen=True, slots=True)
class EditOutcome:
    """Result of ``apply_edit``.

    Attributes:
        review:          The edited record (the input itself when nothing changed).
        content_changed: True when rating, title or text differ from before.
        rating_changed:  True when the rating differs; the product rating must
                         then be recomputed.
    """

    review: ReviewRecord
    content_changed: bool
    rating_changed: bool


def check_review(review: ReviewRecord) -> ReviewRecord:
    """Return ``review`` unchanged, or raise if it breaks an invariant.

    Raises:
        InvariantBreach: If the rating is outside 1..5 or a user is in both
            the likes and the dislikes set.
    """
    problems = review.violations()
    if problems:
        msg = f"review {review.id!r} is corrupt: {'; '.join(problems)}"
        raise InvariantBreach(msg)
    return review


# ----------------------------------------------------------------------
# Votes
# ----------------------------------------------------------------------


def vote_state(review: ReviewRecord, user_id: str) -> Vote:
    """Return the current vote of ``user_id`` on ``review``."""
    check_review(review)
    if user_id in review.likes:
        return Vote.LIKED
    if user_id in review.dislikes:
        return Vote.DISLIKED
    return Vote.NONE


def _cast(
    review: ReviewRecord, user_id: str, target: Vote, now: datetime | None
) -> ReviewRecord:
    """Apply a like (target LIKED) or dislike (target DISLIKED) toggle."""
    current = vote_state(review, user_id)
    likes = review.likes - {user_id}
    dislikes = review.dislikes - {user_id}
    if current != target:
        if target == Vote.LIKED:
            likes = likes | {user_id}
        else:
            dislikes = dislikes | {user_id}
    return replace(
        review,
        likes=likes,
        dislikes=dislikes,
        updated_at=now if now is not None else review.updated_at,
    )


def like(review: ReviewRecord, user_id: str, now: datetime | None = None) -> ReviewRecord:
    """Toggle a like by ``user_id``, removing any dislike they had cast.

    Args:
        review:  Current record.
        user_id: Voting user.
        now:     New ``updated_at``; the old one is kept when None.

    Returns:
        The updated record.  ``user_id`` ends in at most one vote set.
    """
    return _cast(review, user_id, Vote.LIKED, now)


def dislike(review: ReviewRecord, user_id: str, now: datetime | None = None) -> ReviewRecord:
    """Toggle a dislike by ``user_id``, removing any like they had cast."""
    return _cast(review, user_id, Vote.DISLIKED, now)


def compute_derived(review: ReviewRecord, viewer_id: str | None = None) -> ReviewCounts:
    """Compute the counters shown with a review, from its live collections.

    Args:
        review:    Record to read.
        viewer_id: User viewing the review; drives ``is_liked``/``is_disliked``.
                   Anonymous viewers (None) see both as False.

    Raises:
        InvariantBreach: If the record is corrupt.
    """
    check_review(review)
    return ReviewCounts(
        likes_count=len(review.likes),
        dislikes_count=len(review.dislikes),
        replies_count=len(review.replies),
        is_liked=viewer_id is not None and viewer_id in review.likes,
        is_disliked=viewer_id is not None and viewer_id in review.dislikes,
    )


# ----------------------------------------------------------------------
# Replies
# ----------------------------------------------------------------------


def find_reply(review: ReviewRecord, reply_id: str) -> ReplyRecord:
    """Return the reply ``reply_id`` of ``review``.

    Raises:
        ReplyNotFound: If the thread has no such reply.
    """
    for reply in review.replies:
        if reply.id == reply_id:
            return reply
    msg = f"review {review.id!r} has no reply {reply_id!r}"
    raise ReplyNotFound(msg)


def add_reply(
    review: ReviewRecord, reply: ReplyRecord, now: datetime | None = None
) -> ReviewRecord:
    """Append ``reply`` to the thread.  The thread has no size limit.

    Raises:
        ContractViolation: If the thread already holds a reply with that id.
    """
    check_review(review)
    if any(existing.id == reply.id for existing in review.replies):
        msg = f"review {review.id!r} already has a reply {reply.id!r}"
        raise ContractViolation(msg)
    return replace(
        review,
        replies=(*review.replies, reply),
        updated_at=now if now is not None else review.updated_at,
    )


def remove_reply(
    review: ReviewRecord, reply_id: str, now: datetime | None = None
) -> ReviewRecord:
    """Remove reply ``reply_id``; the remaining replies keep their order.

    Whether the caller may delete the reply is not checked here.

    Raises:
        ReplyNotFound: If the thread has no such reply.
    """
    check_review(review)
    find_reply(review, reply_id)
    return replace(
        review,
        replies=tuple(reply for reply in review.replies if reply.id != reply_id),
        updated_at=now if now is not None else review.updated_at,
    )


# ----------------------------------------------------------------------
# Content and moderation
# ----------------------------------------------------------------------


def apply_edit(review: ReviewRecord, edit: ReviewEdit, now: datetime) -> EditOutcome:
    """Apply a content edit.

    ``is_edited`` is set if and only if the rating, title or text actually
    changes; re-submitting identical content leaves the record untouched.

    Raises:
        InvariantBreach: If the record is corrupt or the new rating is
            outside 1..5.
    """
    check_review(review)
    if edit.rating is not None and not MIN_REVIEW_RATING <= edit.rating <= MAX_REVIEW_RATING:
        msg = f"rating must be in {MIN_REVIEW_RATING}..{MAX_REVIEW_RATING}, got {edit.rating!r}"
        raise InvariantBreach(msg)

    rating = review.rating if edit.rating is None else edit.rating
    title = review.title if edit.title is None else edit.title
    text = review.text if edit.text is None else edit.text

    rating_changed = rating != review.rating
    content_changed = rating_changed or title != review.title or text != review.text
    if not content_changed:
        return EditOutcome(review=review, content_changed=False, rating_changed=False)

    edited = replace(
        review,
        rating=rating,
        title=title,
        text=text,
        is_edited=True,
        updated_at=now,
    )
    return EditOutcome(review=edited, content_changed=True, rating_changed=rating_changed)


def moderate(review: ReviewRecord, status: ReviewStatus, now: datetime) -> ReviewRecord:
    """Change the moderation status.  Never marks the review as edited."""
    check_review(review)
    status = ReviewStatus(status)
    if status == review.status:
        return review
    return replace(review, status=status, updated_at=now)


# ----------------------------------------------------------------------
# Product-level views
# ----------------------------------------------------------------------


def recompute_product_rating(
    product_id: str,
    reviews: Iterable[ReviewRecord],
    include_disabled: bool = False,
) -> RatingAggregate:
    """Recompute a product's rating from its full review list.

    Args:
        product_id:       Product whose aggregate is computed.
        reviews:          Every review of the product.
        include_disabled: Count moderated (disabled) reviews in the mean.
                          Defaults to False: hidden reviews do not move the
                          rating shown next to the product.

    Returns:
        ``RatingAggregate`` with the mean rounded half up to one decimal, or
        ``(0.0, 0)`` when no review is counted.  Calling twice with the same
        reviews returns equal aggregates.

    Raises:
        ContractViolation: If a review belongs to another product.
        InvariantBreach:   If a review is corrupt.
    """
    ratings: list[int] = []
    for review in reviews:
        if review.product_id != product_id:
            msg = (
                f"review {review.id!r} belongs to product {review.product_id!r}, "
                f"not {product_id!r}"
            )
            raise ContractViolation(msg)
        check_review(review)
        if include_disabled or review.is_active:
            ratings.append(review.rating)

    if not ratings:
        return RatingAggregate(product_id=product_id, rating=0.0, review_count=0)

    mean = float(np.mean(np.array(ratings, dtype=float)))
    return RatingAggregate(
        product_id=product_id,
        rating=round_half_up(mean, 1),
        review_count=len(ratings),
    )


def visible_reviews(
    reviews: Iterable[ReviewRecord], include_disabled: bool = False
) -> list[ReviewRecord]:
    """Return the reviews a viewer may see, newest first.

    Non-moderators see active reviews only; pass ``include_disabled=True``
    for moderators.
    """
    shown = [review for review in reviews if include_disabled or review.is_active]
    shown.sort(key=lambda review: review.created_at, reverse=True)
    return shown
