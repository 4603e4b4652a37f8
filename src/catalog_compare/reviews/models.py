"""Review records: ReviewRecord, ReplyRecord and the values that act on them.

``ReviewRecord`` is a frozen dataclass.  Mutations never happen in place;
the aggregate functions return a new record, so a caller never observes a
half-applied vote or reply.

Construction normalizes collection types (likes/dislikes become
frozensets, replies a tuple, status a ``ReviewStatus``) and does not
reject invariant breaches, so records loaded from a store stay loadable
for inspection and repair.  ``violations()`` lists what is wrong, and
every aggregate operation refuses a record that has violations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum, auto

__all__ = [
    "MAX_REVIEW_RATING",
    "MIN_REVIEW_RATING",
    "Actor",
    "ReplyRecord",
    "ReviewEdit",
    "ReviewRecord",
    "ReviewStatus",
    "StoredReview",
    "Vote",
]

MIN_REVIEW_RATING = 1
MAX_REVIEW_RATING = 5


class ReviewStatus(StrEnum):
    """Moderation status of a review.

    - ACTIVE:   Visible to everyone.
    - DISABLED: Hidden by a moderator; visible to moderators only.
    """

    ACTIVE = auto()
    DISABLED = auto()


class Vote(StrEnum):
    """A user's vote on one review.  Exactly one state at any time."""

    NONE = auto()
    LIKED = auto()
    DISLIKED = auto()


@dataclass(frozen=True, slots=True)
class ReplyRecord:
    """A reply in a review's thread.  Immutable; can only be deleted."""

    id: str
    user_id: str
    user_name: str
    text: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class ReviewRecord:
    """A product review with its votes and reply thread.

    Attributes:
        id:         Review identifier.
        product_id: Reviewed product.
        user_id:    Author.
        rating:     Star rating, 1..5.
        title:      Review headline.
        text:       Review body.
        likes:      Ids of users who liked the review.
        dislikes:   Ids of users who disliked the review.  Disjoint from likes.
        replies:    Reply thread in insertion order.
        is_edited:  True once the author changed rating, title or text.
        status:     Moderation status.
        created_at: Creation time.
        updated_at: Time of the last content, vote, reply or status change.
        user_name:  Author display name.
    """

    id: str
    product_id: str
    user_id: str
    rating: int
    title: str
    text: str
    created_at: datetime
    updated_at: datetime
    likes: frozenset[str] = field(default_factory=frozenset)
    dislikes: frozenset[str] = field(default_factory=frozenset)
    replies: tuple[ReplyRecord, ...] = field(default_factory=tuple)
    is_edited: bool = False
    status: ReviewStatus = ReviewStatus.ACTIVE
    user_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "likes", frozenset(self.likes))
        object.__setattr__(self, "dislikes", frozenset(self.dislikes))
        object.__setattr__(self, "replies", tuple(self.replies))
        object.__setattr__(self, "status", ReviewStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status == ReviewStatus.ACTIVE

    def violations(self) -> list[str]:
        """Describe every invariant this record breaks; empty when sound."""
        problems: list[str] = []
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            problems.append(f"rating {self.rating!r} is not a whole number of stars")
        elif not MIN_REVIEW_RATING <= self.rating <= MAX_REVIEW_RATING:
            problems.append(
                f"rating {self.rating!r} outside "
                f"{MIN_REVIEW_RATING}..{MAX_REVIEW_RATING}"
            )
        both = self.likes & self.dislikes
        if both:
            problems.append(f"users both like and dislike: {sorted(both)}")
        return problems


@dataclass(frozen=True, slots=True)
class ReviewEdit:
    """A content edit requested by an author (or a moderator on their behalf).

    Fields left as None are not part of the edit.
    """

    rating: int | None = None
    title: str | None = None
    text: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.rating is None and self.title is None and self.text is None


@dataclass(frozen=True, slots=True)
class Actor:
    """The user on whose behalf a review mutation runs."""

    user_id: str
    name: str = ""
    is_moderator: bool = False


@dataclass(frozen=True, slots=True)
class StoredReview:
    """A review as held by a store, with its optimistic-concurrency version."""

    record: ReviewRecord
    version: int
