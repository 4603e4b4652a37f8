"""Collaborator Protocols: the catalog and the review store.

The engine never reads or writes storage itself.  These Protocols describe
what it needs from the surrounding application.  Implementations plug in
without inheriting from anything; any class with conformant methods passes
``isinstance`` checks.

Example::

    from catalog_compare.protocols import CatalogSource

    class MongoCatalog:
        def products_in_category(self, category: str) -> list[ProductSnapshot]:
            ...

    assert isinstance(MongoCatalog(), CatalogSource)  # structural conformance
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalog_compare.catalog.models import ProductSnapshot
    from catalog_compare.result import RatingAggregate
    from catalog_compare.reviews.models import ReviewRecord, StoredReview


@runtime_checkable
class CatalogSource(Protocol):
    """Read-only product catalog."""

    def products_in_category(self, category: str) -> Sequence[ProductSnapshot]: ...


@runtime_checkable
class ReviewStore(Protocol):
    """Review persistence with single-document atomicity.

    Implementations must guarantee that ``replace`` is atomic per review:
    it succeeds only while the stored version still equals
    ``expected_version`` and raises ``WriteConflict`` otherwise.  Products
    are versioned the same way: every insert, replace or delete of a
    product's review bumps the product version, and ``save_product_rating``
    succeeds only while that version still equals ``expected_version``.  No
    ordering is required across different reviews or products.

    - ``get`` returns None for an unknown id.
    - ``find_by_product_versioned`` returns the product's reviews together
      with the product version they were read at.
    - ``insert`` stores a new review at version 1 and returns that version.
      It raises ``DuplicateReview`` when the author already has a review of
      the product; the check and the write are one atomic step.
    - ``replace`` returns the new version.
    - ``delete`` raises ``ReviewNotFound`` for an unknown id.
    - ``save_product_rating`` persists the aggregate onto the product and
      raises ``ProductNotFound`` for an unknown product.
    """

    def has_product(self, product_id: str) -> bool: ...

    def get(self, review_id: str) -> StoredReview | None: ...

    def find_by_product(self, product_id: str) -> Sequence[ReviewRecord]: ...

    def find_by_product_versioned(
        self, product_id: str
    ) -> tuple[Sequence[ReviewRecord], int]: ...

    def find_by_author(self, product_id: str, user_id: str) -> ReviewRecord | None: ...

    def insert(self, record: ReviewRecord) -> int: ...

    def replace(self, record: ReviewRecord, expected_version: int) -> int: ...

    def delete(self, review_id: str) -> None: ...

    def save_product_rating(self, aggregate: RatingAggregate, expected_version: int) -> None: ...
