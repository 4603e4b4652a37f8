"""Exception hierarchy for catalog-compare.

Every error raised on purpose by the library derives from
``CatalogCompareError``.  Contract and invariant errors also derive from
``ValueError`` and lookup errors from ``LookupError`` so callers that only
know the builtin taxonomy still catch them.

- ContractViolation: the caller passed an out-of-range selection (size 0, 1
  or above the maximum), duplicate products, or a mixed-category selection.
- InvariantBreach: a record violates a data invariant (a user in both the
  likes and dislikes sets, a rating outside 1..5).
- WriteConflict: an optimistic write lost a race against another writer.
"""

from __future__ import annotations

__all__ = [
    "CatalogCompareError",
    "ContractViolation",
    "DuplicateReview",
    "DuplicateSelection",
    "InvariantBreach",
    "PermissionDenied",
    "ProductNotFound",
    "ReplyNotFound",
    "ReviewNotFound",
    "SelectionFull",
    "WriteConflict",
]


class CatalogCompareError(Exception):
    """Base class for all catalog-compare errors."""


class ContractViolation(CatalogCompareError, ValueError):
    """A computation was invoked with inputs outside its contract."""


class SelectionFull(ContractViolation):
    """A product was added to a selection that already holds the maximum."""


class DuplicateSelection(ContractViolation):
    """A product was added to a selection that already contains it."""


class InvariantBreach(CatalogCompareError, ValueError):
    """A record was observed in a state its invariants forbid."""


class ReviewNotFound(CatalogCompareError, LookupError):
    """No review exists with the requested id."""


class ReplyNotFound(CatalogCompareError, LookupError):
    """The review has no reply with the requested id."""


class ProductNotFound(CatalogCompareError, LookupError):
    """No product exists with the requested id."""


class PermissionDenied(CatalogCompareError, PermissionError):
    """The acting user may not perform the requested mutation."""


class DuplicateReview(CatalogCompareError):
    """The user has already reviewed this product."""


class WriteConflict(CatalogCompareError):
    """A versioned write was rejected because the document changed meanwhile.

    Attributes:
        document_id: Id of the document whose write was rejected.
        expected_version: Version the writer read before mutating.
        actual_version: Version currently held by the store.
    """

    def __init__(
        self, document_id: str, expected_version: int, actual_version: int
    ) -> None:
        super().__init__(
            f"write conflict on {document_id!r}: expected version "
            f"{expected_version}, found {actual_version}"
        )
        self.document_id = document_id
        self.expected_version = expected_version
        self.actual_version = actual_version
