"""Specification and ProductSnapshot: the product records the engine reads.

Both are frozen, slotted dataclasses.  ``ProductSnapshot`` validates its
numeric fields on construction and freezes its sequences into tuples, so a
snapshot cannot change while a comparison or ranking is computed over it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

__all__ = ["MAX_RATING", "ProductSnapshot", "Specification"]

MAX_RATING = 5.0


@dataclass(frozen=True, slots=True)
class Specification:
    """A named attribute of a product, e.g. ``Specification("RAM", "16GB")``.

    Attributes:
        name:  Attribute name.  Compared case-sensitively.
        value: Attribute value.  Compared case-sensitively.
    """

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class ProductSnapshot:
    """The minimal view of a catalog product needed for comparison.

    Attributes:
        id:             Catalog identifier.
        price:          Price, >= 0.
        rating:         Aggregate rating in [0, 5].  0 means "not rated yet".
        review_count:   Number of reviews behind ``rating``, >= 0.
        specifications: Ordered specification entries.  Names may repeat.
        features:       Free-text feature bullet points.
        category:       Category slug.  Empty when the source did not say.
        name:           Display name (used for sorting and messages only).
        brand:          Brand name, matched by ``search_products``.
    """

    id: str
    price: float
    rating: float = 0.0
    review_count: int = 0
    specifications: tuple[Specification, ...] = field(default_factory=tuple)
    features: tuple[str, ...] = field(default_factory=tuple)
    category: str = ""
    name: str = ""
    brand: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            msg = "product id must be a non-empty string"
            raise ValueError(msg)
        if not math.isfinite(self.price) or self.price < 0:
            msg = f"price must be a finite number >= 0, got {self.price!r}"
            raise ValueError(msg)
        if not 0.0 <= self.rating <= MAX_RATING:
            msg = f"rating must be in [0, {MAX_RATING:g}], got {self.rating!r}"
            raise ValueError(msg)
        if self.review_count < 0:
            msg = f"review_count must be >= 0, got {self.review_count!r}"
            raise ValueError(msg)
        # Lists handed in by callers are frozen so the snapshot stays immutable.
        object.__setattr__(self, "specifications", tuple(self.specifications))
        object.__setattr__(self, "features", tuple(self.features))

    @property
    def spec_names(self) -> list[str]:
        """Specification names in entry order, duplicates included."""
        return [spec.name for spec in self.specifications]

    def spec_value(self, name: str) -> str | None:
        """Return the value of the first specification called ``name``."""
        for spec in self.specifications:
            if spec.name == name:
                return spec.value
        return None

    def spec_values(self, name: str) -> list[str]:
        """Return every value recorded under ``name``, in entry order."""
        return [spec.value for spec in self.specifications if spec.name == name]

