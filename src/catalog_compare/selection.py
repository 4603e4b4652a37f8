"""SelectionState: the ordered set of products a shopper is comparing.

A selection is a frozen value.  Every operation returns a new state and
leaves the old one untouched, so the current selection is always whatever
the caller last stored.

Phases::

    EMPTY --add--> PARTIAL --add--> PARTIAL(2, ready) --add--> FULL(3)
      ^               |                                          |
      +----remove-----+------------------remove------------------+

Example::

    state = SelectionState().add(phone_a).add(phone_b)
    state.phase                      # SelectionPhase.PARTIAL
    state.ready                      # True
    state.similarity().score         # 80
    state.best_choice().reasons      # ("Best price value", ...)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum, auto

from catalog_compare.catalog.models import ProductSnapshot
from catalog_compare.errors import ContractViolation, DuplicateSelection, SelectionFull
from catalog_compare.result import RankedCandidate, SimilarityResult
from catalog_compare.scoring.config import MAX_SELECTION
from catalog_compare.scoring.ranker import BestChoiceRanker
from catalog_compare.scoring.similarity import SimilarityScorer

__all__ = ["SelectionPhase", "SelectionState"]

logger = logging.getLogger(__name__)


class SelectionPhase(StrEnum):
    """Size class of a selection.

    - EMPTY:   No product selected.
    - PARTIAL: One or two products; comparable from two on.
    - FULL:    The maximum of three products; further adds are rejected.
    """

    EMPTY = auto()
    PARTIAL = auto()
    FULL = auto()


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Up to three distinct products of one category, in selection order.

    Attributes:
        products:  Selected products in the order they were added.
        category:  Category the selection is tied to, or None while untagged.
        pinned_id: Id of the product the comparison was opened for
                   (deep link), kept across category changes when possible.
    """

    products: tuple[ProductSnapshot, ...] = field(default_factory=tuple)
    category: str | None = None
    pinned_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "products", tuple(self.products))
        if len(self.products) > MAX_SELECTION:
            msg = f"a selection holds at most {MAX_SELECTION} products, got {len(self.products)}"
            raise ValueError(msg)

    @classmethod
    def pinned(cls, product: ProductSnapshot) -> SelectionState:
        """Start a selection from a deep-linked product."""
        return cls(
            products=(product,),
            category=product.category or None,
            pinned_id=product.id,
        )

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.products)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(product.id for product in self.products)

    @property
    def phase(self) -> SelectionPhase:
        if not self.products:
            return SelectionPhase.EMPTY
        if len(self.products) >= MAX_SELECTION:
            return SelectionPhase.FULL
        return SelectionPhase.PARTIAL

    @property
    def ready(self) -> bool:
        """True once at least two products can be compared."""
        return len(self.products) >= 2

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def add(self, product: ProductSnapshot) -> SelectionState:
        """Return a state with ``product`` appended.

        Raises:
            SelectionFull:      If three products are already selected.
            DuplicateSelection: If ``product`` is already selected.
            ContractViolation:  If ``product`` belongs to another category.
        """
        if len(self.products) >= MAX_SELECTION:
            msg = f"You can compare up to {MAX_SELECTION} products at once"
            raise SelectionFull(msg)
        if product.id in self.ids:
            msg = f"product {product.id!r} is already selected"
            raise DuplicateSelection(msg)
        if self.category is not None and product.category and product.category != self.category:
            msg = (
                f"product {product.id!r} is in category {product.category!r}, "
                f"selection is in {self.category!r}"
            )
            raise ContractViolation(msg)

        category = self.category if self.category is not None else (product.category or None)
        new = replace(self, products=(*self.products, product), category=category)
        logger.debug("selection %s -> %s (added %r)", self.phase, new.phase, product.id)
        return new

    def remove(self, product_id: str) -> SelectionState:
        """Return a state without ``product_id``.  Unknown ids are ignored."""
        if product_id not in self.ids:
            return self
        new = replace(
            self,
            products=tuple(product for product in self.products if product.id != product_id),
        )
        logger.debug("selection %s -> %s (removed %r)", self.phase, new.phase, product_id)
        return new

    def change_category(self, category: str) -> SelectionState:
        """Return a state tied to ``category``.

        The selection is cleared, except that the pinned product survives
        when it is selected and belongs to ``category``.
        """
        kept = tuple(
            product
            for product in self.products
            if product.id == self.pinned_id and product.category == category
        )
        logger.debug(
            "selection category %r -> %r, kept %d product(s)",
            self.category,
            category,
            len(kept),
        )
        return replace(self, products=kept, category=category)

    # ------------------------------------------------------------------
    # Computations
    # ------------------------------------------------------------------

    def similarity(self, scorer: SimilarityScorer | None = None) -> SimilarityResult:
        """Score the current selection.

        Raises:
            ContractViolation: If fewer than two products are selected.
        """
        scorer = scorer if scorer is not None else SimilarityScorer()
        return scorer.selection_similarity(self.products)

    def best_choice(self, ranker: BestChoiceRanker | None = None) -> RankedCandidate:
        """Rank the current selection and return the winner.

        Raises:
            ContractViolation: If fewer than two products are selected.
        """
        ranker = ranker if ranker is not None else BestChoiceRanker()
        return ranker.rank(self.products)
