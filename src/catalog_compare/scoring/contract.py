"""Selection contract shared by the similarity scorer and the ranker."""

from __future__ import annotations

from collections.abc import Sequence

from catalog_compare.catalog.models import ProductSnapshot
from catalog_compare.errors import ContractViolation


def validate_selection(
    selection: Sequence[ProductSnapshot],
    max_size: int,
    min_size: int = 2,
) -> tuple[ProductSnapshot, ...]:
    """Check that ``selection`` can be scored and return it as a tuple.

    A valid selection holds between ``min_size`` and ``max_size`` products,
    no product twice, and products of one category.  Products with an empty
    category are treated as untagged and do not take part in the category
    check.

    Raises:
        ContractViolation: On any violation.  Never clamps or guesses.
    """
    products = tuple(selection)
    if not min_size <= len(products) <= max_size:
        msg = (
            f"selection must hold {min_size} to {max_size} products, "
            f"got {len(products)}"
        )
        raise ContractViolation(msg)

    ids = [product.id for product in products]
    if len(set(ids)) != len(ids):
        msg = f"selection contains the same product twice: {ids}"
        raise ContractViolation(msg)

    categories = {product.category for product in products if product.category}
    if len(categories) > 1:
        msg = f"selection mixes categories: {sorted(categories)}"
        raise ContractViolation(msg)

    return products
