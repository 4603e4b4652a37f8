"""SpecificationIndex: specification-name views over a set of products.

Provides the three views the comparison and category pages are built on:

- ``spec_names``: union of names in first-seen order (the similarity
  scorer's denominator and the comparison table's rows).
- ``top_frequent_specs``: names ranked by how many entries carry them.
- ``facets``: the filter sidebar, names ranked by number of distinct values.

The module also holds the list operations the pages apply to a product
list: ``search_products`` (the comparison page's search box),
``filter_products`` (active specification filters) and ``sort_products``.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from enum import StrEnum, auto

from catalog_compare.catalog.models import ProductSnapshot
from catalog_compare.result import SpecFacet, SpecRow

__all__ = [
    "FacetOrder",
    "SortKey",
    "SpecificationIndex",
    "filter_products",
    "search_products",
    "sort_products",
]

MIN_SEARCH_LENGTH = 2


class FacetOrder(StrEnum):
    """How ``SpecificationIndex.facets`` ranks specification names.

    - FREQUENCY: by number of entries carrying the name.
    - OPTIONS:   by number of distinct values (the category filter sidebar).
    """

    FREQUENCY = auto()
    OPTIONS = auto()


class SortKey(StrEnum):
    """Sort orders offered on a category page."""

    FEATURED = auto()
    RATING = auto()
    PRICE = auto()
    NAME = auto()


class SpecificationIndex:
    """Index of specification names and values across a product list.

    The index is built once from ``products`` and never mutated; build a new
    one when the product list changes.

    Example::

        index = SpecificationIndex(products)
        index.spec_names()             # ["RAM", "Storage", "Color"]
        index.top_frequent_specs(2)    # [SpecFacet("RAM", ("8GB", "16GB"), 3), ...]
    """

    def __init__(self, products: Sequence[ProductSnapshot]) -> None:
        self._products: tuple[ProductSnapshot, ...] = tuple(products)
        self._frequency: Counter[str] = Counter()
        # dict preserves first-seen order of names
        self._values: dict[str, set[str]] = {}
        for product in self._products:
            for spec in product.specifications:
                self._frequency[spec.name] += 1
                self._values.setdefault(spec.name, set()).add(spec.value)

    @property
    def products(self) -> tuple[ProductSnapshot, ...]:
        return self._products

    def spec_names(self) -> list[str]:
        """Return every specification name, in first-seen order."""
        return list(self._values)

    def values_for(self, name: str) -> tuple[str, ...]:
        """Return the sorted distinct values observed for ``name``."""
        return tuple(sorted(self._values.get(name, ())))

    def top_frequent_specs(self, n: int) -> list[SpecFacet]:
        """Return the ``n`` most frequent specification names with their values.

        Frequency counts specification entries, so a name listed by every
        product of a four-product list has frequency 4.  Ties keep first-seen
        order.

        Raises:
            ValueError: If ``n`` is negative.
        """
        return self.facets(limit=n, order=FacetOrder.FREQUENCY)

    def facets(
        self, limit: int | None = 5, order: FacetOrder = FacetOrder.OPTIONS
    ) -> list[SpecFacet]:
        """Return ranked specification facets.

        Args:
            limit: Maximum number of facets; None returns all of them.
            order: Ranking key (see ``FacetOrder``).  Ties keep first-seen order.

        Raises:
            ValueError: If ``limit`` is negative.
        """
        if limit is not None and limit < 0:
            msg = f"limit must be >= 0, got {limit}"
            raise ValueError(msg)

        facets = [
            SpecFacet(name=name, values=self.values_for(name), frequency=self._frequency[name])
            for name in self._values
        ]
        if order == FacetOrder.FREQUENCY:
            facets.sort(key=lambda facet: facet.frequency, reverse=True)
        else:
            facets.sort(key=lambda facet: len(facet.values), reverse=True)
        # list.sort is stable; reverse=True keeps equal keys in input order
        return facets if limit is None else facets[:limit]

    def comparison_table(self) -> list[SpecRow]:
        """Return one row per specification name with every product's value.

        Products listing a name several times contribute their first value.
        """
        return [
            SpecRow(
                name=name,
                values=tuple(product.spec_value(name) for product in self._products),
            )
            for name in self._values
        ]


def filter_products(
    products: Iterable[ProductSnapshot],
    active: Mapping[str, Iterable[str]],
) -> list[ProductSnapshot]:
    """Keep the products that satisfy every active specification filter.

    A filter ``name -> options`` with no options is inactive.  An active
    filter passes when the product's value for ``name`` contains at least one
    of the options as a substring; a product lacking ``name`` fails it.

    Args:
        products: Products to filter, in display order.
        active:   Selected options per specification name.

    Returns:
        Matching products, in input order.
    """
    filters = {name: tuple(options) for name, options in active.items()}
    filters = {name: options for name, options in filters.items() if options}

    def _passes(product: ProductSnapshot) -> bool:
        for name, options in filters.items():
            value = product.spec_value(name)
            if value is None or not any(option in value for option in options):
                return False
        return True

    return [product for product in products if _passes(product)]


def search_products(
    products: Iterable[ProductSnapshot], term: str, category: str | None
) -> list[ProductSnapshot]:
    """Return the products of ``category`` whose name or brand contains ``term``.

    Matching is a case-insensitive substring test.  Nothing is returned
    until ``term`` has at least ``MIN_SEARCH_LENGTH`` characters, or while no
    category is chosen.

    Example::

        search_products(catalog, "gal", "phones")   # Galaxy S24, Galaxy A55
        search_products(catalog, "g", "phones")     # []
    """
    if len(term) < MIN_SEARCH_LENGTH or not category:
        return []
    needle = term.lower()
    return [
        product
        for product in products
        if product.category == category
        and (needle in product.name.lower() or needle in product.brand.lower())
    ]


def sort_products(
    products: Iterable[ProductSnapshot], key: SortKey = SortKey.FEATURED
) -> list[ProductSnapshot]:
    """Return ``products`` in the requested display order.

    FEATURED keeps input order, RATING is highest first, PRICE is lowest
    first and NAME is case-insensitive A to Z.  All orders are stable.
    """
    items = list(products)
    if key == SortKey.RATING:
        items.sort(key=lambda product: product.rating, reverse=True)
    elif key == SortKey.PRICE:
        items.sort(key=lambda product: product.price)
    elif key == SortKey.NAME:
        items.sort(key=lambda product: product.name.casefold())
    return items
