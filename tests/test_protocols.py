"""Tests for the collaborator Protocols.

Both Protocols are runtime-checkable: any object with conformant methods
passes isinstance without inheriting from them.
"""

from __future__ import annotations

from collections.abc import Sequence

from catalog_compare import InMemoryReviewStore, ProductSnapshot, SelectionState
from catalog_compare.protocols import CatalogSource, ReviewStore


class DictCatalog:
    """Catalog backed by a dict of category -> products."""

    def __init__(self, products: Sequence[ProductSnapshot]) -> None:
        self._by_category: dict[str, list[ProductSnapshot]] = {}
        for product in products:
            self._by_category.setdefault(product.category, []).append(product)

    def products_in_category(self, category: str) -> Sequence[ProductSnapshot]:
        return list(self._by_category.get(category, []))


class TestCatalogSource:
    def test_structural_conformance(self) -> None:
        assert isinstance(DictCatalog([]), CatalogSource)

    def test_non_conforming_object(self) -> None:
        assert not isinstance(object(), CatalogSource)

    def test_feeds_a_selection(self) -> None:
        catalog = DictCatalog(
            [
                ProductSnapshot(id="a", price=10.0, category="tv"),
                ProductSnapshot(id="b", price=20.0, category="tv"),
                ProductSnapshot(id="c", price=30.0, category="audio"),
            ]
        )
        state = SelectionState().change_category("tv")
        for product in catalog.products_in_category("tv"):
            state = state.add(product)
        assert state.ids == ("a", "b")
        assert state.best_choice().product.id == "a"


class TestReviewStore:
    def test_in_memory_store_conforms(self) -> None:
        assert isinstance(InMemoryReviewStore(), ReviewStore)

    def test_catalog_is_not_a_review_store(self) -> None:
        assert not isinstance(DictCatalog([]), ReviewStore)
