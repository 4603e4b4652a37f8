"""Tests for SelectionState.

Covers:
- Phases EMPTY -> PARTIAL -> FULL and readiness
- add(): SelectionFull, DuplicateSelection, category mismatch, category adoption
- remove(): known and unknown ids
- change_category(): clearing and pinned-product retention
- Values are immutable; transitions return new states
- similarity() / best_choice() convenience calls
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import FrozenInstanceError

import pytest

from catalog_compare import (
    ContractViolation,
    DuplicateSelection,
    ProductSnapshot,
    SelectionFull,
    SelectionPhase,
    SelectionState,
)

Factory = Callable[..., ProductSnapshot]


@pytest.fixture
def phones(make_product: Factory) -> list[ProductSnapshot]:
    return [make_product(f"ph{i}", price=100.0 + i, category="phones") for i in range(4)]


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


class TestPhases:
    def test_empty(self) -> None:
        state = SelectionState()
        assert state.phase == SelectionPhase.EMPTY
        assert state.size == 0
        assert not state.ready
        assert state.category is None

    def test_partial_then_full(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState().add(phones[0])
        assert state.phase == SelectionPhase.PARTIAL
        assert not state.ready
        state = state.add(phones[1])
        assert state.phase == SelectionPhase.PARTIAL
        assert state.ready
        state = state.add(phones[2])
        assert state.phase == SelectionPhase.FULL
        assert state.ids == ("ph0", "ph1", "ph2")

    def test_too_many_products_at_construction(self, phones: list[ProductSnapshot]) -> None:
        with pytest.raises(ValueError):
            SelectionState(products=tuple(phones))


# ---------------------------------------------------------------------------
# add / remove
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add_returns_new_state(self, phones: list[ProductSnapshot]) -> None:
        empty = SelectionState()
        one = empty.add(phones[0])
        assert empty.size == 0
        assert one.size == 1

    def test_full_rejects(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState(products=tuple(phones[:3]), category="phones")
        with pytest.raises(SelectionFull):
            state.add(phones[3])

    def test_duplicate_rejected(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState().add(phones[0])
        with pytest.raises(DuplicateSelection):
            state.add(phones[0])

    def test_other_category_rejected(
        self, phones: list[ProductSnapshot], make_product: Factory
    ) -> None:
        state = SelectionState().add(phones[0])
        with pytest.raises(ContractViolation, match="category"):
            state.add(make_product("tv1", category="tv"))

    def test_untagged_selection_adopts_category(self, phones: list[ProductSnapshot]) -> None:
        assert SelectionState().add(phones[0]).category == "phones"

    def test_untagged_product_keeps_selection_untagged(self, make_product: Factory) -> None:
        assert SelectionState().add(make_product("x")).category is None

    def test_is_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            SelectionState().category = "x"  # type: ignore[misc]


class TestRemove:
    def test_remove_known(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState().add(phones[0]).add(phones[1]).remove("ph0")
        assert state.ids == ("ph1",)
        assert state.category == "phones"

    def test_remove_unknown_is_noop(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState().add(phones[0])
        assert state.remove("nope") is state

    def test_remove_from_full_reopens(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState(products=tuple(phones[:3]), category="phones").remove("ph1")
        assert state.phase == SelectionPhase.PARTIAL
        assert state.add(phones[3]).ids == ("ph0", "ph2", "ph3")


# ---------------------------------------------------------------------------
# Deep links and category changes
# ---------------------------------------------------------------------------


class TestCategoryChange:
    def test_pinned_constructor(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState.pinned(phones[0])
        assert state.ids == ("ph0",)
        assert state.pinned_id == "ph0"
        assert state.category == "phones"

    def test_change_clears_selection(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState().add(phones[0]).add(phones[1]).change_category("tv")
        assert state.phase == SelectionPhase.EMPTY
        assert state.category == "tv"

    def test_pinned_product_survives_matching_category(
        self, phones: list[ProductSnapshot]
    ) -> None:
        state = SelectionState.pinned(phones[0]).add(phones[1]).change_category("phones")
        assert state.ids == ("ph0",)
        assert state.phase == SelectionPhase.PARTIAL

    def test_pinned_product_dropped_for_other_category(
        self, phones: list[ProductSnapshot]
    ) -> None:
        state = SelectionState.pinned(phones[0]).change_category("tv")
        assert state.size == 0

    def test_removed_pinned_product_not_restored(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState.pinned(phones[0]).remove("ph0").change_category("phones")
        assert state.size == 0

    def test_new_category_accepts_its_products(
        self, phones: list[ProductSnapshot], make_product: Factory
    ) -> None:
        state = SelectionState().add(phones[0]).change_category("tv")
        assert state.add(make_product("tv1", category="tv")).ids == ("tv1",)


# ---------------------------------------------------------------------------
# Computations
# ---------------------------------------------------------------------------


class TestComputations:
    def test_similarity_and_best_choice(
        self, scenario_a: tuple[ProductSnapshot, ProductSnapshot]
    ) -> None:
        state = SelectionState().add(scenario_a[0]).add(scenario_a[1])
        assert state.similarity().score == 80
        assert state.best_choice().product.id == "p1"

    def test_not_ready_raises(self, phones: list[ProductSnapshot]) -> None:
        state = SelectionState().add(phones[0])
        with pytest.raises(ContractViolation):
            state.similarity()
        with pytest.raises(ContractViolation):
            state.best_choice()
