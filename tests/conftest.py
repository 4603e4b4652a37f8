"""Shared fixtures: product and review factories.

Factories are exposed as fixtures returning callables so every test module,
whatever its directory, builds records the same way.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from catalog_compare import ProductSnapshot, ReviewRecord, Specification

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def _specs(specs: Mapping[str, str] | Sequence[tuple[str, str]]) -> tuple[Specification, ...]:
    items = specs.items() if isinstance(specs, Mapping) else specs
    return tuple(Specification(name, value) for name, value in items)


@pytest.fixture
def make_product() -> Callable[..., ProductSnapshot]:
    """Return ``_make(id, price=100.0, specs=None, **fields) -> ProductSnapshot``.

    ``specs`` is a mapping (or list of pairs, for repeated names) of
    specification name to value.
    """

    def _make(
        product_id: str,
        price: float = 100.0,
        specs: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
        **fields: Any,
    ) -> ProductSnapshot:
        return ProductSnapshot(
            id=product_id,
            price=price,
            specifications=_specs(specs or {}),
            **fields,
        )

    return _make


@pytest.fixture
def make_review() -> Callable[..., ReviewRecord]:
    """Return ``_make(id, rating=5, **fields) -> ReviewRecord``.

    Defaults: product ``p1``, author ``u-<id>``, created ``T0`` plus
    ``age_minutes`` (default 0).
    """

    def _make(review_id: str, rating: int = 5, age_minutes: int = 0, **fields: Any) -> ReviewRecord:
        created = T0 + timedelta(minutes=age_minutes)
        defaults: dict[str, Any] = {
            "product_id": "p1",
            "user_id": f"u-{review_id}",
            "title": "Title",
            "text": "Body",
            "created_at": created,
            "updated_at": created,
        }
        defaults.update(fields)
        return ReviewRecord(id=review_id, rating=rating, **defaults)

    return _make


@pytest.fixture
def scenario_a(make_product: Callable[..., ProductSnapshot]) -> tuple[ProductSnapshot, ProductSnapshot]:
    """Two phones sharing four of five specification values."""
    shared = {"RAM": "8GB", "Storage": "128GB", "Screen": "6.1in", "OS": "Android"}
    p1 = make_product(
        "p1",
        price=100.0,
        rating=4.5,
        review_count=10,
        specs={**shared, "Color": "Black"},
        features=("NFC", "5G", "Wireless charging"),
        category="phones",
    )
    p2 = make_product(
        "p2",
        price=150.0,
        rating=4.0,
        review_count=50,
        specs={**shared, "Color": "White"},
        features=("NFC", "5G", "Fast charging"),
        category="phones",
    )
    return p1, p2
