"""Deterministic product and review generators for performance benchmarks.

All generators produce fixed, reproducible records.  No random values.
Three tiers of specification count per product: 10, 100 and 500.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from catalog_compare import ProductSnapshot, ReviewRecord, Specification

_T0 = datetime(2024, 1, 1, tzinfo=UTC)


def generate_product(product_id: str, num_specs: int, variant: int = 0) -> ProductSnapshot:
    """Product with ``num_specs`` specifications; every 4th value depends on ``variant``."""
    specs = tuple(
        Specification(f"spec_{i}", f"value_{i}_{variant}" if i % 4 == 0 else f"value_{i}")
        for i in range(num_specs)
    )
    return ProductSnapshot(
        id=product_id,
        price=100.0 + 25 * variant,
        rating=4.0 + 0.25 * variant,
        review_count=10 * (variant + 1),
        specifications=specs,
        features=tuple(f"feature_{i}" for i in range(variant + 2)),
        category="bench",
    )


def generate_selection(num_specs: int) -> list[ProductSnapshot]:
    return [generate_product(f"p{v}", num_specs, variant=v) for v in range(3)]


def generate_reviews(count: int) -> list[ReviewRecord]:
    return [
        ReviewRecord(
            id=f"r{i}",
            product_id="p0",
            user_id=f"u{i}",
            rating=1 + i % 5,
            title="t",
            text="x",
            created_at=_T0 + timedelta(minutes=i),
            updated_at=_T0 + timedelta(minutes=i),
            likes=frozenset(f"u{j}" for j in range(i % 7)),
        )
        for i in range(count)
    ]


@pytest.fixture(scope="session")
def selection_10spec() -> list[ProductSnapshot]:
    return generate_selection(10)


@pytest.fixture(scope="session")
def selection_100spec() -> list[ProductSnapshot]:
    return generate_selection(100)


@pytest.fixture(scope="session")
def selection_500spec() -> list[ProductSnapshot]:
    return generate_selection(500)


@pytest.fixture(scope="session")
def category_500() -> list[ProductSnapshot]:
    return [generate_product(f"c{i}", 20, variant=i % 5) for i in range(500)]


@pytest.fixture(scope="session")
def reviews_1000() -> list[ReviewRecord]:
    return generate_reviews(1000)
