"""pytest plugin for catalog-compare.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
Once the package is installed (even in editable mode) the fixtures below are
available in every test session without conftest.py changes.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from catalog_compare import (
    ProductSnapshot,
    RankingConfig,
    SimilarityConfig,
    best_choice,
    selection_similarity,
)


@pytest.fixture(scope="session")
def assert_similarity() -> Any:
    """Fixture that returns a callable selection-similarity asserter.

    Session-scoped because the returned callable is stateless (it delegates to
    ``selection_similarity()``, which builds a fresh scorer per call).

    Usage in tests::

        def test_phones_alike(assert_similarity):
            assert_similarity([phone_a, phone_b], minimum=80)

        def test_exact(assert_similarity):
            assert_similarity([phone_a, phone_b], expected=80)

    Returns:
        A callable ``_assert(selection, minimum=0, expected=None, config=None)``
        that raises ``AssertionError`` when the score is below ``minimum`` or
        differs from ``expected``.
    """

    def _assert(
        selection: Sequence[ProductSnapshot],
        minimum: int = 0,
        expected: int | None = None,
        config: SimilarityConfig | None = None,
    ) -> None:
        result = selection_similarity(selection, config=config)
        if result.score < minimum or (expected is not None and result.score != expected):
            raise AssertionError(
                f"selection similarity mismatch: "
                f"similarity={result.score} minimum={minimum} expected={expected}\n"
                f"  products: {[product.id for product in selection]}\n"
                f"  pairwise: {[(p.left_id, p.right_id, p.score) for p in result.pairwise]}"
            )

    return _assert


@pytest.fixture(scope="session")
def assert_best_choice() -> Any:
    """Fixture that returns a callable best-choice asserter.

    Usage in tests::

        def test_cheapest_wins(assert_best_choice):
            assert_best_choice([phone_a, phone_b], "a", reasons=["Best price value"])

    Returns:
        A callable ``_assert(selection, expected_id, reasons=None, config=None)``
        that raises ``AssertionError`` when another product wins or, if
        ``reasons`` is given, when the winner's reasons differ.
    """

    def _assert(
        selection: Sequence[ProductSnapshot],
        expected_id: str,
        reasons: Sequence[str] | None = None,
        config: RankingConfig | None = None,
    ) -> None:
        winner = best_choice(selection, config=config)
        if winner.product.id != expected_id or (
            reasons is not None and list(winner.reasons) != list(reasons)
        ):
            raise AssertionError(
                f"unexpected best choice: "
                f"winner={winner.product.id!r} expected={expected_id!r}\n"
                f"  score:   {winner.score:.2f}\n"
                f"  reasons: {list(winner.reasons)} expected: "
                f"{None if reasons is None else list(reasons)}"
            )

    return _assert
