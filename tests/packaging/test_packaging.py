"""Packaging correctness verification for catalog-compare.

Tests validate:
- Base install imports cleanly and the public functions work
- py.typed marker and every source module are present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install exposes a working public API."""

    def test_import_catalog_compare(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import catalog_compare

        assert hasattr(catalog_compare, "selection_similarity")
        assert hasattr(catalog_compare, "best_choice")
        assert hasattr(catalog_compare, "ReviewService")

    def test_pairwise_basic(self):  # type: ignore[no-untyped-def]
        """pairwise_similarity() works on two spec-less products."""
        from catalog_compare import ProductSnapshot, pairwise_similarity

        a = ProductSnapshot(id="a", price=1.0)
        b = ProductSnapshot(id="b", price=2.0)
        assert pairwise_similarity(a, b) == 100

    def test_reviews_import(self):  # type: ignore[no-untyped-def]
        """reviews package imports with its in-memory store available."""
        from catalog_compare.reviews import InMemoryReviewStore, ReviewService

        service = ReviewService(InMemoryReviewStore(product_ids=["p"]))
        assert service.product_rating("p").review_count == 0


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            py_typed_files = [n for n in names if n.endswith("py.typed")]
            assert py_typed_files, f"py.typed not found in wheel. Contents: {names}"

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """__pycache__ directories must not be in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """All source modules must be present in the wheel."""
        expected_modules = [
            "catalog_compare/__init__.py",
            "catalog_compare/_numeric.py",
            "catalog_compare/api.py",
            "catalog_compare/errors.py",
            "catalog_compare/protocols.py",
            "catalog_compare/result.py",
            "catalog_compare/selection.py",
            "catalog_compare/catalog/__init__.py",
            "catalog_compare/catalog/builder.py",
            "catalog_compare/catalog/index.py",
            "catalog_compare/catalog/models.py",
            "catalog_compare/scoring/__init__.py",
            "catalog_compare/scoring/config.py",
            "catalog_compare/scoring/contract.py",
            "catalog_compare/scoring/ranker.py",
            "catalog_compare/scoring/similarity.py",
            "catalog_compare/reviews/__init__.py",
            "catalog_compare/reviews/aggregate.py",
            "catalog_compare/reviews/config.py",
            "catalog_compare/reviews/memory.py",
            "catalog_compare/reviews/models.py",
            "catalog_compare/reviews/service.py",
            "catalog_compare/integrations/__init__.py",
            "catalog_compare/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "catalog-compare" in metadata.lower() or "catalog_compare" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for catalog-compare."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")

        cc_eps = [
            ep
            for ep in pytest11_eps
            if "catalog" in ep.name.lower() or "catalog" in str(ep.value).lower()
        ]
        assert cc_eps, (
            f"No pytest11 entry point found for catalog-compare. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixtures_available(self):  # type: ignore[no-untyped-def]
        """Both fixtures must be importable from the plugin module."""
        import importlib

        mod = importlib.import_module("catalog_compare.integrations._pytest_plugin")
        assert callable(mod.assert_similarity)
        assert callable(mod.assert_best_choice)

    def test_plugin_discovery_via_pytest(self):  # type: ignore[no-untyped-def]
        """pytest --fixtures should list the plugin fixtures."""
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "--fixtures", "-q"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert "assert_best_choice" in result.stdout, (
            f"assert_best_choice not found in pytest --fixtures output.\n"
            f"stdout: {result.stdout[:500]}\n"
            f"stderr: {result.stderr[:500]}"
        )
