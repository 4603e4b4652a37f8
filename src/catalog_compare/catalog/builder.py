"""SnapshotBuilder: converts loose catalog payloads into ProductSnapshot records.

The catalog API returns nested JSON-like mappings whose shape drifts between
endpoints: ids arrive as ``_id`` or ``id``, ``rating`` and ``reviewCount``
may be missing or null, and prices are sometimes numeric strings.  The
builder is the single place where such payloads are validated and turned
into typed, immutable snapshots; everything downstream of it works on
``ProductSnapshot`` only.

Category listings (``[{"category": ..., "products": [...]}, ...]``) are
flattened by ``build_category_payload``; a product without its own
``category`` inherits the enclosing one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from catalog_compare.catalog.models import ProductSnapshot, Specification

__all__ = ["SnapshotBuilder"]


@dataclass
class SnapshotBuilder:
    """Builds ``ProductSnapshot`` records from raw catalog mappings.

    Missing ``rating`` and ``reviewCount`` default to 0.  Both camelCase
    (``reviewCount``) and snake_case (``review_count``) keys are accepted.

    Example::

        builder = SnapshotBuilder()
        snap = builder.build({
            "_id": "p1",
            "price": "199.99",
            "specifications": [{"name": "RAM", "value": "16GB"}],
        })
        # snap.price == 199.99, snap.rating == 0.0
    """

    def build(self, raw: Mapping[str, Any], category: str = "") -> ProductSnapshot:
        """Convert one raw product mapping.

        Args:
            raw:      Product mapping as returned by the catalog.
            category: Category to use when ``raw`` has none of its own.

        Returns:
            A validated ``ProductSnapshot``.

        Raises:
            TypeError:  If ``raw`` or one of its nested fields has the wrong
                shape (e.g. ``specifications`` is not a list of mappings).
            ValueError: If a required field is missing or a numeric field is
                out of range.
        """
        if not isinstance(raw, Mapping):
            raise TypeError(f"Product payload must be a mapping, got {type(raw)!r}")

        product_id = raw.get("_id", raw.get("id"))
        if product_id is None or product_id == "":
            raise ValueError("Product payload has no '_id' or 'id'")

        return ProductSnapshot(
            id=str(product_id),
            price=self._number(raw.get("price"), "price", required=True),
            rating=self._number(raw.get("rating"), "rating"),
            review_count=int(
                self._number(raw.get("reviewCount", raw.get("review_count")), "reviewCount")
            ),
            specifications=tuple(self._specifications(raw.get("specifications"))),
            features=tuple(self._strings(raw.get("features"), "features")),
            category=str(raw.get("category") or category),
            name=str(raw.get("name") or ""),
            brand=str(raw.get("brand") or ""),
        )

    def build_many(
        self, raws: Iterable[Mapping[str, Any]], category: str = ""
    ) -> list[ProductSnapshot]:
        """Convert a list of raw product mappings, preserving order."""
        return [self.build(raw, category=category) for raw in raws]

    def build_category_payload(
        self, categories: Iterable[Mapping[str, Any]]
    ) -> list[ProductSnapshot]:
        """Flatten a ``[{"category": ..., "products": [...]}]`` listing.

        Args:
            categories: Category entries, each with a ``category`` slug and a
                ``products`` list.  Entries without products contribute nothing.

        Returns:
            All products of all categories, in listing order.
        """
        snapshots: list[ProductSnapshot] = []
        for entry in categories:
            if not isinstance(entry, Mapping):
                raise TypeError(f"Category entry must be a mapping, got {type(entry)!r}")
            slug = str(entry.get("category") or "")
            snapshots.extend(self.build_many(entry.get("products") or [], category=slug))
        return snapshots

    # ------------------------------------------------------------------
    # Field parsers
    # ------------------------------------------------------------------

    @staticmethod
    def _number(value: Any, field_name: str, required: bool = False) -> float:
        # CRITICAL: bool is a subclass of int and must not pass as a number
        if isinstance(value, bool):
            raise TypeError(f"{field_name} must be a number, got bool")
        if value is None:
            if required:
                raise ValueError(f"Product payload has no '{field_name}'")
            return 0.0
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                raise ValueError(f"{field_name} is not numeric: {value!r}") from None
        raise TypeError(f"{field_name} must be a number, got {type(value)!r}")

    @staticmethod
    def _strings(value: Any, field_name: str) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str) or not isinstance(value, Iterable):
            raise TypeError(f"{field_name} must be a list of strings, got {type(value)!r}")
        return [str(item).strip() for item in value]

    @staticmethod
    def _specifications(value: Any) -> list[Specification]:
        if value is None:
            return []
        if isinstance(value, str) or not isinstance(value, Iterable):
            raise TypeError(f"specifications must be a list, got {type(value)!r}")
        specs: list[Specification] = []
        for item in value:
            if isinstance(item, Specification):
                specs.append(item)
                continue
            if not isinstance(item, Mapping):
                raise TypeError(f"specification must be a mapping, got {type(item)!r}")
            if "name" not in item or "value" not in item:
                raise ValueError(f"specification needs 'name' and 'value': {dict(item)!r}")
            specs.append(Specification(str(item["name"]).strip(), str(item["value"]).strip()))
        return specs
