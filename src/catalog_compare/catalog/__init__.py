"""Catalog subpackage: product records and specification views.

Re-exports the public API for the catalog module:
- Specification, ProductSnapshot: validated, immutable product records
- SnapshotBuilder: converts raw catalog payloads into snapshots
- SpecificationIndex: specification names, facets and comparison tables
- search_products, filter_products, sort_products: product list operations
"""

from catalog_compare.catalog.builder import SnapshotBuilder
from catalog_compare.catalog.index import (
    FacetOrder,
    SortKey,
    SpecificationIndex,
    filter_products,
    search_products,
    sort_products,
)
from catalog_compare.catalog.models import ProductSnapshot, Specification

__all__ = [
    "FacetOrder",
    "ProductSnapshot",
    "SnapshotBuilder",
    "SortKey",
    "Specification",
    "SpecificationIndex",
    "filter_products",
    "search_products",
    "sort_products",
]
