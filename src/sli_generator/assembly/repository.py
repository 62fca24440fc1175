"""
Store boundary for SLI generation.

The generator never talks to the application database directly; the data
assembly builders ask a repository for plain record dictionaries.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Protocol

Record = dict[str, Any]


class SliRepository(Protocol):
    """
    Read-only access to the records an SLI is built from.

    Getters return ``None`` (or an empty collection) for missing records;
    the builders decide which absences are errors.
    """

    def get_order_sli(self, order_id: str) -> Record | None: ...

    def get_order(self, order_id: str) -> Record | None: ...

    def get_order_items(self, order_id: str) -> list[Record]: ...

    def get_products(self, product_ids: Iterable[str]) -> dict[str, Record]: ...

    def get_standalone_sli(self, sli_id: str) -> Record | None: ...


class JsonSliRepository:
    """
    Repository backed by a JSON document.

    Expected top-level keys, each optional::

        {
          "order_slis": {"<order id>": {...}},
          "orders": {"<order id>": {"invoice_number": ..., "company": {...}}},
          "order_items": {"<order id>": [{"product_id": ..., "quantity": ...}]},
          "products": {"<product id>": {"hs_code": ..., "case_weight": ...}},
          "standalone_slis": {"<sli id>": {...}}
        }
    """

    def __init__(self, data: Record | None = None):
        self.data: Record = data or {}

    @classmethod
    def from_file(cls, path: str | Path) -> "JsonSliRepository":
        with Path(path).open("r", encoding="utf-8") as handle:
            return cls(json.load(handle))

    def _table(self, name: str) -> Record:
        return self.data.get(name) or {}

    def get_order_sli(self, order_id: str) -> Record | None:
        return self._table("order_slis").get(str(order_id))

    def get_order(self, order_id: str) -> Record | None:
        return self._table("orders").get(str(order_id))

    def get_order_items(self, order_id: str) -> list[Record]:
        items = list(self._table("order_items").get(str(order_id)) or [])
        # sort_order ascending, unsorted items last
        return sorted(
            items,
            key=lambda item: (item.get("sort_order") is None, item.get("sort_order") or 0),
        )

    def get_products(self, product_ids: Iterable[str]) -> dict[str, Record]:
        products = self._table("products")
        return {
            str(product_id): products[str(product_id)]
            for product_id in product_ids
            if str(product_id) in products
        }

    def get_standalone_sli(self, sli_id: str) -> Record | None:
        return self._table("standalone_slis").get(str(sli_id))
