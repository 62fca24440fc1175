"""
Product aggregator - groups order lines into SLI commodity rows by HS code.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..schemas.line_item import NO_CODE, AggregatedRow, AggregationResult, LineItem

logger = logging.getLogger(__name__)


def aggregate_products(line_items: Iterable[LineItem]) -> AggregationResult:
    """
    Summarize line items into one row per HS code.

    Items sharing a (trimmed) code are merged: quantity, weight and value are
    summed, and the country of origin of the first item is kept for the row.
    Items without a code are never merged; each keeps its own "N/A" row.

    Weight is computed per line as ``case_qty * unit_weight`` before summing.

    Args:
        line_items: Order lines in document order

    Returns:
        AggregationResult with coded rows (first-seen order) and uncoded rows
    """
    grouped: dict[str, AggregatedRow] = {}
    without_code: list[AggregatedRow] = []

    for item in line_items:
        code = (item.hs_code or "").strip()
        names = [item.item_name] if item.item_name else []

        if not code:
            without_code.append(
                AggregatedRow(
                    hs_code=NO_CODE,
                    quantity=item.quantity,
                    weight=item.weight,
                    value=item.value,
                    made_in=item.made_in,
                    item_names=names,
                )
            )
            continue

        existing = grouped.get(code)
        if existing is None:
            grouped[code] = AggregatedRow(
                hs_code=code,
                quantity=item.quantity,
                weight=item.weight,
                value=item.value,
                made_in=item.made_in,
                item_names=names,
            )
        else:
            existing.quantity += item.quantity
            existing.weight += item.weight
            existing.value += item.value
            existing.item_names.extend(names)

    result = AggregationResult(with_code=list(grouped.values()), without_code=without_code)
    logger.debug(
        "Aggregated line items into %d coded and %d uncoded rows",
        len(result.with_code),
        len(result.without_code),
    )
    return result
