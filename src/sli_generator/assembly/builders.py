"""
Builders that turn store records into a normalized ``SliInput``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import RecordNotFoundError
from ..schemas.line_item import LineItem
from ..schemas.sli import SliInput
from ..utils.normalization import clean_text, coerce_number
from .repository import Record, SliRepository

logger = logging.getLogger(__name__)


def _text(record: Record, key: str) -> str:
    return clean_text(record.get(key))


def _parse_json(value: Any, expected: type, default: Any) -> Any:
    """Accept an already-decoded value or a JSON string; anything else is ``default``."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed JSON field: %.40r", value)
            return default
    return value if isinstance(value, expected) else default


def _common_fields(sli: Record) -> dict[str, Any]:
    """Fields every SLI record carries, whether order-based or standalone."""
    return {
        "sli_number": sli.get("sli_number"),
        "sli_date": sli.get("sli_date") or sli.get("created_at"),
        "forwarding_agent_lines": [_text(sli, f"forwarding_agent_line{n}") for n in range(1, 5)],
        "in_bond_code": _text(sli, "in_bond_code"),
        "instructions_to_forwarder": _text(sli, "instructions_to_forwarder"),
        "export_date": sli.get("date_of_export"),
        "intermediate_consignee": _text(sli, "intermediate_consignee"),
        "license_number": _text(sli, "license_number"),
        "checkbox_states": _parse_json(sli.get("checkbox_states"), dict, {}),
    }


def build_order_input(order_id: str, repository: SliRepository) -> SliInput:
    """
    Assemble the SLI of an order.

    The consignee is the ordering company's ship-to address. Items whose
    product cannot be found are left off the form.

    Raises:
        RecordNotFoundError: if the order or its SLI does not exist
    """
    sli = repository.get_order_sli(order_id)
    if sli is None:
        raise RecordNotFoundError("SLI for order", order_id)
    order = repository.get_order(order_id)
    if order is None:
        raise RecordNotFoundError("Order", order_id)

    items = repository.get_order_items(order_id)
    product_ids = [str(item["product_id"]) for item in items if item.get("product_id")]
    products = repository.get_products(product_ids)

    line_items: list[LineItem] = []
    for item in items:
        product = products.get(str(item.get("product_id")))
        if product is None:
            logger.warning(
                "Skipping item %s of order %s: unknown product %s",
                item.get("id"), order_id, item.get("product_id"),
            )
            continue
        quantity = coerce_number(item.get("quantity"))
        line_items.append(
            LineItem(
                hs_code=product.get("hs_code"),
                quantity=quantity,
                case_qty=coerce_number(item.get("case_qty")) or quantity,
                unit_weight=product.get("case_weight"),
                value=item.get("total_price"),
                made_in=product.get("made_in"),
                item_name=product.get("item_name"),
            )
        )

    company = order.get("company") or order.get("companies") or {}
    locality = ", ".join(
        part
        for part in (
            _text(company, "ship_to_city"),
            _text(company, "ship_to_state"),
            _text(company, "ship_to_postal_code"),
        )
        if part
    )

    logger.info("Assembled SLI for order %s with %d line item(s)", order_id, len(line_items))
    return SliInput(
        **_common_fields(sli),
        reference_number=_text(order, "invoice_number"),
        consignee_name=_text(company, "company_name"),
        consignee_address_lines=[
            _text(company, "ship_to_street_line_1"),
            _text(company, "ship_to_street_line_2"),
            locality,
        ],
        consignee_country=_text(company, "ship_to_country"),
        line_items=line_items,
    )


def build_standalone_input(sli_id: str, repository: SliRepository) -> SliInput:
    """
    Assemble a standalone SLI from its own consignee fields and product picks.

    ``selected_products`` may be stored as a JSON string; a value that does
    not parse means no products. Selections with a non-positive quantity are
    dropped. Catalog data (HS code, origin, weight, price) wins over the
    values stored on the selection.

    Raises:
        RecordNotFoundError: if the SLI does not exist
    """
    sli = repository.get_standalone_sli(sli_id)
    if sli is None:
        raise RecordNotFoundError("SLI", sli_id)

    selections = _parse_json(sli.get("selected_products"), list, [])
    selections = [selection for selection in selections if isinstance(selection, dict)]
    product_ids = [
        str(selection.get("product_id") or selection.get("id"))
        for selection in selections
        if selection.get("product_id") or selection.get("id")
    ]
    products = repository.get_products(product_ids)

    line_items: list[LineItem] = []
    for selection in selections:
        quantity = coerce_number(selection.get("quantity"))
        if quantity <= 0:
            continue
        product = products.get(str(selection.get("product_id") or selection.get("id"))) or {}
        if selection.get("total_price") is not None:
            value = coerce_number(selection.get("total_price"))
        else:
            value = coerce_number(product.get("price_international")) * quantity
        line_items.append(
            LineItem(
                hs_code=clean_text(product.get("hs_code") or selection.get("hs_code")) or None,
                quantity=quantity,
                case_qty=coerce_number(selection.get("case_qty")) or quantity,
                unit_weight=product.get("case_weight"),
                value=value,
                made_in=product.get("made_in") or selection.get("made_in"),
                item_name=product.get("item_name"),
            )
        )

    logger.info("Assembled standalone SLI %s with %d line item(s)", sli_id, len(line_items))
    return SliInput(
        **_common_fields(sli),
        reference_number=_text(sli, "invoice_number"),
        consignee_name=_text(sli, "consignee_name"),
        consignee_address_lines=[_text(sli, f"consignee_address_line{n}") for n in range(1, 4)],
        consignee_country=_text(sli, "consignee_country"),
        line_items=line_items,
    )
