"""
Data binding for the layout: resolves ``Field`` names against an SLI and the
shipper profile, and formats commodity rows. Both renderers read values from
here so they print the same text.
"""

from __future__ import annotations

from typing import Mapping

from ..schemas.line_item import AggregatedRow, AggregationResult
from ..schemas.shipper import ShipperProfile
from ..schemas.sli import SliInput
from ..utils.formatting import format_date, format_money, format_quantity, format_weight
from .model import Field

FieldValues = Mapping[str, list[str]]

# Fields printed one line per box row; all others are single values
LINE_FIELDS = frozenset({
    "forwarding_agent_lines",
    "consignee_address_lines",
    "usppi_address_lines",
    "freight_location_address_lines",
})


def bind_fields(data: SliInput, shipper: ShipperProfile) -> dict[str, list[str]]:
    """
    Every data-bound value of the form as a list of lines.

    Single-valued fields are one-element lists so that ``Field.index`` works
    uniformly.
    """
    return {
        "sli_date": [format_date(data.sli_date)],
        "sli_number": [str(data.sli_number) if data.sli_number is not None else ""],
        "reference_number": [data.reference_number],
        "export_date": [format_date(data.export_date)],
        "forwarding_agent_lines": list(data.forwarding_agent_lines),
        "consignee_name": [data.consignee_name],
        "consignee_address_lines": list(data.consignee_address_lines),
        "consignee_country": [data.consignee_country],
        "intermediate_consignee": [data.intermediate_consignee],
        "in_bond_code": [data.in_bond_code],
        "license_number": [data.license_number],
        "instructions_to_forwarder": [data.instructions_to_forwarder],
        "usppi_name": [shipper.usppi_name],
        "usppi_address_lines": list(shipper.usppi_address_lines),
        "usppi_ein": [shipper.usppi_ein],
        "usppi_email": [shipper.usppi_email],
        "usppi_phone": [shipper.usppi_phone],
        "officer_name": [shipper.officer_name],
        "officer_title": [shipper.officer_title],
        "freight_location_name": [shipper.freight_location_name],
        "freight_location_address_lines": list(shipper.freight_location_address_lines),
        "state_of_origin": [shipper.state_of_origin],
        "mode_of_transport": [shipper.mode_of_transport],
    }


def field_value(values: FieldValues, field: Field) -> str:
    """Value of one field occurrence; missing names and indices print as ""."""
    lines = values.get(field.name, [])
    return lines[field.index] if field.index < len(lines) else ""


def product_row_values(row: AggregatedRow, shipper: ShipperProfile) -> dict[str, str]:
    """Display text of one commodity row, keyed by product column."""
    return {
        "origin_flag": row.origin_flag,
        "hs_code": row.hs_code,
        "quantity": format_quantity(row.quantity),
        "uom": shipper.default_uom,
        "weight": format_weight(row.weight),
        "eccn": shipper.default_eccn,
        "sme": "",
        "license_symbol": shipper.default_license_symbol,
        "value": format_money(row.value),
        "license_value": "",
    }


def product_total_values(result: AggregationResult) -> dict[str, str]:
    return {"value": format_money(result.total_value)}
