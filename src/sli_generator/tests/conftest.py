"""
Shared fixtures for the SLI generator tests.

Usage:
    def test_something(sli_input, shipper):
        assert sli_input.reference_number == "INV-1001"
"""

from __future__ import annotations

from datetime import date

import pytest

from sli_generator.assembly import JsonSliRepository
from sli_generator.schemas import LineItem, ShipperProfile, SliInput


@pytest.fixture
def shipper() -> ShipperProfile:
    return ShipperProfile(
        usppi_name="Northwind Exports LLC",
        usppi_address_lines=["4625 West Harbor Drive, Suite 2", "Las Vegas, NV 89103", "United States"],
        usppi_ein="88-1234567",
        usppi_email="exports@northwind.example",
        usppi_phone="+1 702 555 0100",
        officer_name="Dana Reyes",
        officer_title="Export Manager",
        freight_location_name="Harbor Logistics",
        freight_location_address_lines=["1516 Motor Parkway", "Islandia, NY 11749"],
        state_of_origin="NV",
        mode_of_transport="Ocean",
    )


@pytest.fixture
def line_items() -> list[LineItem]:
    return [
        LineItem(hs_code="3304.99", quantity=10, case_qty=2, unit_weight=5, value=100, made_in="USA"),
        LineItem(hs_code=" 3304.99 ", quantity=5, case_qty=1, unit_weight=5, value=50, made_in="Korea"),
        LineItem(hs_code="3401.11", quantity=4, case_qty=4, unit_weight=1.5, value=20, made_in="Korea"),
        LineItem(hs_code=None, quantity=1, case_qty=1, unit_weight=1, value=5, made_in="usa"),
        LineItem(hs_code="", quantity=2, case_qty=1, unit_weight=1, value=7, made_in="France"),
    ]


@pytest.fixture
def sli_input(line_items: list[LineItem]) -> SliInput:
    return SliInput(
        sli_number=17,
        sli_date=date(2024, 5, 2),
        reference_number="INV-1001",
        forwarding_agent_lines=["Blue Water Forwarding", "12 Dock Road", "Long Beach, CA 90802", "USA"],
        consignee_name="Acme Trading Ltd",
        consignee_address_lines=["88 Queen Street", "Suite 400", "Toronto, ON M5H 2N2"],
        consignee_country="Canada",
        in_bond_code="70",
        instructions_to_forwarder="Deliver before noon.",
        export_date=date(2024, 5, 10),
        checkbox_states={"routed_export_no": True, "related_party_non_related": True},
        line_items=line_items,
    )


@pytest.fixture
def store_data() -> dict:
    return {
        "order_slis": {
            "42": {
                "sli_number": 5,
                "forwarding_agent_line1": "Blue Water Forwarding",
                "forwarding_agent_line2": "12 Dock Road",
                "date_of_export": "2024-06-01T00:00:00+00:00",
                "in_bond_code": "70",
                "checkbox_states": '{"routed_export_yes": true}',
            },
        },
        "orders": {
            "42": {
                "invoice_number": "INV-42",
                "company": {
                    "company_name": "Acme Trading Ltd",
                    "ship_to_street_line_1": "88 Queen Street",
                    "ship_to_street_line_2": "",
                    "ship_to_city": "Toronto",
                    "ship_to_state": "ON",
                    "ship_to_postal_code": "M5H 2N2",
                    "ship_to_country": "Canada",
                },
            },
            "43": {"invoice_number": "INV-43", "company": {}},
        },
        "order_items": {
            "42": [
                {"id": "i2", "product_id": "p2", "quantity": 3, "case_qty": None, "total_price": "30.00", "sort_order": 2},
                {"id": "i1", "product_id": "p1", "quantity": 6, "case_qty": 2, "total_price": 120, "sort_order": 1},
                {"id": "i3", "product_id": "missing", "quantity": 1, "total_price": 10, "sort_order": None},
            ],
        },
        "products": {
            "p1": {"hs_code": "3304.99", "case_weight": 4.5, "made_in": "USA", "item_name": "Face cream", "price_international": 20},
            "p2": {"hs_code": "3401.11", "case_weight": 1.0, "made_in": "Korea", "item_name": "Soap", "price_international": 10},
        },
        "standalone_slis": {
            "7": {
                "sli_number": 7,
                "invoice_number": "SA-7",
                "consignee_name": "Globex GmbH",
                "consignee_address_line1": "Hauptstrasse 1",
                "consignee_address_line2": "10115 Berlin",
                "consignee_country": "Germany",
                "selected_products": (
                    '[{"product_id": "p1", "quantity": 4},'
                    ' {"product_id": "p2", "quantity": 2, "case_qty": 1, "total_price": 15},'
                    ' {"id": "unknown", "quantity": 3, "hs_code": "9999.00", "made_in": "Japan"},'
                    ' {"product_id": "p2", "quantity": 0}]'
                ),
            },
            "8": {"invoice_number": "SA-8", "selected_products": "not json"},
        },
    }


@pytest.fixture
def repository(store_data: dict) -> JsonSliRepository:
    return JsonSliRepository(store_data)
