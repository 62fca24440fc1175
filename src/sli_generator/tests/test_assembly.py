"""
Data assembly tests: JSON repository and the order / standalone builders.
"""

import json
import logging
from datetime import date

import pytest

from sli_generator.assembly import JsonSliRepository, build_order_input, build_standalone_input
from sli_generator.errors import RecordNotFoundError


class TestJsonSliRepository:

    def test_from_file(self, tmp_path, store_data):
        path = tmp_path / "store.json"
        path.write_text(json.dumps(store_data), encoding="utf-8")
        repository = JsonSliRepository.from_file(path)
        assert repository.get_order("42")["invoice_number"] == "INV-42"

    def test_items_follow_sort_order(self, repository):
        assert [item["id"] for item in repository.get_order_items("42")] == ["i1", "i2", "i3"]

    def test_missing_records(self, repository):
        assert repository.get_order_sli("nope") is None
        assert repository.get_order_items("nope") == []
        assert repository.get_standalone_sli("nope") is None

    def test_get_products_skips_unknown_ids(self, repository):
        assert set(repository.get_products(["p1", "zzz"])) == {"p1"}

    def test_ids_are_matched_as_text(self, repository):
        assert repository.get_standalone_sli(7)["invoice_number"] == "SA-7"

    def test_empty_store(self):
        repository = JsonSliRepository()
        assert repository.get_order("1") is None
        assert repository.get_products(["1"]) == {}


class TestBuildOrderInput:

    def test_header_fields(self, repository):
        data = build_order_input("42", repository)
        assert data.reference_number == "INV-42"
        assert data.sli_number == 5
        assert data.export_date == date(2024, 6, 1)
        assert data.in_bond_code == "70"
        assert data.forwarding_agent_lines == ["Blue Water Forwarding", "12 Dock Road"]
        assert data.checkbox_states == {"routed_export_yes": True}

    def test_consignee_is_company_ship_to(self, repository):
        data = build_order_input("42", repository)
        assert data.consignee_name == "Acme Trading Ltd"
        assert data.consignee_address_lines == ["88 Queen Street", "Toronto, ON, M5H 2N2"]
        assert data.consignee_country == "Canada"

    def test_line_items(self, repository):
        items = build_order_input("42", repository).line_items
        assert [item.hs_code for item in items] == ["3304.99", "3401.11"]
        first, second = items
        assert (first.quantity, first.case_qty, first.unit_weight, first.value) == (6, 2, 4.5, 120)
        assert first.made_in == "USA"
        assert first.item_name == "Face cream"
        # Missing case quantity falls back to the ordered quantity
        assert second.case_qty == 3
        assert second.value == 30

    def test_unknown_product_is_skipped(self, repository, caplog):
        with caplog.at_level(logging.WARNING):
            items = build_order_input("42", repository).line_items
        assert len(items) == 2
        assert "unknown product missing" in caplog.text

    def test_sli_date_defaults_to_today(self, repository):
        assert build_order_input("42", repository).sli_date == date.today()

    def test_missing_sli(self, repository):
        with pytest.raises(RecordNotFoundError, match="SLI for order not found: 43"):
            build_order_input("43", repository)

    def test_missing_order(self, store_data):
        store_data["order_slis"]["44"] = {}
        with pytest.raises(RecordNotFoundError) as excinfo:
            build_order_input("44", JsonSliRepository(store_data))
        assert excinfo.value.kind == "Order"
        assert excinfo.value.record_id == "44"


class TestBuildStandaloneInput:

    def test_header_fields(self, repository):
        data = build_standalone_input("7", repository)
        assert data.reference_number == "SA-7"
        assert data.sli_number == 7
        assert data.consignee_name == "Globex GmbH"
        assert data.consignee_address_lines == ["Hauptstrasse 1", "10115 Berlin"]
        assert data.consignee_country == "Germany"

    def test_selected_products(self, repository):
        items = build_standalone_input("7", repository).line_items
        assert [item.hs_code for item in items] == ["3304.99", "3401.11", "9999.00"]
        catalog, priced, uncatalogued = items
        # No stored total: unit international price times quantity
        assert catalog.value == 80
        assert catalog.case_qty == 4
        assert catalog.weight == 18
        assert priced.value == 15
        assert priced.case_qty == 1
        assert uncatalogued.made_in == "Japan"
        assert uncatalogued.value == 0

    def test_selections_as_list(self, store_data):
        store_data["standalone_slis"]["9"] = {
            "selected_products": [{"product_id": "p2", "quantity": "5"}],
        }
        items = build_standalone_input("9", JsonSliRepository(store_data)).line_items
        assert len(items) == 1
        assert items[0].value == 50

    def test_zero_quantity_is_dropped(self, repository):
        items = build_standalone_input("7", repository).line_items
        assert all(item.quantity > 0 for item in items)

    def test_malformed_selection_json(self, repository):
        assert build_standalone_input("8", repository).line_items == []

    def test_missing_sli(self, repository):
        with pytest.raises(RecordNotFoundError, match="SLI not found: 99"):
            build_standalone_input("99", repository)
