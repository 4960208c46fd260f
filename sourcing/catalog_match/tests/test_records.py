"""
Tests for record sanitizing, identifier extraction and field resolution.

Run with: pytest sourcing/catalog_match/tests/test_records.py -v
"""

import pytest

from sourcing.catalog_match.config import FieldConfig, FieldNames, MatchSettings, default_config
from sourcing.catalog_match.identifiers import (
    extract_identifier,
    resolve_family,
    resolve_field,
    resolve_manufacturer,
)
from sourcing.catalog_match.sanitizer import sanitize_record, sanitize_records


class TestSanitizer:
    """Test raw row cleanup."""

    def test_trims_keys_and_values(self):
        rows = [{"  Part Number ": "  ABC-1  ", "Manufacturer": " Acme"}]
        assert sanitize_records(rows) == [{"Part Number": "ABC-1", "Manufacturer": "Acme"}]

    def test_drops_none_and_blank_values(self):
        record = sanitize_record({"PN": "A1", "Qty": None, "Notes": "   ", "Family": ""})
        assert record == {"PN": "A1"}

    def test_stringifies_values(self):
        record = sanitize_record({"PN": 12345, "Qty": 2.5, "Active": True})
        assert record == {"PN": "12345", "Qty": "2.5", "Active": "True"}

    def test_zero_is_kept(self):
        assert sanitize_record({"Qty": 0}) == {"Qty": "0"}

    def test_key_casing_preserved(self):
        record = sanitize_record({"pArT nUmBeR": "x"})
        assert list(record) == ["pArT nUmBeR"]

    def test_drops_rows_without_fields(self):
        rows = [{"PN": "A1"}, {"PN": None, "Qty": " "}, {}, {"PN": "B2"}]
        assert sanitize_records(rows) == [{"PN": "A1"}, {"PN": "B2"}]

    def test_preserves_row_and_key_order(self):
        rows = [{"b": "2", "a": "1"}, {"z": "26"}]
        records = sanitize_records(rows)
        assert [list(r) for r in records] == [["b", "a"], ["z"]]

    def test_empty_input(self):
        assert sanitize_records([]) == []


class TestExtractIdentifier:
    """Test canonical identifier derivation."""

    def test_priority_field_uppercased(self):
        assert extract_identifier({"Part Number": "abc-1"}) == "ABC-1"

    def test_key_casing_ignored(self):
        assert extract_identifier({"pn": "x9"}) == "X9"
        assert extract_identifier({"SKU": "x9"}) == "X9"
        assert extract_identifier({"Manufacturer Part Number": "mp-4"}) == "MP-4"

    def test_surrounding_whitespace_ignored(self):
        assert extract_identifier({" PN ": "  a1  "}) == "A1"

    def test_priority_order_wins_over_record_order(self):
        # "part number" outranks "sku" even though sku comes first
        record = {"SKU": "sku-val", "Part Number": "pn-val"}
        assert extract_identifier(record) == "PN-VAL"

    def test_priority_field_found_after_other_fields(self):
        record = {"Description": "widget", "Qty": "3", "MPN": "m-1"}
        assert extract_identifier(record) == "M-1"

    def test_falls_back_to_first_field(self):
        record = {"Notes": "loose part, no id"}
        assert extract_identifier(record) == "LOOSE PART, NO ID"

    def test_fallback_uses_record_order(self):
        record = {"Description": "first", "Colour": "second"}
        assert extract_identifier(record) == "FIRST"

    def test_empty_record(self):
        assert extract_identifier({}) == ""
        assert extract_identifier(None) == ""

    def test_empty_priority_value_is_skipped(self):
        # Unsanitized input: blank PN falls through to the next candidate
        record = {"PN": "  ", "MPN": "real"}
        assert extract_identifier(record) == "REAL"

    def test_empty_fallback_value(self):
        assert extract_identifier({"Notes": "   "}) == ""

    def test_strict_mode_disables_fallback(self):
        config = FieldConfig(
            fields=FieldNames(identifier=["pn"]),
            settings=MatchSettings(strict_identifiers=True),
        )
        assert extract_identifier({"Notes": "loose"}, config) == ""
        assert extract_identifier({"PN": "a1"}, config) == "A1"

    def test_custom_identifier_list(self):
        config = FieldConfig(fields=FieldNames(identifier=["Catalog No"]))
        assert extract_identifier({"catalog no": "c-1", "PN": "ignored"}, config) == "C-1"


class TestResolveField:
    """Test descriptive field lookup."""

    def test_case_insensitive(self):
        assert resolve_field({"MANUFACTURER": "Acme"}, ["manufacturer"]) == "Acme"

    def test_candidate_priority(self):
        record = {"Vendor": "Distributor Inc", "Brand": "Acme"}
        assert resolve_field(record, ["manufacturer", "brand", "vendor"]) == "Acme"

    def test_skips_blank_values(self):
        record = {"Manufacturer": "  ", "Brand": "Acme"}
        assert resolve_field(record, ["manufacturer", "brand"]) == "Acme"

    def test_returns_trimmed_value(self):
        assert resolve_field({"Series": "  M12 "}, ["series"]) == "M12"

    def test_no_match(self):
        assert resolve_field({"PN": "A1"}, ["manufacturer"]) == ""
        assert resolve_field({}, ["manufacturer"]) == ""

    def test_manufacturer_and_family_helpers(self):
        record = {"Maker": "Zenith", "Product Family": "Rectangular"}
        assert resolve_manufacturer(record) == "Zenith"
        assert resolve_family(record) == "Rectangular"

    def test_default_lists(self):
        config = default_config()
        assert config.fields.manufacturer == ["manufacturer", "brand", "maker", "vendor"]
        assert config.fields.family == ["family", "series", "product family", "product"]


@pytest.mark.parametrize("header", ["Part Number", "part", "SKU", "Pn", "component", "ITEM", "id", "mpn"])
def test_every_default_identifier_header(header):
    assert extract_identifier({"Description": "widget", header: "val-1"}) == "VAL-1"
