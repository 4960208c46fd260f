"""
Tests for data models and field configuration.

Run with: pytest sourcing/catalog_match/tests/test_config.py -v
"""

import json
from datetime import datetime

import pytest

from sourcing.catalog_match.config import (
    DEFAULT_CONFIG_PATH,
    FieldConfig,
    FieldNames,
    default_config,
    load_config,
)
from sourcing.catalog_match.models import (
    Catalog,
    FoundMatch,
    MatchResult,
    MissingRecord,
    MissReason,
    ReportRow,
    ReportStatus,
)


class TestMissReason:
    def test_values(self):
        assert MissReason.NO_IDENTIFIER.value == "No identifier detected"
        assert MissReason.NOT_IN_CATALOG.value == "Not present in catalog"

    def test_lookup_by_value(self):
        assert MissReason("Not present in catalog") is MissReason.NOT_IN_CATALOG


class TestModels:
    def test_catalog_defaults(self):
        catalog = Catalog(id="c1", name="catalog.csv")
        assert catalog.records == []
        assert catalog.record_count == 0
        assert isinstance(catalog.uploaded_at, datetime)

    def test_match_result_total(self):
        result = MatchResult(
            found=[FoundMatch(requested={"PN": "A"}, catalog={"PN": "A"})],
            missing=[MissingRecord(record={"PN": "B"}, reason=MissReason.NOT_IN_CATALOG)],
        )
        assert result.total == 2

    def test_report_row_cells(self):
        row = ReportRow("A1", ReportStatus.AVAILABLE, '{"PN":"A1"}')
        assert row.as_cells() == ["A1", "Available", '{"PN":"A1"}']


class TestLoadConfig:
    def test_default_file(self):
        config = load_config(DEFAULT_CONFIG_PATH)
        assert config.fields.identifier[:4] == ["part number", "part", "sku", "pn"]
        assert config.fields.identifier[-1] == "manufacturer part number"
        assert config.labels.unspecified_manufacturer == "Unspecified manufacturer"
        assert config.labels.unspecified_family == "General catalog"
        assert config.settings.top_n == 3
        assert config.settings.brief_sample_size == 10
        assert config.settings.strict_identifiers is False

    def test_default_config_is_cached(self):
        assert default_config() is default_config()

    def test_identifier_keys_lowercased(self):
        config = FieldConfig(fields=FieldNames(identifier=[" Part Number", "SKU"]))
        assert config.identifier_keys == ["part number", "sku"]

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "fields.json"
        path.write_text(json.dumps({"fields": {"identifier": ["catalog no"]}}))
        config = load_config(path)

        assert config.identifier_keys == ["catalog no"]
        assert config.fields.manufacturer == []
        assert config.labels.unidentified == "Unidentified"
        assert config.settings.top_n == 3

    def test_strict_flag(self, tmp_path):
        path = tmp_path / "fields.json"
        path.write_text(json.dumps({"settings": {"strict_identifiers": True, "top_n": 5}}))
        config = load_config(path)
        assert config.settings.strict_identifiers is True
        assert config.settings.top_n == 5

    def test_invalid_field_list(self, tmp_path):
        path = tmp_path / "fields.json"
        path.write_text(json.dumps({"fields": {"identifier": "part number"}}))
        with pytest.raises(ValueError):
            load_config(path)

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent.json")
