# SPDX-License-Identifier: MIT
"""Tests for snapshot serialization."""

import json

import pytest

from localization_sync.enums import ExportFormat
from localization_sync.export import (
    export_json,
    export_records,
    export_xml,
    parse_json_pairs,
    parse_xml_records,
)


@pytest.fixture
def records(make_record):
    return [
        make_record("Welcome", "Bienvenue", culture="fr-FR"),
        make_record("Cart", "Panier & caisse", culture="fr-FR"),
    ]


class TestExportJson:
    """Test cases for JSON export."""

    def test_uses_camel_case_fields(self, records):
        """Test that JSON output uses the external field names."""
        data = json.loads(export_json(records))

        assert data[0] == {
            "name": "Welcome",
            "value": "Bienvenue",
            "cultureName": "fr-FR",
            "resourceKey": "Localization:fr-FR:SharedResource:Welcome",
        }

    def test_keeps_non_ascii(self, make_record):
        """Test that non-ASCII text is written unescaped."""
        text = export_json([make_record("Greeting", "Grüß Gott", culture="de-AT")])
        assert "Grüß Gott" in text

    def test_empty(self):
        """Test that no records export as an empty array."""
        assert json.loads(export_json([])) == []


class TestExportXml:
    """Test cases for XML export and parsing."""

    def test_document_layout(self, records):
        """Test the XML declaration and element layout."""
        text = export_xml(records)

        assert text.startswith('<?xml version="1.0" encoding="utf-8"?>')
        assert "<ArrayOfLocalizationRecord>" in text
        assert "<CultureName>fr-FR</CultureName>" in text
        assert "Panier &amp; caisse" in text

    def test_parse_reads_exported_document(self, records):
        """Test that an exported document parses back to the same records."""
        assert parse_xml_records(export_xml(records)) == records

    def test_parse_missing_value_is_empty(self):
        """Test that an absent Value element is read as an empty string."""
        text = (
            "<ArrayOfLocalizationRecord><LocalizationRecord>"
            "<Name>a</Name><CultureName>en-US</CultureName>"
            "<ResourceKey>k</ResourceKey>"
            "</LocalizationRecord></ArrayOfLocalizationRecord>"
        )
        assert parse_xml_records(text)[0].value == ""

    def test_parse_rejects_wrong_root(self):
        """Test that an unexpected root element is rejected."""
        with pytest.raises(ValueError, match="root element"):
            parse_xml_records("<Records/>")

    def test_parse_rejects_missing_identity(self):
        """Test that a record without a resource key is rejected."""
        text = (
            "<ArrayOfLocalizationRecord><LocalizationRecord><Name>a</Name>"
            "</LocalizationRecord></ArrayOfLocalizationRecord>"
        )
        with pytest.raises(ValueError, match="missing"):
            parse_xml_records(text)

    def test_parse_rejects_entity_expansion(self):
        """Test that entity declarations are refused."""
        text = (
            '<?xml version="1.0"?><!DOCTYPE a [<!ENTITY x "boom">]>'
            "<ArrayOfLocalizationRecord>&x;</ArrayOfLocalizationRecord>"
        )
        with pytest.raises(ValueError):
            parse_xml_records(text)

    def test_parse_rejects_malformed(self):
        """Test that malformed XML is reported as ValueError."""
        with pytest.raises(ValueError):
            parse_xml_records("<ArrayOfLocalizationRecord>")

    def test_export_rejects_control_characters(self, make_record):
        """Test that a value XML 1.0 cannot represent is refused on export."""
        with pytest.raises(ValueError, match=r"U\+0007"):
            export_xml([make_record("Bell", "ding\x07")])

    def test_export_keeps_allowed_whitespace(self, make_record):
        """Test that tabs and newlines survive an export and parse."""
        records = [make_record("Multi", "one\n\ttwo")]
        assert parse_xml_records(export_xml(records))[0].value == "one\n\ttwo"


class TestExportRecords:
    """Test cases for format dispatch and import parsing."""

    def test_dispatch(self, records):
        """Test that the requested format is produced."""
        assert export_records(records, ExportFormat.XML).startswith("<?xml")
        assert export_records(records, "json").startswith("[")

    def test_unknown_format(self, records):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValueError):
            export_records(records, "csv")

    def test_parse_json_pairs(self):
        """Test that a JSON object becomes ordered name/value pairs."""
        assert parse_json_pairs('{"a": "1", "b": 2}') == [("a", "1"), ("b", "2")]

    def test_parse_json_pairs_rejects_array(self):
        """Test that non-object documents are rejected."""
        with pytest.raises(ValueError):
            parse_json_pairs('["a"]')
