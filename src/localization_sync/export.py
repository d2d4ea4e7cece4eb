# SPDX-License-Identifier: MIT
"""Serialization of record snapshots to JSON and XML.

The XML layout is a flat list of record elements::

    <ArrayOfLocalizationRecord>
      <LocalizationRecord>
        <Name>Welcome</Name>
        <Value>Hello</Value>
        <CultureName>en-US</CultureName>
        <ResourceKey>Localization:en-US:SharedResource:Welcome</ResourceKey>
      </LocalizationRecord>
    </ArrayOfLocalizationRecord>
"""

import json
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from typing import Any

from defusedxml import ElementTree as DefusedET
from defusedxml.common import DefusedXmlException

from .constants import XML_RECORD_ELEMENT, XML_ROOT_ELEMENT
from .enums import ExportFormat
from .models import LocalizationRecord


# Model field -> XML element name
_XML_FIELDS: dict[str, str] = {
    "name": "Name",
    "value": "Value",
    "culture_name": "CultureName",
    "resource_key": "ResourceKey",
}

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def export_json(records: Iterable[LocalizationRecord]) -> str:
    """Serialize records to a JSON array using camelCase field names."""
    payload = [record.model_dump(by_alias=True) for record in records]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def export_xml(records: Iterable[LocalizationRecord]) -> str:
    """Serialize records to an indented XML document (UTF-8, no BOM).

    Raises:
        ValueError: If a field holds a character XML 1.0 cannot represent
    """
    root = ET.Element(XML_ROOT_ELEMENT)
    for record in records:
        check_xml_record(record)
        element = ET.SubElement(root, XML_RECORD_ELEMENT)
        for field, tag in _XML_FIELDS.items():
            ET.SubElement(element, tag).text = getattr(record, field)

    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="utf-8"?>\n{body}\n'


def check_xml_record(record: LocalizationRecord) -> None:
    """Reject records that cannot be stored in an XML 1.0 document.

    Raises:
        ValueError: If any field contains a disallowed character
    """
    for field in _XML_FIELDS:
        match = _INVALID_XML_CHARS.search(getattr(record, field))
        if match:
            raise ValueError(
                f"Field '{field}' of '{record.resource_key}' contains "
                f"character U+{ord(match.group()):04X} not allowed in XML"
            )


def export_records(
    records: Iterable[LocalizationRecord], export_format: ExportFormat | str
) -> str:
    """Serialize records in the requested format."""
    if ExportFormat(export_format) is ExportFormat.XML:
        return export_xml(records)
    return export_json(records)


def parse_xml_records(text: str | bytes) -> list[LocalizationRecord]:
    """Parse records from the XML layout produced by ``export_xml``.

    Raises:
        ValueError: If the document is malformed or unsafe
    """
    try:
        root = DefusedET.fromstring(text)
    except (DefusedET.ParseError, DefusedXmlException) as e:
        raise ValueError(f"Invalid localization XML: {e}") from e

    if root.tag != XML_ROOT_ELEMENT:
        raise ValueError(
            f"Unexpected root element '{root.tag}', expected '{XML_ROOT_ELEMENT}'"
        )

    records = []
    for element in root.iter(XML_RECORD_ELEMENT):
        data: dict[str, Any] = {}
        for field, tag in _XML_FIELDS.items():
            child = element.find(tag)
            data[field] = (child.text or "") if child is not None else ""
        if not data["name"] or not data["resource_key"]:
            raise ValueError("Localization record is missing Name or ResourceKey")
        records.append(LocalizationRecord(**data))
    return records


def parse_json_pairs(text: str) -> list[tuple[str, str]]:
    """Parse a JSON object of ``{"name": "value"}`` pairs for bulk import.

    Raises:
        ValueError: If the document is not a JSON object of strings
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Import file must contain a JSON object of name/value pairs")
    return [(str(name), str(value)) for name, value in data.items()]
