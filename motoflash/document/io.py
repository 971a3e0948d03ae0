"""Flashing document loading.

This module reads flashing documents from disk into the read-only
FlashingDocument model. XML is the native Motorola format; YAML and JSON
files with the same structure are accepted as well:

    header:
      phone_model: {model: falcon_umts}
      interfaces: [{name: AP}]
    steps:
      interface: AP
      step:
        - {operation: flash, partition: boot, filename: boot.img, MD5: ...}

Every parse or validation failure is reported as MalformedDocumentError,
before any step runs.
"""

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from motoflash.document.schema import FlashingDocument
from motoflash.errors import MALFORMED_DOCUMENT, MotoflashError
from motoflash.flash.guard import ensure_file

logger = logging.getLogger(__name__)

ROOT_TAG = "flashing"
XML_SUFFIXES = (".xml",)
YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


class MalformedDocumentError(MotoflashError):
    """Flashing document could not be parsed or is structurally invalid."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(
            f"Malformed flashing document {source}: {detail}",
            error_code=MALFORMED_DOCUMENT,
        )
        self.source = source
        self.detail = detail


def _attributes(element: ET.Element | None) -> dict[str, str] | None:
    """Return a copy of an element's attributes, or None if it is absent."""
    if element is None:
        return None
    return dict(element.attrib)


def _header_to_data(header: ET.Element) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for tag in ("phone_model", "software_version", "sparsing"):
        attrs = _attributes(header.find(tag))
        if attrs is not None:
            data[tag] = attrs

    interfaces = header.find("interfaces")
    if interfaces is not None:
        data["interfaces"] = [dict(i.attrib) for i in interfaces.findall("interface")]
    return data


def xml_to_data(root: ET.Element) -> dict[str, Any]:
    """Convert a parsed ``<flashing>`` element tree to plain data.

    Args:
        root: Root element of the document.

    Returns:
        Dictionary suitable for FlashingDocument validation.

    Raises:
        ValueError: If the root element is not ``<flashing>``.
    """
    if root.tag != ROOT_TAG:
        raise ValueError(f"Expected root element <{ROOT_TAG}>, got <{root.tag}>")

    data: dict[str, Any] = {}

    header = root.find("header")
    if header is not None:
        data["header"] = _header_to_data(header)

    steps = root.find("steps")
    if steps is not None:
        step_data: dict[str, Any] = dict(steps.attrib)
        step_data["step"] = [dict(s.attrib) for s in steps.findall("step")]
        data["steps"] = step_data

    return data


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the content is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data


def load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file and return its contents as a dict.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the content is not an object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_document_data(
    data: dict[str, Any], source: str = "<data>"
) -> FlashingDocument:
    """Validate plain data as a flashing document.

    Args:
        data: Dictionary containing document data.
        source: Name used in error messages.

    Returns:
        Validated, read-only FlashingDocument.

    Raises:
        MalformedDocumentError: If data does not match the schema.
    """
    try:
        return FlashingDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentError(source, str(e)) from e


def parse_document_string(
    text: str | bytes, source: str = "<string>"
) -> FlashingDocument:
    """Parse an XML flashing document held in memory.

    Bytes are decoded according to the XML declaration.

    Raises:
        MalformedDocumentError: If the text is not a valid flashing document.
    """
    try:
        data = xml_to_data(ET.fromstring(text))
    except (ET.ParseError, ValueError) as e:
        logger.error("Failed to parse %s: %s", source, e)
        raise MalformedDocumentError(source, str(e)) from e
    return parse_document_data(data, source)


def load_document(path: str | Path) -> FlashingDocument:
    """Load and validate a flashing document from a file.

    File format is determined by extension (.xml for XML, .yaml/.yml for
    YAML, .json for JSON).

    Args:
        path: Path to the flashing document.

    Returns:
        Validated, read-only FlashingDocument.

    Raises:
        PathGuardError: If the file is missing, not a file, or unreadable.
        MalformedDocumentError: If the file cannot be parsed or validated.
    """
    path = ensure_file(Path(path))
    suffix = path.suffix.lower()
    source = str(path)

    if suffix in XML_SUFFIXES:
        document = parse_document_string(path.read_bytes(), source)
    else:
        try:
            if suffix in YAML_SUFFIXES:
                data = load_yaml(path)
            elif suffix in JSON_SUFFIXES:
                data = load_json(path)
            else:
                raise ValueError(
                    f"Unsupported file extension '{suffix}'. "
                    "Use .xml, .yaml, .yml, or .json"
                )
        except (yaml.YAMLError, json.JSONDecodeError, ValueError) as e:
            logger.error("Failed to parse %s: %s", path, e)
            raise MalformedDocumentError(source, str(e)) from e
        document = parse_document_data(data, source)
    logger.debug("Loaded %s with %d step(s)", path.name, document.step_count)
    return document


__all__ = [
    "MalformedDocumentError",
    "load_document",
    "load_json",
    "load_yaml",
    "parse_document_data",
    "parse_document_string",
    "xml_to_data",
]
