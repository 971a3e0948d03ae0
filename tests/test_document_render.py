"""Tests for document/render.py debug rendering."""

import json

import yaml

from motoflash.document.io import parse_document_string
from motoflash.document.render import (
    describe_step,
    document_to_data,
    document_to_json,
    document_to_yaml,
)
from motoflash.document.schema import Step

DOCUMENT = parse_document_string(
    "<flashing>"
    "<header><phone_model model='falcon'/>"
    "<sparsing enabled='true' max-sparse-size='1024'/>"
    "<interfaces><interface name='AP'/></interfaces></header>"
    "<steps interface='AP'>"
    "<step operation='flash' partition='boot' filename='boot.img' MD5='ab'/>"
    "<step operation='reboot'/>"
    "</steps></flashing>"
)


class TestDocumentToData:
    """Tests for document_to_data."""

    def test_uses_xml_names(self) -> None:
        """Dumped data uses the XML attribute names and omits missing values."""
        data = document_to_data(DOCUMENT)
        assert data["header"]["sparsing"] == {"enabled": True, "max-sparse-size": 1024}
        assert data["steps"]["step"][0]["MD5"] == "AB"
        assert data["steps"]["step"][1] == {"operation": "reboot"}
        assert "software_version" not in data["header"]


class TestDocumentToJson:
    """Tests for document_to_json."""

    def test_single_line(self) -> None:
        """Default rendering is one line of JSON."""
        text = document_to_json(DOCUMENT)
        assert "\n" not in text
        parsed = json.loads(text)
        assert parsed["flashing"]["header"]["phone_model"] == {"model": "falcon"}
        assert parsed["flashing"]["header"]["interfaces"] == [{"name": "AP"}]

    def test_indented(self) -> None:
        """Indented rendering parses back to the same data."""
        text = document_to_json(DOCUMENT, indent=2)
        assert "\n" in text
        assert json.loads(text) == json.loads(document_to_json(DOCUMENT))


class TestDocumentToYaml:
    """Tests for document_to_yaml."""

    def test_yaml(self) -> None:
        """YAML rendering parses back to the same data."""
        parsed = yaml.safe_load(document_to_yaml(DOCUMENT))
        assert parsed == {"flashing": document_to_data(DOCUMENT)}


class TestDescribeStep:
    """Tests for describe_step."""

    def test_describe(self) -> None:
        """Steps render as a single JSON object under 'step'."""
        text = describe_step(Step(operation="erase", partition="cache"))
        assert json.loads(text) == {
            "step": {"operation": "erase", "partition": "cache"}
        }
