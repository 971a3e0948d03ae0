"""Tests for document/io.py - loading flashing documents."""

import json
from pathlib import Path

import pytest

from motoflash.document.io import (
    MalformedDocumentError,
    load_document,
    parse_document_data,
    parse_document_string,
)
from motoflash.errors import MALFORMED_DOCUMENT
from motoflash.flash.guard import PathNotFoundError

SERVICEFILE = """<?xml version="1.0"?>
<flashing>
  <header>
    <phone_model model="falcon_umts"/>
    <software_version version="falcon_retgb-user 5.1 LPB23.13-56 31 release-keys"/>
    <sparsing enabled="true" max-sparse-size="268435456"/>
    <interfaces>
      <interface name="AP"/>
    </interfaces>
  </header>
  <steps interface="AP">
    <step operation="getvar" var="max-sparse-size"/>
    <step operation="oem" var="fb_mode_set"/>
    <step MD5="7a6c1c6c8e0d1a8b0b4f6f1c2c3d4e5f" filename="gpt.bin" operation="flash" partition="partition"/>
    <step operation="erase" partition="modemst1"/>
    <step operation="oem" var="fb_mode_clear"/>
  </steps>
</flashing>
"""


class TestParseDocumentString:
    """Tests for XML parsing."""

    def test_servicefile(self) -> None:
        """A Motorola servicefile parses completely."""
        document = parse_document_string(SERVICEFILE)

        header = document.header
        assert header is not None
        assert header.phone_model.model == "falcon_umts"
        assert header.software_version.version.startswith("falcon_retgb-user")
        assert header.sparsing.enabled is True
        assert header.sparsing.max_sparse_size == 268435456
        assert [i.name for i in header.interfaces] == ["AP"]

        assert document.steps.interface == "AP"
        assert document.step_count == 5
        flash = document.steps.entries[2]
        assert flash.operation == "flash"
        assert flash.partition == "partition"
        assert flash.filename == "gpt.bin"
        assert flash.expected_digest == "7A6C1C6C8E0D1A8B0B4F6F1C2C3D4E5F"

    def test_no_header(self) -> None:
        """The header block is optional."""
        document = parse_document_string(
            '<flashing><steps><step operation="reboot"/></steps></flashing>'
        )
        assert document.header is None
        assert document.step_count == 1

    def test_empty_steps(self) -> None:
        """An empty steps block is valid."""
        document = parse_document_string("<flashing><steps/></flashing>")
        assert document.step_count == 0

    def test_missing_steps(self) -> None:
        """A document without steps is malformed."""
        with pytest.raises(MalformedDocumentError):
            parse_document_string("<flashing><header/></flashing>")

    def test_step_without_operation(self) -> None:
        """A step without operation rejects the whole document."""
        with pytest.raises(MalformedDocumentError) as exc_info:
            parse_document_string(
                "<flashing><steps>"
                '<step operation="reboot"/><step partition="boot"/>'
                "</steps></flashing>"
            )
        assert exc_info.value.error_code == MALFORMED_DOCUMENT

    def test_wrong_root(self) -> None:
        """The root element must be <flashing>."""
        with pytest.raises(MalformedDocumentError) as exc_info:
            parse_document_string("<data><steps/></data>")
        assert "flashing" in exc_info.value.detail

    def test_not_xml(self) -> None:
        """Malformed XML is reported."""
        with pytest.raises(MalformedDocumentError):
            parse_document_string("<flashing><steps>")

    def test_unknown_elements_ignored(self) -> None:
        """Unknown elements and attributes are ignored."""
        document = parse_document_string(
            "<flashing><header><build_type value='user'/></header>"
            '<steps><step operation="reboot" extra="1"/><note/></steps></flashing>'
        )
        assert document.step_count == 1


class TestParseDocumentData:
    """Tests for parse_document_data."""

    def test_valid(self) -> None:
        """Plain data validates."""
        document = parse_document_data({"steps": {"step": [{"operation": "reboot"}]}})
        assert document.step_count == 1

    def test_invalid(self) -> None:
        """Invalid data raises MalformedDocumentError naming the source."""
        with pytest.raises(MalformedDocumentError) as exc_info:
            parse_document_data({}, source="flashfile.xml")
        assert exc_info.value.source == "flashfile.xml"


class TestLoadDocument:
    """Tests for load_document."""

    def test_xml(self, tmp_path: Path) -> None:
        """XML files load."""
        path = tmp_path / "servicefile.xml"
        path.write_text(SERVICEFILE, encoding="utf-8")
        assert load_document(path).step_count == 5

    def test_yaml(self, tmp_path: Path) -> None:
        """YAML files with the same structure load."""
        path = tmp_path / "servicefile.yaml"
        path.write_text(
            """
header:
  phone_model:
    model: falcon_umts
steps:
  interface: AP
  step:
    - operation: flash
      partition: boot
      filename: boot.img
      MD5: abcdef
    - operation: reboot
""",
            encoding="utf-8",
        )
        document = load_document(path)
        assert document.header.phone_model.model == "falcon_umts"
        assert document.steps.entries[0].expected_digest == "ABCDEF"
        assert document.steps.entries[1].operation == "reboot"

    def test_json(self, tmp_path: Path) -> None:
        """JSON files load."""
        path = tmp_path / "servicefile.json"
        path.write_text(
            json.dumps({"steps": {"step": [{"operation": "erase", "partition": "c"}]}}),
            encoding="utf-8",
        )
        assert load_document(path).steps.entries[0].partition == "c"

    def test_yaml_numeric_values(self, tmp_path: Path) -> None:
        """Numeric YAML scalars load as text."""
        path = tmp_path / "servicefile.yaml"
        path.write_text(
            "steps:\n  step:\n    - {operation: oem, partition: 0, var: 1}\n",
            encoding="utf-8",
        )
        step = load_document(path).steps.entries[0]
        assert step.partition == "0"
        assert step.var == "1"

    def test_digest_on_fileless_step(self, tmp_path: Path) -> None:
        """A digest a step never checks does not reject the document."""
        path = tmp_path / "servicefile.json"
        path.write_text(
            json.dumps(
                {
                    "steps": {
                        "step": [
                            {"operation": "erase", "partition": "cache", "MD5": ""},
                            {"operation": "erase", "partition": "misc", "MD5": "n/a"},
                        ]
                    }
                }
            ),
            encoding="utf-8",
        )
        assert load_document(path).step_count == 2

    def test_xml_encoding_declaration(self, tmp_path: Path) -> None:
        """XML bytes are decoded according to their declaration."""
        path = tmp_path / "servicefile.xml"
        text = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            '<flashing><steps><step operation="oem" var="café"/></steps></flashing>\n'
        )
        path.write_bytes(text.encode("iso-8859-1"))
        assert load_document(path).steps.entries[0].var == "café"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files fail the path check."""
        with pytest.raises(PathNotFoundError):
            load_document(tmp_path / "servicefile.xml")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        """Unknown extensions are rejected."""
        path = tmp_path / "servicefile.txt"
        path.write_text("steps: {}")
        with pytest.raises(MalformedDocumentError) as exc_info:
            load_document(path)
        assert "Unsupported file extension" in exc_info.value.detail

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """An empty YAML file has no steps block."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(MalformedDocumentError):
            load_document(path)

    def test_yaml_not_mapping(self, tmp_path: Path) -> None:
        """YAML lists are rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(MalformedDocumentError):
            load_document(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON is reported."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(MalformedDocumentError):
            load_document(path)

    def test_invalid_xml(self, tmp_path: Path) -> None:
        """Broken XML is reported."""
        path = tmp_path / "broken.xml"
        path.write_text("<flashing>")
        with pytest.raises(MalformedDocumentError):
            load_document(path)
