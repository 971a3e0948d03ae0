"""Flashing document model and loaders.

This module handles:
- The read-only FlashingDocument model (header, interfaces, ordered steps)
- Loading documents from XML, YAML and JSON
- Debug rendering of parsed documents
"""

from motoflash.document.io import (
    MalformedDocumentError,
    load_document,
    parse_document_data,
    parse_document_string,
)
from motoflash.document.render import (
    describe_step,
    document_to_json,
    document_to_yaml,
)
from motoflash.document.schema import (
    FlashingDocument,
    Header,
    Interface,
    PhoneModel,
    SoftwareVersion,
    Sparsing,
    Step,
    StepList,
)

__all__ = [
    # Schema
    "FlashingDocument",
    "Header",
    "Interface",
    "PhoneModel",
    "SoftwareVersion",
    "Sparsing",
    "Step",
    "StepList",
    # Loading
    "MalformedDocumentError",
    "load_document",
    "parse_document_data",
    "parse_document_string",
    # Rendering
    "describe_step",
    "document_to_json",
    "document_to_yaml",
]
