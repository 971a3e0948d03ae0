"""Debug rendering of flashing documents.

Formatting only: nothing here is used to decide how a step runs.
"""

import json
from typing import Any

import yaml

from motoflash.document.schema import FlashingDocument, Step


def document_to_data(document: FlashingDocument) -> dict[str, Any]:
    """Dump a document to plain data using the XML attribute names."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def document_to_json(document: FlashingDocument, indent: int | None = None) -> str:
    """Render a document as JSON.

    Args:
        document: Document to render.
        indent: Indentation; None renders a single line.

    Returns:
        JSON string wrapped in a ``flashing`` key.
    """
    return json.dumps({"flashing": document_to_data(document)}, indent=indent)


def document_to_yaml(document: FlashingDocument) -> str:
    """Render a document as YAML."""
    result: str = yaml.dump(
        {"flashing": document_to_data(document)},
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return result


def describe_step(step: Step) -> str:
    """Describe a step on a single line for logs and error messages."""
    data = step.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps({"step": data})


__all__ = [
    "describe_step",
    "document_to_data",
    "document_to_json",
    "document_to_yaml",
]
