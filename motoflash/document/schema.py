"""Pydantic models for flashing documents.

A flashing document (servicefile.xml / flashfile.xml) describes the device
it targets in a header block and lists the flashing steps in the order they
must run. All models are frozen: once a document is parsed nothing in the
flashing engine can change it.

Field aliases follow the XML attribute names, so the same models validate
data produced from XML, YAML or JSON sources.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HEX_DIGEST_PATTERN = re.compile(r"^[0-9a-fA-F]+$")

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    populate_by_name=True,
    coerce_numbers_to_str=True,
)


class PhoneModel(BaseModel):
    """Target phone model (``<phone_model model="..."/>``)."""

    model_config = _MODEL_CONFIG

    model: str | None = Field(default=None, description="Phone model identifier")


class SoftwareVersion(BaseModel):
    """Firmware version (``<software_version version="..."/>``)."""

    model_config = _MODEL_CONFIG

    version: str | None = Field(default=None, description="Software version")


class Sparsing(BaseModel):
    """Sparse image settings.

    Attributes:
        enabled: Whether sparse images are used.
        max_sparse_size: Maximum sparse chunk size in bytes.
    """

    model_config = _MODEL_CONFIG

    enabled: bool = Field(default=False)
    max_sparse_size: int | None = Field(
        default=None, ge=0, alias="max-sparse-size", description="Bytes"
    )


class Interface(BaseModel):
    """Named logical interface (e.g. ``AP``, ``BP``)."""

    model_config = _MODEL_CONFIG

    name: str | None = Field(default=None)


class Header(BaseModel):
    """Descriptive document header.

    The header is never consulted when running steps; it only identifies
    the firmware package.
    """

    model_config = _MODEL_CONFIG

    phone_model: PhoneModel | None = Field(default=None)
    software_version: SoftwareVersion | None = Field(default=None)
    sparsing: Sparsing | None = Field(default=None)
    interfaces: tuple[Interface, ...] = Field(default=())


class Step(BaseModel):
    """A single flashing operation.

    Attributes:
        operation: Action passed to the flashing tool (flash, erase, getvar...).
        partition: Target partition name.
        filename: Image file, relative to the firmware directory.
        expected_digest: Expected hex digest of ``filename`` (XML ``MD5``).
            Ignored when the step has no filename.
        var: Trailing value argument.
    """

    model_config = _MODEL_CONFIG

    operation: str = Field(min_length=1, description="Flashing tool operation")
    partition: str | None = Field(default=None)
    filename: str | None = Field(default=None)
    expected_digest: str | None = Field(default=None, alias="MD5")
    var: str | None = Field(default=None)

    @field_validator("operation")
    @classmethod
    def validate_operation(cls, v: str) -> str:
        """Reject blank operations."""
        if not v.strip():
            raise ValueError("operation must be a non-empty string")
        return v

    @field_validator("expected_digest")
    @classmethod
    def normalize_expected_digest(cls, v: str | None) -> str | None:
        """Strip surrounding whitespace and normalize the digest to uppercase."""
        if v is None:
            return v
        return v.strip().upper()

    @model_validator(mode="after")
    def validate_expected_digest(self) -> "Step":
        """Require a hex digest on steps that name a file."""
        if self.checks_digest and not HEX_DIGEST_PATTERN.match(self.expected_digest):
            raise ValueError(f"MD5 must be a hex string, got '{self.expected_digest}'")
        return self

    @property
    def checks_digest(self) -> bool:
        """Whether this step carries a digest that applies to a file."""
        return self.filename is not None and self.expected_digest is not None


class StepList(BaseModel):
    """Ordered steps (``<steps interface="...">``).

    Attributes:
        interface: Descriptive interface tag.
        entries: Steps in execution order.
    """

    model_config = _MODEL_CONFIG

    interface: str | None = Field(default=None)
    entries: tuple[Step, ...] = Field(default=(), alias="step")


class FlashingDocument(BaseModel):
    """Root of a flashing document (``<flashing>``)."""

    model_config = _MODEL_CONFIG

    header: Header | None = Field(default=None)
    steps: StepList

    @property
    def step_count(self) -> int:
        """Number of steps in the document."""
        return len(self.steps.entries)


__all__ = [
    "FlashingDocument",
    "Header",
    "Interface",
    "PhoneModel",
    "SoftwareVersion",
    "Sparsing",
    "Step",
    "StepList",
]
