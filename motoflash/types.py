"""Shared type definitions for motoflash.

This module contains enums and dataclasses shared across subpackages to
avoid circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from motoflash.config import Settings


class RunState(str, Enum):
    """State of a flashing run."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class DigestAlgorithm(str, Enum):
    """Digest algorithm used to check image files."""

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"


@dataclass(frozen=True)
class RunOptions:
    """Options that control how a flashing document is executed.

    Attributes:
        skip_integrity_check: Never hash files, even when a step names a digest.
        dry_run: Log commands instead of running them.
        verbose_logging: Dump the parsed document before the first step.
        tool: Name or path of the external flashing executable.
        digest_algorithm: Algorithm used for integrity checks.
        read_block_size: Read buffer size used while hashing.
    """

    skip_integrity_check: bool = False
    dry_run: bool = False
    verbose_logging: bool = False
    tool: str = "mfastboot"
    digest_algorithm: DigestAlgorithm = DigestAlgorithm.MD5
    read_block_size: int = 8192

    @classmethod
    def from_settings(cls, settings: Settings) -> RunOptions:
        """Build run options from application settings."""
        return cls(
            skip_integrity_check=settings.skip_integrity_check,
            dry_run=settings.dry_run,
            verbose_logging=settings.verbose_logging,
            tool=settings.tool,
            digest_algorithm=DigestAlgorithm(settings.digest_algorithm),
            read_block_size=settings.read_block_size,
        )


@dataclass
class RunResult:
    """Result of a completed flashing run.

    Attributes:
        state: Final run state.
        total_steps: Number of steps in the document.
        steps_executed: Number of steps that ran to completion.
        commands: Commands executed (or logged, in dry-run mode), in order.
        dry_run: Whether the run was a dry run.
    """

    state: RunState
    total_steps: int
    steps_executed: int
    commands: list[list[str]] = field(default_factory=list)
    dry_run: bool = False

    @property
    def success(self) -> bool:
        """Whether every step completed."""
        return self.state == RunState.COMPLETED


__all__ = [
    "DigestAlgorithm",
    "RunOptions",
    "RunResult",
    "RunState",
]
