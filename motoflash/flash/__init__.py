"""Flashing step execution.

This module handles:
- Firmware directory and image file validation
- Image digest verification
- Flashing tool command composition
- Flashing tool execution (with dry-run support)
- Ordered, fail-fast interpretation of flashing documents
"""

from motoflash.flash.command import (
    DEFAULT_TOOL,
    build_command,
    format_command,
    step_file_path,
)
from motoflash.flash.guard import (
    NotADirectoryPathError,
    NotAFilePathError,
    NotReadableError,
    PathGuardError,
    PathNotFoundError,
    ensure_directory,
    ensure_file,
)
from motoflash.flash.integrity import (
    IntegrityMismatchError,
    compute_digest,
    verify_digest,
)
from motoflash.flash.interpreter import (
    StepFailedError,
    StepInterpreter,
    run_document,
)
from motoflash.flash.process import (
    ProcessExecutionError,
    ProcessLaunchError,
    ProcessResult,
    run_command,
)

__all__ = [
    # Guard
    "NotADirectoryPathError",
    "NotAFilePathError",
    "NotReadableError",
    "PathGuardError",
    "PathNotFoundError",
    "ensure_directory",
    "ensure_file",
    # Integrity
    "IntegrityMismatchError",
    "compute_digest",
    "verify_digest",
    # Command
    "DEFAULT_TOOL",
    "build_command",
    "format_command",
    "step_file_path",
    # Process
    "ProcessExecutionError",
    "ProcessLaunchError",
    "ProcessResult",
    "run_command",
    # Interpreter
    "StepFailedError",
    "StepInterpreter",
    "run_document",
]
