"""Base exception for motoflash.

Every domain error carries a human-readable message and a stable error
code, so the CLI can render any failure without knowing its concrete type.
"""

# Error code constants
PATH_NOT_FOUND = "PATH_NOT_FOUND"
NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
NOT_A_FILE = "NOT_A_FILE"
NOT_READABLE = "NOT_READABLE"
INTEGRITY_MISMATCH = "INTEGRITY_MISMATCH"
PROCESS_LAUNCH_FAILED = "PROCESS_LAUNCH_FAILED"
PROCESS_EXECUTION_FAILED = "PROCESS_EXECUTION_FAILED"
MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
STEP_FAILED = "STEP_FAILED"


class MotoflashError(Exception):
    """Base exception for all motoflash errors."""

    def __init__(self, message: str, error_code: str) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code


__all__ = [
    "INTEGRITY_MISMATCH",
    "MALFORMED_DOCUMENT",
    "NOT_A_DIRECTORY",
    "NOT_A_FILE",
    "NOT_READABLE",
    "PATH_NOT_FOUND",
    "PROCESS_EXECUTION_FAILED",
    "PROCESS_LAUNCH_FAILED",
    "STEP_FAILED",
    "MotoflashError",
]
