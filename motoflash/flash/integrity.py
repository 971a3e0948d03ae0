"""Image integrity checks.

Image files are streamed through a hashlib digest with a fixed-size read
buffer, so images of any size can be checked without loading them into
memory. Digests are compared as uppercase hex.
"""

import hashlib
import logging
from pathlib import Path

from motoflash.errors import INTEGRITY_MISMATCH, MotoflashError
from motoflash.types import DigestAlgorithm

logger = logging.getLogger(__name__)

# Default read buffer for hashing (8 KiB)
DEFAULT_BLOCK_SIZE = 8192


class IntegrityMismatchError(MotoflashError):
    """Computed digest does not match the expected digest."""

    def __init__(self, filename: str, expected: str, actual: str) -> None:
        super().__init__(
            f'Expected digest "{expected}" but got "{actual}" for file "{filename}"',
            error_code=INTEGRITY_MISMATCH,
        )
        self.filename = filename
        self.expected = expected
        self.actual = actual


def compute_digest(
    file_path: str | Path,
    algorithm: DigestAlgorithm = DigestAlgorithm.MD5,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> str:
    """Compute the digest of a file.

    Args:
        file_path: Path to the file to hash.
        algorithm: Digest algorithm.
        block_size: Read buffer size.

    Returns:
        Uppercase hex digest.
    """
    hasher = hashlib.new(DigestAlgorithm(algorithm).value)

    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(block_size)
            if not chunk:
                break
            hasher.update(chunk)

    return hasher.hexdigest().upper()


def verify_digest(
    file_path: str | Path,
    expected: str,
    *,
    algorithm: DigestAlgorithm = DigestAlgorithm.MD5,
    block_size: int = DEFAULT_BLOCK_SIZE,
    display_name: str | None = None,
) -> str:
    """Check a file against its expected digest.

    Args:
        file_path: Path to the file to check.
        expected: Expected hex digest (any case).
        algorithm: Digest algorithm.
        block_size: Read buffer size.
        display_name: Name used in the error (defaults to the path).

    Returns:
        The computed digest.

    Raises:
        IntegrityMismatchError: Digests differ.
    """
    expected = expected.strip().upper()
    logger.info("..checking %s", algorithm.value.upper())
    actual = compute_digest(file_path, algorithm=algorithm, block_size=block_size)

    if actual != expected:
        logger.error(
            "Digest mismatch for %s: expected=%s, got=%s", file_path, expected, actual
        )
        raise IntegrityMismatchError(display_name or str(file_path), expected, actual)

    logger.debug("Digest OK: %s", actual)
    return actual


__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "IntegrityMismatchError",
    "compute_digest",
    "verify_digest",
]
