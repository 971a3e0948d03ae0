"""Flashing tool execution.

Runs a composed command as a child process in the firmware directory with
stdin, stdout and stderr inherited, so the tool can talk to the user
directly. Calls block until the tool exits; there is no timeout because the
tool may be waiting on the device.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from motoflash.errors import (
    PROCESS_EXECUTION_FAILED,
    PROCESS_LAUNCH_FAILED,
    MotoflashError,
)
from motoflash.flash.command import format_command

logger = logging.getLogger(__name__)


class ProcessLaunchError(MotoflashError):
    """The flashing tool could not be started."""

    def __init__(self, command: list[str], reason: str) -> None:
        super().__init__(
            f"Failed to start {command[0]}: {reason}",
            error_code=PROCESS_LAUNCH_FAILED,
        )
        self.command = command
        self.reason = reason


class ProcessExecutionError(MotoflashError):
    """The flashing tool ran and exited with a non-zero status."""

    def __init__(self, command: list[str], exit_code: int) -> None:
        super().__init__(
            f"{command[0]} failed with exit code {exit_code}",
            error_code=PROCESS_EXECUTION_FAILED,
        )
        self.command = command
        self.exit_code = exit_code


@dataclass
class ProcessResult:
    """Result of running one command.

    Attributes:
        command: The command that was executed.
        exit_code: Process exit code (0 for dry runs).
        dry_run: Whether the command was only logged.
    """

    command: list[str]
    exit_code: int
    dry_run: bool = False


def run_command(
    cmd: list[str],
    cwd: Path,
    *,
    dry_run: bool = False,
) -> ProcessResult:
    """Run a flashing command to completion.

    Args:
        cmd: Command as list of strings.
        cwd: Working directory, already validated.
        dry_run: If True, log the command without running it.

    Returns:
        ProcessResult with the exit code.

    Raises:
        ProcessLaunchError: The executable could not be started or an
            argument cannot be passed to it.
        ProcessExecutionError: The executable exited non-zero.
    """
    logger.info("..Shell: %s", format_command(cmd))

    if dry_run:
        return ProcessResult(command=cmd, exit_code=0, dry_run=True)

    try:
        result = subprocess.run(cmd, cwd=cwd, check=False)
    except (OSError, ValueError) as e:
        logger.error("Failed to start %s: %s", cmd[0], e)
        raise ProcessLaunchError(cmd, str(e)) from e

    if result.returncode != 0:
        logger.error("Command exited with code %d", result.returncode)
        raise ProcessExecutionError(cmd, result.returncode)

    logger.info("..OK")
    return ProcessResult(command=cmd, exit_code=result.returncode)


__all__ = [
    "ProcessExecutionError",
    "ProcessLaunchError",
    "ProcessResult",
    "run_command",
]
