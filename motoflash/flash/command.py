"""Flashing tool command composition.

Turns one step into the argument list for the flashing tool:

    <tool> <operation> [partition] [firmware_dir/filename] [var]

Arguments are passed to the subprocess as discrete tokens, never through a
shell, so no quoting is applied. format_command() quotes only for display.
"""

import shlex
from pathlib import Path

from motoflash.document.schema import Step

DEFAULT_TOOL = "mfastboot"


def step_file_path(step: Step, firmware_dir: Path) -> Path | None:
    """Return the absolute path of a step's file, or None if it has none."""
    if step.filename is None:
        return None
    return firmware_dir / step.filename


def build_command(
    step: Step,
    firmware_dir: Path,
    tool: str = DEFAULT_TOOL,
) -> list[str]:
    """Compose the flashing tool command for a step.

    Args:
        step: Step to translate.
        firmware_dir: Resolved firmware directory.
        tool: Flashing executable name or path.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    cmd = [tool, step.operation]

    if step.partition is not None:
        cmd.append(step.partition)

    file_path = step_file_path(step, firmware_dir)
    if file_path is not None:
        cmd.append(str(file_path))

    if step.var is not None:
        cmd.append(step.var)

    return cmd


def format_command(cmd: list[str]) -> str:
    """Render a command for display."""
    return shlex.join(cmd)


__all__ = ["DEFAULT_TOOL", "build_command", "format_command", "step_file_path"]
