"""Step interpreter for flashing documents.

Walks a flashing document's steps in document order. For each step:
1. Validate the step's file, if any
2. Verify the file digest, if the step names one and checks are enabled
3. Compose the flashing tool command
4. Run the command and wait for it to exit

Later steps depend on device state left by earlier ones (a partition must
be unlocked before it is flashed), so steps never run out of order or in
parallel. The first failure aborts the run; there is no retry or skip.
"""

import logging
from pathlib import Path

from motoflash.document.render import describe_step, document_to_json
from motoflash.document.schema import FlashingDocument, Step
from motoflash.errors import STEP_FAILED, MotoflashError
from motoflash.flash.command import build_command, step_file_path
from motoflash.flash.guard import ensure_directory, ensure_file
from motoflash.flash.integrity import verify_digest
from motoflash.flash.process import run_command
from motoflash.types import RunOptions, RunResult, RunState

logger = logging.getLogger(__name__)


class StepFailedError(MotoflashError):
    """A step failed and the run was aborted.

    Attributes:
        index: 1-based position of the failed step.
        total: Number of steps in the document.
        step: The failed step.
        error: Underlying error (also set as ``__cause__``).
        detail: Message of the underlying error.
    """

    def __init__(self, index: int, total: int, step: Step, error: Exception) -> None:
        detail = error.message if isinstance(error, MotoflashError) else str(error)
        super().__init__(
            f"Step {index}/{total} failed: {describe_step(step)}: {detail}",
            error_code=STEP_FAILED,
        )
        self.index = index
        self.total = total
        self.step = step
        self.error = error
        self.detail = detail


class StepInterpreter:
    """Runs the steps of a flashing document against a firmware directory.

    The firmware directory is validated on construction and used as the
    working directory of every flashing command.
    """

    def __init__(
        self,
        firmware_dir: str | Path,
        options: RunOptions | None = None,
    ) -> None:
        self.firmware_dir = ensure_directory(firmware_dir)
        self.options = options or RunOptions()
        self.state = RunState.PENDING
        self.cursor = 0

    def run(self, document: FlashingDocument) -> RunResult:
        """Run every step of a document in order.

        Args:
            document: Parsed flashing document.

        Returns:
            RunResult for a completed run.

        Raises:
            StepFailedError: A step failed; the run is aborted.
        """
        steps = document.steps.entries
        total = len(steps)
        commands: list[list[str]] = []

        self.state = RunState.PENDING
        self.cursor = 0

        if self.options.verbose_logging:
            logger.info("Flashing document: %s", document_to_json(document))

        logger.info(
            "Running %d step(s) from %s%s",
            total,
            self.firmware_dir,
            " (dry run)" if self.options.dry_run else "",
        )

        for index, step in enumerate(steps, start=1):
            self.cursor = index - 1
            self.state = RunState.RUNNING
            logger.info("Running step %d/%d: %s", index, total, describe_step(step))

            try:
                cmd = self.run_step(step)
            except (MotoflashError, OSError) as e:
                self.state = RunState.ABORTED
                logger.error("Aborting run at step %d/%d", index, total)
                raise StepFailedError(index, total, step, e) from e

            commands.append(cmd)

        self.cursor = total
        self.state = RunState.COMPLETED
        logger.info("Completed %d step(s)", total)

        return RunResult(
            state=self.state,
            total_steps=total,
            steps_executed=total,
            commands=commands,
            dry_run=self.options.dry_run,
        )

    def run_step(self, step: Step) -> list[str]:
        """Validate, verify and run a single step.

        Returns:
            The command that was run.
        """
        file_path = step_file_path(step, self.firmware_dir)

        if file_path is not None:
            ensure_file(file_path)
            if step.expected_digest is not None:
                if self.options.skip_integrity_check:
                    logger.debug("Skipping digest check for %s", step.filename)
                else:
                    verify_digest(
                        file_path,
                        step.expected_digest,
                        algorithm=self.options.digest_algorithm,
                        block_size=self.options.read_block_size,
                        display_name=step.filename,
                    )

        cmd = build_command(step, self.firmware_dir, tool=self.options.tool)
        run_command(cmd, self.firmware_dir, dry_run=self.options.dry_run)
        return cmd


def run_document(
    document: FlashingDocument,
    firmware_dir: str | Path,
    options: RunOptions | None = None,
) -> RunResult:
    """Run a flashing document with a fresh interpreter."""
    return StepInterpreter(firmware_dir, options).run(document)


__all__ = ["StepFailedError", "StepInterpreter", "run_document"]
