"""Thin CLI wrapper for motoflash.

This module provides the command-line interface using Typer.
All flashing logic is delegated to core modules.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from motoflash import __version__
from motoflash.config import Settings, get_settings, print_settings_json
from motoflash.errors import MotoflashError
from motoflash.types import RunOptions

FLASHFILE_NAME = "flashfile.xml"

app = typer.Typer(
    name="motoflash",
    help="motoflash - run Motorola flashing documents through mfastboot",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"motoflash version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def resolve_flashing_filename(
    settings: Settings, flash: bool, flashing_filename: str | None
) -> str:
    """Pick the flashing document name from the CLI flags.

    Raises:
        typer.BadParameter: Both --flash and --flashing-filename were given.
    """
    if flash and flashing_filename is not None:
        raise typer.BadParameter(
            "duplicate flashing filename: use either --flash or --flashing-filename"
        )
    if flash:
        return FLASHFILE_NAME
    return flashing_filename or settings.flashing_filename


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """motoflash - run Motorola flashing documents through mfastboot."""


@app.command()
def run(
    firmware_dir: Annotated[
        str,
        typer.Argument(help="Firmware directory with images and flashing documents"),
    ] = ".",
    flash: Annotated[
        bool,
        typer.Option("--flash", help=f'Use "{FLASHFILE_NAME}" as flashing document'),
    ] = False,
    flashing_filename: Annotated[
        str | None,
        typer.Option(
            "--flashing-filename",
            "-f",
            help="Flashing document name (default: servicefile.xml)",
        ),
    ] = None,
    test: Annotated[
        bool,
        typer.Option("--test", "-t", help="Log flashing commands without running them"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Dump the parsed flashing document"),
    ] = False,
    no_md5: Annotated[
        bool,
        typer.Option("--no-md5", help="Skip digest verification of image files"),
    ] = False,
    tool: Annotated[
        str | None,
        typer.Option("--tool", help="Flashing executable (default: mfastboot)"),
    ] = None,
) -> None:
    """Run every step of a flashing document, stopping at the first failure."""
    from motoflash.document.io import load_document
    from motoflash.document.render import describe_step
    from motoflash.flash.guard import ensure_directory
    from motoflash.flash.interpreter import StepFailedError, run_document

    settings = get_settings()
    configure_logging("DEBUG" if debug else settings.log_level)
    document_name = resolve_flashing_filename(settings, flash, flashing_filename)

    options = RunOptions.from_settings(settings)
    options = dataclasses.replace(
        options,
        skip_integrity_check=options.skip_integrity_check or no_md5,
        dry_run=options.dry_run or test,
        verbose_logging=options.verbose_logging or debug,
        tool=tool or options.tool,
    )

    try:
        firmware_path = ensure_directory(Path(firmware_dir))
        document = load_document(firmware_path / document_name)

        if options.dry_run:
            console.print("[blue]Test mode: flashing commands will not run[/blue]")

        result = run_document(document, firmware_path, options)
    except StepFailedError as e:
        console.print(f"[red]✗ Step {e.index}/{e.total} failed[/red]")
        console.print(f"  Step: {escape(describe_step(e.step))}", soft_wrap=True)
        console.print(f"  Error: {escape(e.detail)}", soft_wrap=True)
        raise typer.Exit(code=1) from None
    except MotoflashError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from None

    console.print(f"Ran {result.steps_executed} step(s)")
    console.print("[green]Success![/green]")


@app.command()
def show(
    firmware_dir: Annotated[
        str,
        typer.Argument(help="Firmware directory with flashing documents"),
    ] = ".",
    flash: Annotated[
        bool,
        typer.Option("--flash", help=f'Use "{FLASHFILE_NAME}" as flashing document'),
    ] = False,
    flashing_filename: Annotated[
        str | None,
        typer.Option("--flashing-filename", "-f", help="Flashing document name"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: json or yaml"),
    ] = "json",
) -> None:
    """Print a parsed flashing document."""
    from motoflash.document.io import load_document
    from motoflash.document.render import document_to_json, document_to_yaml
    from motoflash.flash.guard import ensure_directory

    settings = get_settings()
    configure_logging(settings.log_level)
    document_name = resolve_flashing_filename(settings, flash, flashing_filename)

    if output_format not in ("json", "yaml"):
        console.print(f"[red]Invalid format: {escape(output_format)}[/red]")
        console.print("Valid values: json, yaml")
        raise typer.Exit(code=1)

    try:
        firmware_path = ensure_directory(Path(firmware_dir))
        document = load_document(firmware_path / document_name)
    except MotoflashError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from None

    if output_format == "yaml":
        text = document_to_yaml(document)
    else:
        text = document_to_json(document, indent=2)
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings), markup=False, soft_wrap=True)
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Flashing:[/bold]")
        console.print(f"  Tool:                {settings.tool}")
        console.print(f"  Flashing document:   {settings.flashing_filename}")
        console.print()
        console.print("[bold]Verification:[/bold]")
        console.print(f"  Digest algorithm:    {settings.digest_algorithm}")
        console.print(f"  Read block size:     {settings.read_block_size}")
        console.print(f"  Skip integrity:      {settings.skip_integrity_check}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Dry run:             {settings.dry_run}")
        console.print(f"  Verbose logging:     {settings.verbose_logging}")
        console.print(f"  Log level:           {settings.log_level}")


if __name__ == "__main__":
    app()
