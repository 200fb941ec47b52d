"""
CLI module - Command line interface for iPhone to Pixel

Entry point for the `iphone-to-pixel` command using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import AppConfig, load_config
from .exceptions import ConversionError, MissingToolsError
from .randomize import randomize_filenames
from .reporter import Reporter
from .runners import run_conversion, run_fix_dates
from .tools import INSTALL_HINTS, check_tools_status

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="iphone-to-pixel",
    help="iPhone to Pixel - Convert iOS media files for Pixel compatibility.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    if value:
        console.print(f"iphone-to-pixel version {__version__}")
        raise typer.Exit()


# Type aliases for common options
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config file", exists=True, dir_okay=False),
]
CwdOption = Annotated[
    Path | None,
    typer.Option("--cwd", "-c", help="The working directory. Defaults to the current directory."),
]
JsonlOption = Annotated[bool, typer.Option("--jsonl", help="Emit JSON lines for UI integration")]


def setup_logging(level: str) -> None:
    """Route library diagnostics to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_config_or_exit(config_path: Path | None) -> AppConfig:
    try:
        return load_config(config_path)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


def _prepare(config_path: Path | None, jsonl: bool) -> tuple[AppConfig, Reporter]:
    cfg = _load_config_or_exit(config_path)
    if jsonl:
        cfg.output.mode = "json"
    setup_logging(cfg.logging.level)
    return cfg, Reporter(cfg.output.mode)


def _report_failure(reporter: Reporter, error: ConversionError) -> None:
    reporter.blank()
    reporter.error(f"Error: {error}")
    if isinstance(error, MissingToolsError):
        reporter.info("Install missing tools:")
        for hint in sorted({INSTALL_HINTS[tool] for tool in error.missing if tool in INSTALL_HINTS}):
            reporter.info(f"  {hint}")


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version")
    ] = False,
):
    """iPhone to Pixel - Convert iOS media files for Pixel compatibility."""
    pass


@app.command()
def convert(
    paths: Annotated[list[str] | None, typer.Argument(help="Directory or files to convert")] = None,
    cwd: CwdOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="File mode only: write outputs here instead of next to each file"),
    ] = None,
    jsonl: JsonlOption = False,
    config: ConfigOption = None,
):
    """
    Convert iOS media files to a Pixel-compatible format.

    Photos are copied bit-for-bit, MOV/MP4/M4V are remuxed to MP4 without
    touching the video stream (HDR preserved), MPG/MPEG are transcoded to H.264.

    [bold]Examples:[/bold]

        iphone-to-pixel convert Part1              # -> Part1_Remuxed/

        iphone-to-pixel convert IMG_0002.MOV       # -> IMG_0002.mp4 next to it
    """
    cfg, reporter = _prepare(config, jsonl)

    try:
        summary = run_conversion(paths or ["Part1"], cwd=cwd, output=output, config=cfg, reporter=reporter)
    except ConversionError as e:
        _report_failure(reporter, e)
        raise typer.Exit(1) from None

    raise typer.Exit(summary.exit_code(cfg.processing.fail_on_error))


@app.command("fix-dates")
def fix_dates(
    paths: Annotated[list[str] | None, typer.Argument(help="Directories or files to fix")] = None,
    cwd: CwdOption = None,
    jsonl: JsonlOption = False,
    config: ConfigOption = None,
):
    """
    Recover/fix creation dates on media files (photos and videos).

    Uses existing metadata first, then Google Takeout JSON sidecars, then any
    other date tag left in the file. Directories are processed recursively.
    """
    cfg, reporter = _prepare(config, jsonl)

    try:
        summary = run_fix_dates(paths or ["."], cwd=cwd, config=cfg, reporter=reporter)
    except ConversionError as e:
        _report_failure(reporter, e)
        raise typer.Exit(1) from None

    raise typer.Exit(summary.exit_code(cfg.processing.fail_on_error))


@app.command()
def randomize(
    path: Annotated[Path, typer.Argument(help="Directory path to process")],
):
    """Randomize filenames to prevent collisions in Google Photos."""
    console.print(f"Renaming files in: {path}")
    try:
        count = randomize_filenames(path)
    except (ConversionError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    console.print(f"[green]Success.[/green] Randomized {count} files.")


@app.command()
def check(config: ConfigOption = None):
    """Check required tools and show their locations."""
    cfg = _load_config_or_exit(config)
    tools = check_tools_status(cfg.tools)

    table = Table(title="System Dependencies")
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Path", style="dim")

    for tool, path in tools.items():
        if path:
            table.add_row(tool, "[green]Available[/green]", str(path))
        else:
            table.add_row(tool, "[red]Missing[/red]", "-")

    console.print(table)

    missing = [t for t, p in tools.items() if p is None]
    if missing:
        console.print("\n[yellow]Warning:[/yellow] Some dependencies are missing.")
        for hint in sorted({INSTALL_HINTS[t] for t in missing}):
            console.print(f"  {hint}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
