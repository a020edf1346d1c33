"""sysdive CLI - Main entry point."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from sysdive import __version__

console = Console()
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


_console_handler: logging.Handler | None = None


def _setup_logging(level: str) -> None:
    """Configure console logging on stderr."""
    global _console_handler

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stderr)
        _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(_console_handler)


def run_scan(output: str | None, config_path: str | None, verbose: bool) -> None:
    """Acquire a snapshot, render it and write the report file."""
    from sysdive.collectors.gateway import acquire_snapshot
    from sysdive.config.loader import ConfigError, load_report_config
    from sysdive.errors import SysdiveError
    from sysdive.hardware.provider import LocalInfoProvider
    from sysdive.reporters.text_report import generate_report
    from sysdive.reporters.writer import write_report

    try:
        config = load_report_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    _setup_logging("DEBUG" if verbose else config.log_level)
    output_path = Path(output or config.output_file)

    console.print("[bold]Starting Deep Dive System Scan...[/bold]")
    console.print("  (This scans everything: USB, Audio, BIOS, Disks...)")
    console.print("  Please wait, this might take 10-15 seconds.")

    provider = LocalInfoProvider(command_timeout=config.command_timeout)
    try:
        snapshot = acquire_snapshot(provider, max_workers=config.max_workers)
        saved = write_report(generate_report(snapshot), output_path)
    except SysdiveError as e:
        logger.error(f"Error generating report: {e}")
        console.print(f"[red]Error generating report:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print("\n[bold green]DONE![/bold green]")
    console.print(f"Detailed report saved to: {escape(str(saved))}")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sysdive")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Report file path")
@click.option("--config", "config_path", type=click.Path(), help="YAML configuration file")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, output, config_path, verbose):
    """sysdive - full system diagnostic report.

    Scans hardware and OS details and writes them to full_pc_report.txt.
    """
    if ctx.invoked_subcommand is None:
        run_scan(output, config_path, verbose)
    else:
        ctx.obj = {"output": output, "config_path": config_path, "verbose": verbose}


@cli.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Report file path")
@click.pass_obj
def scan(obj, output):
    """Scan this machine and write the report."""
    obj = obj or {}
    run_scan(output or obj.get("output"), obj.get("config_path"), obj.get("verbose", False))


if __name__ == "__main__":
    cli()
