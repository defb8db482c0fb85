"""CLI entry point for pii-scanner.

Invoked as::

    pii-scan [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m pii_scanner.cli.main

Commands
--------
- scan        Scan a directory and report the riskiest files
- detect      Detect PII in a string or a single file
- check-path  Run the path security guards on a path
- exposure    Show the exposure classification of a file
- categories  List the registered detection categories
- version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pii_scanner.detection.registry import ALL_JURISDICTIONS, PatternRegistry

console = Console()
err_console = Console(stderr=True)

_LEVEL_STYLES: dict[str, str] = {
    "Faible": "green",
    "Moyen": "yellow",
    "Critique": "red",
    "FAIBLE": "green",
    "MOYEN": "yellow",
    "ÉLEVÉ": "red",
}


def _styled(label: str) -> str:
    style = _LEVEL_STYLES.get(label, "white")
    return f"[{style}]{label}[/{style}]"


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="pii-scanner")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """PII Scanner command line interface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from pii_scanner import __version__

    console.print(
        Panel(
            f"[bold]pii-scanner[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Personal data discovery for the Benin data protection context.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------


@cli.command(name="scan")
@click.argument("directory")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(),
    help="Path to a scanner YAML config.",
)
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1), help="Worker threads.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.option("--top", default=20, show_default=True, type=int, help="Number of risky files to show.")
def scan_command(directory: str, config_path: str | None, workers: int | None, as_json: bool, top: int) -> None:
    """Scan DIRECTORY for personal data."""
    from pii_scanner.config.loader import ConfigLoader, ScannerConfigError
    from pii_scanner.scanner.directory_scanner import DirectoryScanner, ScanPathRejectedError

    loader = ConfigLoader()
    try:
        config = loader.load(Path(config_path)) if config_path else loader.defaults()
    except (FileNotFoundError, ScannerConfigError) as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    scanner = DirectoryScanner(config=config, max_workers=workers)
    try:
        report = scanner.scan(directory)
    except ScanPathRejectedError as exc:
        err_console.print(f"[red]Rejected:[/red] {exc.reason}")
        sys.exit(1)

    stats = report.statistics(top_n=top, language=config.exposure.warning_language)

    if as_json:
        payload = {"report": report.to_dict(), "statistics": stats.to_dict()}
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    console.print(
        Panel(
            f"Files scanned: [cyan]{report.files_scanned}[/cyan]  "
            f"Skipped: [cyan]{report.files_skipped}[/cyan]  "
            f"Errors: [cyan]{report.errors}[/cyan]\n"
            f"Files with PII: [cyan]{stats.files_with_pii}[/cyan]  "
            f"Total PII: [bold cyan]{stats.total_pii_found}[/bold cyan]",
            title=f"Scan of {report.directory}",
            border_style="blue",
        )
    )

    if not stats.total_pii_found:
        console.print("[green]No personal data found.[/green]")
        return

    type_table = Table(title="PII by Type", box=box.SIMPLE)
    type_table.add_column("Category", style="cyan")
    type_table.add_column("Count", justify="right")
    for category, count in stats.pii_by_type.items():
        type_table.add_row(category, str(count))
    console.print(type_table)

    file_table = Table(title=f"Top {len(stats.top_risky_files)} Risky Files", box=box.SIMPLE)
    file_table.add_column("File", style="cyan")
    file_table.add_column("PII", justify="right")
    file_table.add_column("Risk")
    file_table.add_column("Exposure")
    file_table.add_column("Staleness", style="dim")
    for info in stats.top_risky_files:
        file_table.add_row(
            info.file_path,
            str(info.pii_count),
            _styled(info.risk_level.label),
            _styled(info.exposure_level),
            info.staleness.label,
        )
    console.print(file_table)

    for info in stats.top_risky_files:
        if info.exposure_warning:
            console.print(f"  [red]![/red] {info.file_path}: {info.exposure_warning}")


# ---------------------------------------------------------------------------
# detect
# ---------------------------------------------------------------------------


@cli.command(name="detect")
@click.argument("text_or_file")
@click.option("--file", "-f", "is_file", is_flag=True, default=False, help="Treat the argument as a file path.")
@click.option(
    "--jurisdiction",
    "-j",
    "jurisdictions",
    multiple=True,
    type=click.Choice(list(ALL_JURISDICTIONS)),
    help="Pattern sets to use (repeatable). Defaults to all.",
)
def detect_command(text_or_file: str, is_file: bool, jurisdictions: tuple[str, ...]) -> None:
    """Detect PII in TEXT_OR_FILE."""
    from pii_scanner.detection.pii_detector import PiiDetector
    from pii_scanner.security.path_validator import validate_file_path

    file_path = "<text>"
    content = text_or_file
    if is_file:
        result = validate_file_path(text_or_file)
        if not result.ok or result.path is None:
            err_console.print(f"[red]Rejected:[/red] {result.error_message}")
            sys.exit(1)
        file_path = result.path
        content = Path(file_path).read_text(encoding="utf-8", errors="replace")

    registry = PatternRegistry.from_jurisdictions(list(jurisdictions) or None)
    detections = PiiDetector(registry).detect(content, file_path)

    if not detections:
        console.print("[green]No personal data found.[/green]")
        return

    table = Table(title=f"{len(detections)} Detection(s)", box=box.SIMPLE)
    table.add_column("Category", style="cyan")
    table.add_column("Match", style="magenta")
    table.add_column("Span", style="dim")
    for detection in detections:
        table.add_row(detection.category, detection.matched_text, f"{detection.start}-{detection.end}")
    console.print(table)


# ---------------------------------------------------------------------------
# check-path
# ---------------------------------------------------------------------------


@cli.command(name="check-path")
@click.argument("path")
@click.option("--base", "-b", default=None, help="Resolve PATH under this base directory.")
@click.option("--file", "-f", "is_file", is_flag=True, default=False, help="Validate PATH as a file path.")
def check_path_command(path: str, base: str | None, is_file: bool) -> None:
    """Run the path security guards on PATH."""
    from pii_scanner.security.path_validator import (
        get_safe_absolute_path,
        validate_directory_path,
        validate_file_path,
    )

    if base is not None:
        result = get_safe_absolute_path(path, base)
    elif is_file:
        result = validate_file_path(path, must_exist=False)
    else:
        result = validate_directory_path(path, must_exist=False)

    if result.ok:
        console.print(f"[green]ACCEPTED[/green] {result.path}")
        sys.exit(0)
    console.print(f"[red]REJECTED[/red] {result.error_message}")
    sys.exit(1)


# ---------------------------------------------------------------------------
# exposure
# ---------------------------------------------------------------------------


@cli.command(name="exposure")
@click.argument("path")
@click.option("--pii-count", "-n", default=1, show_default=True, type=int, help="PII count used in the warning.")
@click.option(
    "--language",
    "-l",
    type=click.Choice(["en", "fr"]),
    default="en",
    show_default=True,
    help="Warning language.",
)
def exposure_command(path: str, pii_count: int, language: str) -> None:
    """Show the exposure classification of PATH."""
    from pii_scanner.exposure.permissions import analyze_permissions
    from pii_scanner.security.path_validator import validate_file_path

    result = validate_file_path(path)
    if not result.ok or result.path is None:
        err_console.print(f"[red]Rejected:[/red] {result.error_message}")
        sys.exit(1)

    info = analyze_permissions(result.path).with_warning(pii_count, language=language)

    table = Table(title="Exposure", box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Level", _styled(info.exposure_level.label))
    table.add_row("Everyone", str(info.accessible_to_everyone))
    table.add_row("Authenticated users", str(info.accessible_to_authenticated_users))
    table.add_row("Network share", str(info.is_network_share))
    table.add_row("Identities", str(info.group_count))
    console.print(table)
    if info.warning:
        console.print(f"  {info.warning}")


# ---------------------------------------------------------------------------
# categories
# ---------------------------------------------------------------------------


@cli.command(name="categories")
@click.option(
    "--jurisdiction",
    "-j",
    "jurisdiction",
    type=click.Choice(list(ALL_JURISDICTIONS)),
    default=None,
    help="Only list this pattern set.",
)
def categories_command(jurisdiction: str | None) -> None:
    """List the registered detection categories."""
    registry = PatternRegistry.from_jurisdictions([jurisdiction] if jurisdiction else None)

    table = Table(title="Detection Categories", box=box.SIMPLE)
    table.add_column("Category", style="cyan")
    table.add_column("Jurisdiction", style="magenta")
    table.add_column("Validated")
    for rule in registry:
        table.add_row(rule.category, rule.jurisdiction, "yes" if rule.validator else "no")
    console.print(table)
    console.print(f"  Total categories: [cyan]{len(registry)}[/cyan]")


if __name__ == "__main__":
    cli()
