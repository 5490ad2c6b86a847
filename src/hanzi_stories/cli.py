"""Hanzi Stories CLI - typer application entry point."""

from __future__ import annotations

import atexit
import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hanzi_stories.config import AuditConfig, AuditConfigError, load_audit_config
from hanzi_stories.frequency import (
    FrequencyListError,
    find_missing_characters,
    load_frequency_list,
)
from hanzi_stories.observability import close_file_logging, configure_logging, get_logs_dir
from hanzi_stories.outline import OutlineLoadError, OutlineNode, load_opml
from hanzi_stories.stories import (
    AuditReport,
    MissingAnchorError,
    audit_stories,
    load_all_entries,
)

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="hanzi",
    help="Hanzi Stories: audit and inspect the hanzi mnemonic story outline.",
    no_args_is_help=True,
)
console = Console()

# Global state set by the callback, used by commands
_verbose: int = 0
_config_path: Path | None = None


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            help="Also write structured logs to {log_dir}/audit.jsonl.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (default: ./hanzi-stories.yaml if present).",
            envvar="HANZI_STORIES_CONFIG",
        ),
    ] = None,
) -> None:
    """Hanzi Stories: audit and inspect the hanzi mnemonic story outline."""
    global _verbose, _config_path
    _verbose = verbose
    _config_path = config

    configure_logging(verbosity=verbose, log_dir=log_dir)
    if log_dir is not None:
        atexit.register(close_file_logging)


def _load_config() -> AuditConfig:
    """Load config and enable file logging from its log_dir unless --log-dir was given."""
    try:
        config = load_audit_config(_config_path)
    except AuditConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if config.log_dir is not None and get_logs_dir() is None:
        configure_logging(verbosity=_verbose, log_dir=config.log_dir)
        atexit.register(close_file_logging)
    return config


def _load_outline(stories: Path | None, config: AuditConfig) -> OutlineNode:
    path = stories or config.stories_path
    try:
        return load_opml(path)
    except OutlineLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


def _print_report(report: AuditReport) -> None:
    for violation in report.violations:
        console.print(f"  [red]✗[/red] {escape(violation.format())}")
    if report.violations:
        console.print()

    if report.passed:
        console.print(f"[green]✓[/green] {report.summary}")
    elif report.has_failures:
        console.print(f"[red]✗[/red] {report.summary}")
    else:
        console.print(f"[yellow]![/yellow] {report.summary}")


StoriesArgument = Annotated[
    Path | None,
    typer.Argument(help="OPML export of the stories outline (default from config)."),
]


@app.command()
def version() -> None:
    """Show version information."""
    from hanzi_stories import __version__

    console.print(f"Hanzi Stories v{__version__}")


@app.command()
def audit(stories: StoriesArgument = None) -> None:
    """Check every story entry against the outline rules."""
    config = _load_config()
    root = _load_outline(stories, config)

    report = AuditReport()
    try:
        audit_stories(root, report)
    except MissingAnchorError:
        _print_report(report)
        raise typer.Exit(1) from None

    _print_report(report)
    if report.has_failures:
        raise typer.Exit(1)


@app.command()
def roster(
    stories: StoriesArgument = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the roster as JSON."),
    ] = False,
) -> None:
    """List every character in the outline with its path and translation."""
    config = _load_config()
    entries = load_all_entries(_load_outline(stories, config))

    if as_json:
        data = [asdict(entry) for entry in entries]
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    table = Table(title=f"Hanzi roster ({len(entries)} characters)")
    table.add_column("Hanzi", style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Translation")
    for entry in entries:
        table.add_row(escape(entry.character), escape(entry.path), escape(entry.translation))
    console.print(table)


@app.command()
def missing(
    frequency_max: Annotated[
        int | None,
        typer.Argument(help="Check characters up to this frequency rank (1-9000)."),
    ] = None,
    stories: Annotated[
        Path | None,
        typer.Option("--stories", "-s", help="OPML export of the stories outline."),
    ] = None,
    frequency: Annotated[
        Path | None,
        typer.Option("--frequency", "-f", help="JSON frequency list."),
    ] = None,
) -> None:
    """List frequent characters that have no story yet."""
    config = _load_config()
    limit = frequency_max if frequency_max is not None else config.frequency_max
    if limit is None:
        console.print("[red]Error:[/red] Provide a frequency rank limit (1-9000).")
        raise typer.Exit(1)

    entries = load_all_entries(_load_outline(stories, config))
    try:
        frequencies = load_frequency_list(frequency or config.frequency_path)
        missing_entries = find_missing_characters(entries, frequencies, limit)
    except (FrequencyListError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    if not missing_entries:
        console.print(
            f"[green]✓[/green] All characters up to rank {limit} are in the stories outline."
        )
        return

    console.print("The following characters are not in the stories outline:")
    for entry in missing_entries:
        console.print(f"  {escape(entry.hanzi)} ({entry.frequency})")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
