"""Secrets and package discovery CLI commands - seed, packages."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dotseed.cli_support import (
    is_mock,
    load_settings_or_exit,
    print_error,
    print_success,
    print_warning,
    setup_file_logging,
)
from dotseed.core.orchestrator import ProjectOrchestrator

console: Console = Console()


def seed(
    root: Path = typer.Argument(Path("."), help="Directory tree to search for config files"),
    project: Path = typer.Option(Path("."), "--project", "-p", help="Project whose user-secrets to seed"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings file path"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write the run log to this file"),
):
    """Seed an existing project's user-secrets from config files.

    Examples:
        dotseed seed                       # search cwd, seed project in cwd
        dotseed seed .. -p src/Api         # search parent tree, seed src/Api
    """
    settings = load_settings_or_exit(config, console)
    setup_file_logging(log_file or settings.log_file)

    if not root.is_dir():
        print_error(console, f"Not a directory: {root}")
        raise typer.Exit(1)

    orchestrator = ProjectOrchestrator(settings, mock=is_mock())
    report = orchestrator.seed_secrets(root, project)

    for path, reason in report.failed_files.items():
        print_warning(console, f"{path}: {reason}")
    if report.created_defaults:
        print_warning(console, "No config files found; wrote default appsettings.json")
    print_success(console, f"Set {len(report.forwarded)} secret(s), skipped {report.skipped}")


def packages(
    root: Path = typer.Argument(Path("."), help="Directory tree to search for Markdown files"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings file path"),
):
    """List the packages that would be installed (nothing is installed)."""
    settings = load_settings_or_exit(config, console)
    orchestrator = ProjectOrchestrator(settings, mock=is_mock())
    names = orchestrator.discover_packages(root)

    table = Table(title="Packages", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Package", style="cyan")
    table.add_column("Source")
    core = set(settings.core_packages)
    for index, name in enumerate(names, start=1):
        table.add_row(str(index), name, "core" if name in core else "docs")
    console.print(table)


def register_seed_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register seeding commands with the main Typer app."""
    global console
    console = shared_console

    app.command()(seed)
    app.command()(packages)
