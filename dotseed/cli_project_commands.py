"""Project CLI commands - new, doctor."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dotseed.cli_support import (
    handle_cli_error,
    is_mock,
    load_settings_or_exit,
    print_info,
    print_success,
    print_warning,
    setup_file_logging,
)
from dotseed.core.errors import FatalError
from dotseed.core.orchestrator import ProjectOrchestrator, RunResult
from dotseed.core.prerequisites import check_dotnet_sdk
from dotseed.services.dotnet import KNOWN_TEMPLATES

console: Console = Console()


def new(
    name: str = typer.Argument(..., help="Project name (also the directory name)"),
    template: Optional[str] = typer.Option(None, "--template", "-t",
                                           help="dotnet new template (e.g., webapi, console)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o",
                                          help="Directory to create the project in (default: cwd)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings file path"),
    skip_packages: bool = typer.Option(False, "--skip-packages", help="Discover but do not install packages"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write the run log to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and tracebacks"),
):
    """Create a project, seed its user-secrets and install packages.

    Examples:
        dotseed new OrderService                 # webapi in ./OrderService
        dotseed new Billing -t classlib -o src   # class library in ./src/Billing
        dotseed new Api --skip-packages          # only list packages
    """
    settings = load_settings_or_exit(config, console)
    if skip_packages:
        settings = settings.model_copy(update={"skip_packages": True})
    setup_file_logging(log_file or settings.log_file, verbose)

    orchestrator = ProjectOrchestrator(settings, mock=is_mock())
    try:
        result = orchestrator.create(name, template=template, base_path=output)
    except FatalError as e:
        handle_cli_error(e, console, verbose)

    _print_summary(result)
    print_success(console, f"Created {name} at {result.context.project_path}")


def doctor(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings file path"),
):
    """Check that the .NET SDK is installed and recent enough."""
    settings = load_settings_or_exit(config, console)
    try:
        version = check_dotnet_sdk(settings.min_sdk_major, mock=is_mock())
    except FatalError as e:
        handle_cli_error(e, console)

    print_success(console, f".NET SDK {version} (>= {settings.min_sdk_major}.0 required)")
    print_info(console, f"Default template: {settings.template}")
    console.print(f"[dim]Known templates: {', '.join(KNOWN_TEMPLATES)}[/dim]")


def _print_summary(result: RunResult) -> None:
    table = Table(title="Run summary", show_header=True)
    table.add_column("Step", style="cyan")
    table.add_column("Result")

    report = result.seed_report
    if report is not None:
        if report.created_defaults:
            table.add_row("Config files", "none found, defaults created")
        else:
            table.add_row("Config files", f"{len(report.files)} processed, {len(report.failed_files)} failed")
        table.add_row("Secrets", f"{len(report.forwarded)} set, {report.skipped} skipped")
        if report.backup_path:
            table.add_row("Backup", report.backup_path.name)

    table.add_row("Packages", f"{len(result.discovered)} discovered, {len(result.installed)} installed")
    console.print(table)

    for package in result.incompatible:
        print_warning(console, f"Skipped incompatible package {package}")
    for package in result.failed:
        print_warning(console, f"Failed to install {package}")


def register_project_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register project commands with the main Typer app."""
    global console
    console = shared_console

    app.command()(new)
    app.command()(doctor)
