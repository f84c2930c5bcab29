#!/usr/bin/env python3
"""dotseed CLI - scaffold .NET projects with seeded secrets and packages."""

import typer
from rich.console import Console

from dotseed.cli_project_commands import register_project_commands
from dotseed.cli_seed_commands import register_seed_commands

app = typer.Typer(
    name="dotseed",
    help="""dotseed - scaffold .NET projects with secrets and packages ready

Quick start:
  dotseed doctor                  # Check the .NET SDK
  dotseed new OrderService        # Create, seed secrets, install packages
  dotseed packages docs/          # Preview packages found in Markdown

More commands: dotseed --help
""",
    add_completion=False,
)

console = Console()

register_project_commands(app, console)
register_seed_commands(app, console)

if __name__ == "__main__":
    app()
