"""
chassisgen.cli - Command Line Interface
=======================================

This module provides the ``chassisgen`` command. It takes no arguments:
everything is asked interactively, then the project is generated.

Usage Examples
--------------
    $ chassisgen
    ? Project Name: myapp
    ? Project Root: /home/me/myapp
    ...

See Also
--------
- prompts.py: The question sequence
- generator.py: Project generation
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from chassisgen.generator import create_project
from chassisgen.models import AnswerRecord
from chassisgen.prompts import Abort, collect


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="chassisgen",
    help="Create a new NGN Chassis web app from the official boilerplate.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


def show_summary(answers: AnswerRecord) -> None:
    """Print the collected answers as a table."""
    table = Table(title="Project Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", answers.name)
    table.add_row("Package", answers.package_name)
    table.add_row("Root", str(answers.root))
    table.add_row("CSS Scope", answers.scope)
    table.add_row("NGN Extensions", "yes" if answers.ngnx else "no")
    if not answers.ngnx:
        table.add_row("Data Models/Stores", "yes" if answers.uses_data_layer else "no")
    table.add_row("Web Components", ", ".join(c.value for c in answers.wc) or "none")

    console.print()
    console.print(table)


# =============================================================================
# Create Command
# =============================================================================

@app.command()
def create() -> None:
    """
    Create a new [bold]NGN Chassis[/] web app.

    Asks for the project name, location and the NGN features to load,
    clones the Chassis boilerplate and installs its npm dependencies.
    """
    outcome = collect()

    # Declining every directory option is a normal exit, not a failure
    if isinstance(outcome, Abort):
        console.print(f"[bold red]{outcome.message}[/]")
        raise typer.Exit(0)

    show_summary(outcome)

    try:
        create_project(outcome, verbose=True)
    except Exception:
        # Already reported by the generator
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
