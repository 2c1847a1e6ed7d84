"""classify command: show how branch names are classified."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prguard_core.branches import classify

console = Console()


@click.command("classify")
@click.argument("branches", nargs=-1, required=True)
def classify_cmd(branches: tuple[str, ...]):
    """Print the classification of one or more BRANCHES."""
    table = Table(title="Branch classification", show_header=True, header_style="bold cyan")
    table.add_column("Branch", style="bold")
    table.add_column("Prefix")
    table.add_column("Version")
    table.add_column("Types")
    table.add_column("Order", justify="right")

    for branch in branches:
        c = classify(branch)
        types = ", ".join(sorted(t.value for t in c.types))
        style = "yellow" if c.is_unknown else "green"
        table.add_row(c.branch, c.prefix, c.display_version, f"[{style}]{types}[/{style}]", str(c.order))

    console.print(table)
