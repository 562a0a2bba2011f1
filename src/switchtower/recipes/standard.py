"""The standard recipe, loaded before any user recipe.

It defines no deployment behaviour of its own, only housekeeping actions
available to every run.
"""

from __future__ import annotations

from typing import Any


def show_tasks(actor: Any) -> None:
    """List every available action with its description."""
    from rich.console import Console
    from rich.table import Table

    table = Table(
        title="Available actions",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Action", style="bold", no_wrap=True)
    table.add_column("Description")

    for name in sorted(actor.action_names):
        table.add_row(name, actor.describe(name))

    Console().print(table)


def load(configuration: Any) -> None:
    configuration.action("show_tasks")(show_tasks)
