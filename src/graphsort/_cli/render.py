"""Rich rendering utilities for graphsort commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from graphsort._graph import CycleError
    from graphsort._plugins import PluginInfo


def render_order_table(order: Sequence[object], console: Console) -> None:
    """Render a topological order as a numbered Rich table.

    Args:
        order: Sorted values.
        console: Rich Console to output to.

    """
    if not order:
        console.print("[dim]Graph is empty[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")

    for index, value in enumerate(order, start=1):
        table.add_row(str(index), escape(str(value)))

    console.print(table)
    console.print(f"\n[dim]Total: {len(order)} nodes[/dim]")


def render_cycle_report(error: CycleError, console: Console) -> None:
    """Render the diagnostics carried by a CycleError.

    Args:
        error: The raised CycleError.
        console: Rich Console to output to.

    """
    unresolved = "\n".join(f"  [red]•[/red] {escape(str(value))}" for value in error.unresolved)
    console.print(
        Panel(
            f"[bold]Unresolved nodes ({len(error.unresolved)}):[/bold]\n{unresolved}",
            title="[red]✗ Cycle detected[/red]",
            border_style="red",
            expand=False,
        ),
    )

    if error.partial_order:
        partial = ", ".join(escape(str(value)) for value in error.partial_order)
        console.print(f"[dim]Sorted before the cycle: {partial}[/dim]")


def render_plugin_table(plugins: Sequence[PluginInfo], console: Console) -> None:
    """Render plugins in initialization order.

    Args:
        plugins: Plugins in initialization order.
        console: Rich Console to output to.

    """
    if not plugins:
        console.print("[dim]No plugins detected[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Plugin", style="bold")
    table.add_column("Version")
    table.add_column("Depends on")

    for index, plugin in enumerate(plugins, start=1):
        dependencies = ", ".join(
            f"{dep.plugin_id}?" if dep.optional else dep.plugin_id for dep in plugin.dependencies
        )
        table.add_row(
            str(index),
            escape(plugin.name or plugin.id),
            escape(plugin.version or "-"),
            escape(dependencies) if dependencies else "[dim]None[/dim]",
        )

    console.print(table)
