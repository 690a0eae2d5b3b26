import dataclasses
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from graphsort._graph import CycleError, sort_data
from graphsort._io import GraphFileError, export_order_to_toml, load_graph_from_toml, load_plugins_from_toml
from graphsort._plugins import order_plugins

from .config import ConfigError, GraphsortConfig, get_config
from .render import render_cycle_report, render_order_table, render_plugin_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Graphsort CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> GraphsortConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e


def _resolve_input(path: Path | None, configured: Path | None, kind: str) -> Path:
    """Pick the explicit path, falling back to the configured one."""
    if path is not None:
        return path
    if configured is not None:
        err_console.print(f"[dim]Using {kind} from \\[tool.graphsort]: {configured}[/dim]")
        return configured
    err_console.print(f"[red]Error: No {kind} given and none configured in \\[tool.graphsort][/red]")
    raise typer.Exit(code=2)


@app.command()
def sort(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to graph TOML file (defaults to the configured input)"),
    ] = None,
    *,
    root: Annotated[
        list[str] | None,
        typer.Option("--root", "-r", help="Traversal entry point; may be repeated. Overrides the file's roots."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the order as a JSON list"),
    ] = False,
) -> None:
    """Sort a graph topologically and print the order."""
    config = _load_config()
    input_path = _resolve_input(path, config.input, "graph file")
    if output is None:
        output = config.output

    err_console.print(f"[cyan]Loading graph from:[/cyan] {input_path}")
    try:
        source = load_graph_from_toml(input_path)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if root:
        source = dataclasses.replace(source, root_values=tuple(root))

    try:
        order = sort_data(source)
    except CycleError as e:
        render_cycle_report(e, err_console)
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(json.dumps(order))
    else:
        render_order_table(order, out_console)

    if output is not None:
        err_console.print(f"[cyan]Writing order to:[/cyan] {output}")
        export_order_to_toml(order, output)


@app.command()
def check(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to graph TOML file (defaults to the configured input)"),
    ] = None,
) -> None:
    """Check that a graph has no cycle."""
    config = _load_config()
    input_path = _resolve_input(path, config.input, "graph file")

    err_console.print(f"[cyan]Loading graph from:[/cyan] {input_path}")
    try:
        source = load_graph_from_toml(input_path)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    try:
        order = sort_data(source)
    except CycleError as e:
        render_cycle_report(e, err_console)
        raise typer.Exit(code=1) from e

    err_console.print(f"[green]✓ No cycle found ({len(order)} nodes)[/green]")


@app.command()
def plugins(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to plugin TOML file (defaults to the configured plugins file)"),
    ] = None,
    *,
    available: Annotated[
        list[str] | None,
        typer.Option("--available", "-a", help="Id of an already loaded plugin; may be repeated"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file with the plugin ids"),
    ] = None,
) -> None:
    """Print the initialization order of plugins."""
    config = _load_config()
    input_path = _resolve_input(path, config.plugins, "plugin file")

    err_console.print(f"[cyan]Loading plugins from:[/cyan] {input_path}")
    try:
        detected = load_plugins_from_toml(input_path)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    ordered = order_plugins(detected, available or ())
    render_plugin_table(ordered, out_console)

    if output is not None:
        err_console.print(f"[cyan]Writing order to:[/cyan] {output}")
        export_order_to_toml([plugin.id for plugin in ordered], output)


def main() -> None:
    app()
