#!/usr/bin/env python3
"""
Command line entry point for termdeck.

Inspects YAML layouts without a terminal UI: validates them, shows the
regions every container resolves to and the keyboard focus order.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree
from textual.geometry import Region

from termdeck import __version__
from termdeck.config.settings import validate_all_env_vars
from termdeck.container import Container
from termdeck.exceptions import ConfigurationError, ValidationError
from termdeck.layout import LayoutLoader
from termdeck.utils.logging_utils import setup_cli_logging

app = typer.Typer(help="Inspect termdeck container layouts")
console = Console()


def _load(layout: str) -> Container:
    """Load and build a layout, exiting with an error message on failure."""
    try:
        return LayoutLoader().build(layout)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Layout '{layout}' is invalid:[/red]")
        for problem in e.problems:
            console.print(f"  [red]•[/red] {problem}")
        raise typer.Exit(1)
    except ConfigurationError as e:
        console.print(f"[red]Error in layout '{layout}': {e}[/red]")
        raise typer.Exit(1)


def _label(container: Container) -> str:
    if container.options.id:
        return container.options.id
    if container.has_widget:
        return f"<{container.widget}>"
    return "<container>"


def _region(region: Optional[Region]) -> str:
    if region is None:
        return "-"
    return f"{region.x},{region.y} {region.width}x{region.height}"


def _add_branch(tree: Tree, container: Container) -> None:
    opts = container.options
    text = f"[cyan]{_label(container)}[/cyan]"
    if not container.is_leaf:
        text += f" [dim]{opts.split.value} split[/dim]"
    if container.focused:
        text += " [yellow](focused)[/yellow]"
    if opts.key_focus_skip:
        text += " [dim](skip)[/dim]"
    if opts.key_focus_groups:
        text += f" [magenta]groups={opts.key_focus_groups}[/magenta]"
    branch = tree.add(text)
    for child in (container.first, container.second):
        if child is not None:
            _add_branch(branch, child)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    termdeck - container layout core for terminal dashboards

    [bold]Examples:[/bold]

        [cyan]termdeck validate dashboard.yaml[/cyan]

        [cyan]termdeck resolve dashboard --width 120 --height 40[/cyan]
    """
    for error in validate_all_env_vars():
        console.print(f"[yellow]Warning: {error}[/yellow]")
    setup_cli_logging(verbose)


@app.command()
def version():
    """Show termdeck version"""
    typer.echo(f"termdeck version {__version__}")


@app.command()
def validate(layout: str = typer.Argument(..., help="Layout name or path to a YAML file")):
    """Check a layout for configuration errors"""
    root = _load(layout)
    console.print(f"[green]✓[/green] Layout '{layout}' is valid")
    tree = Tree(f"[bold]{layout}[/bold]")
    _add_branch(tree, root)
    console.print(tree)


@app.command()
def resolve(
    layout: str = typer.Argument(..., help="Layout name or path to a YAML file"),
    width: int = typer.Option(80, "--width", "-w", help="Terminal width in cells"),
    height: int = typer.Option(24, "--height", "-h", help="Terminal height in cells"),
):
    """Show the region every container resolves to"""
    root = _load(layout)
    errors = root.resolve(Region(0, 0, width, height))

    table = Table(title=f"{layout} at {width}x{height}")
    table.add_column("Container", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Area", style="green")
    table.add_column("Usable", style="green")
    table.add_column("Content", style="yellow")

    for container in root.pre_order():
        if container.has_widget:
            kind = "widget"
        elif container.is_leaf:
            kind = "empty"
        else:
            kind = f"{container.options.split.value} split"
        table.add_row(
            _label(container),
            kind,
            _region(container.area),
            _region(container.usable),
            _region(container.content),
        )
    console.print(table)

    if errors:
        for error in errors:
            console.print(f"[red]•[/red] {error}")
        raise typer.Exit(1)


@app.command("focus-order")
def focus_order(layout: str = typer.Argument(..., help="Layout name or path to a YAML file")):
    """Show the order in which the focus keys visit containers"""
    root = _load(layout)
    tracker = root.focus_tracker
    start = tracker.active
    console.print(f"Initially focused: [yellow]{_label(start)}[/yellow]")

    focusable = [c for c in root.leaves() if not c.options.key_focus_skip]
    if not focusable:
        console.print("[dim]No containers can receive focus with the next key[/dim]")
        return

    # Walk one full cycle from the first focusable container.
    tracker.set_active(focusable[0])
    order = [focusable[0]]
    for _ in range(len(focusable) - 1):
        tracker.next()
        order.append(tracker.active)
    tracker.set_active(start)

    keys = root.options.global_options
    console.print(
        f"Next key: [cyan]{keys.key_focus_next or '-'}[/cyan]  "
        f"Previous key: [cyan]{keys.key_focus_previous or '-'}[/cyan]"
    )
    console.print(" → ".join(_label(c) for c in order))


@app.command()
def layouts():
    """List layouts in the layouts directory"""
    loader = LayoutLoader()
    names = loader.list_layouts()
    if not names:
        console.print(f"[yellow]No layouts found in {loader.layouts_dir}[/yellow]")
        return
    for name in names:
        console.print(name)


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
