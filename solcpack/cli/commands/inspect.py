"""``solcpack processes`` and ``solcpack layer-info`` — read-only inspection."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from solcpack.core.metadata_store import LayerMetadataError, LayerMetadataStore
from solcpack.core.process_types import resolve_process_types

console = Console()


def processes_cmd(
    enable: str = typer.Argument("false", help="Value of BP_ENABLE_SOLC_PROCESS."),
) -> None:
    """Show the launch processes produced for a flag value."""
    processes = resolve_process_types(enable)
    if not processes:
        console.print("[dim]No launch processes.[/dim]")
        return

    table = Table(title="Launch Processes")
    table.add_column("Type", style="cyan")
    table.add_column("Command")
    table.add_column("Default", justify="center")
    for process in processes:
        default = "[green]Yes[/green]" if process.default else "No"
        table.add_row(process.type, process.command, default)
    console.print(table)


def layer_info_cmd(
    layers: Path = typer.Option(..., "--layers", "-l", help="CNB layers directory."),
    name: str = typer.Option("node", "--name", "-n", help="Layer name."),
) -> None:
    """Show the persisted metadata of a layer."""
    store = LayerMetadataStore(layers)
    try:
        layer = store.layer(name)
    except LayerMetadataError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    dependency = store.stored_dependency(layer)
    if dependency is None:
        console.print(f"[dim]Layer {name} has never been contributed.[/dim]")
        return

    types = ", ".join(k for k, v in layer.types.model_dump().items() if v) or "none"
    console.print(
        Panel(
            "\n".join([
                f"[bold]Dependency:[/bold] {dependency.display_name}",
                f"[bold]Checksum:[/bold]   {dependency.checksum}",
                f"[bold]URI:[/bold]        {dependency.uri}",
                f"[bold]Types:[/bold]      {types}",
                f"[bold]Path:[/bold]       {layer.path}",
            ]),
            title=f"[bold]Layer {name}[/bold]",
            border_style="cyan",
        )
    )
