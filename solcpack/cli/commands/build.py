"""``solcpack build`` — contribute the solc layer and launch processes."""

from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from solcpack.build import Build, BuildContext
from solcpack.config import BuildpackSettings
from solcpack.models.buildpack import BuildpackInfo

console = Console()


def build_cmd(
    layers: Path = typer.Option(..., "--layers", "-l", help="CNB layers directory."),
    app_dir: Path = typer.Option(
        Path("."), "--app", "-a", help="Application source directory."
    ),
    platform: Path = typer.Option(
        None, "--platform", "-p", help="CNB platform directory (reads env/BP_*)."
    ),
    buildpack_dir: Path = typer.Option(
        Path(os.environ.get("CNB_BUILDPACK_DIR", ".")),
        "--buildpack-dir",
        help="Directory holding buildpack.toml.",
    ),
    stack: str = typer.Option(
        os.environ.get("CNB_STACK_ID", "*"), "--stack", help="Stack id to resolve dependencies for."
    ),
) -> None:
    """Run the build phase for the application."""
    buildpack = BuildpackInfo.from_toml(buildpack_dir / "buildpack.toml")
    context = BuildContext(
        application_path=app_dir,
        layers_path=layers,
        buildpack=buildpack,
        buildpack_path=buildpack_dir,
        platform_path=platform,
        stack_id=stack,
    )
    settings = BuildpackSettings.from_platform(platform)

    try:
        result = Build(settings=settings).build(context)
    except RuntimeError as exc:
        console.print(f"[bold red]Build failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Contributed Layers")
    table.add_column("Layer", style="cyan")
    table.add_column("Path")
    table.add_column("Version", style="green")
    table.add_column("Types")
    for layer in result.layers:
        types = ", ".join(k for k, v in layer.types.model_dump().items() if v)
        table.add_row(layer.name, str(layer.path), str(layer.metadata.get("version", "")), types)
    console.print(table)

    for process in result.processes:
        marker = " (default)" if process.default else ""
        console.print(f"Process [bold]{process.type}[/bold]: {process.command}{marker}")
