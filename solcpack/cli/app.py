"""Main Typer application — imports and registers all CLI commands.

Entry point: ``solcpack`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from solcpack.cli.commands.build import build_cmd
from solcpack.cli.commands.detect import detect_cmd
from solcpack.cli.commands.inspect import layer_info_cmd, processes_cmd
from solcpack.config import BuildpackSettings

app = typer.Typer(
    name="solcpack",
    help="solcpack: Cloud Native Buildpack for the Solidity compiler.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None, "--log-level", help="Override BP_LOG_LEVEL (DEBUG, INFO, WARNING)."
    ),
) -> None:
    """Configure logging once for every subcommand."""
    level = log_level.upper() if log_level else BuildpackSettings().effective_log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


# Register subcommands
app.command(name="detect", help="Detect whether the buildpack applies.")(detect_cmd)
app.command(name="build", help="Contribute the solc layer and launch processes.")(build_cmd)
app.command(name="processes", help="Show launch processes for a flag value.")(processes_cmd)
app.command(name="layer-info", help="Show persisted layer metadata.")(layer_info_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
