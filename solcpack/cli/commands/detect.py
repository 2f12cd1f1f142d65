"""``solcpack detect`` — decide whether the buildpack applies."""

from __future__ import annotations

from pathlib import Path

import tomlkit
import typer
from rich.console import Console

from solcpack.detect import Detect

console = Console()

# CNB detect exit status for "does not apply".
DETECT_FAIL_CODE = 100


def detect_cmd(
    app_dir: Path = typer.Option(
        Path("."), "--app", "-a", help="Application source directory."
    ),
    plan: Path = typer.Option(
        None, "--plan", help="Write the build plan to this TOML file."
    ),
) -> None:
    """Pass when the application contains Solidity sources."""
    result = Detect().detect(app_dir)
    if not result.passed:
        console.print(f"[yellow]SKIPPED[/yellow] no Solidity sources in {app_dir}")
        raise typer.Exit(code=DETECT_FAIL_CODE)

    if plan is not None:
        plan.write_text(tomlkit.dumps(result.as_plan()), encoding="utf-8")
    console.print(f"[green]PASSED[/green] provides {', '.join(result.provides)}")
