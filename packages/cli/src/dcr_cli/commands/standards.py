"""standards command — list the coding standards dcr can review against."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from dcr_core.config import load_config
from dcr_core.standards import discover_standards

console = Console()


@click.command("standards")
@click.option("--dir", "standards_dir", default=None, help="Directory to search for ruleset.xml files.")
@click.pass_context
def standards_cmd(ctx, standards_dir: str | None):
    """List discovered coding standards and their ruleset files."""
    config_path = ctx.obj.get("config_path", ".dcr.yml") if ctx.obj else ".dcr.yml"
    config = load_config(config_path, cli_overrides={"standards_dir": standards_dir})

    standards = discover_standards(config.get("standards_dir"))
    if not standards:
        console.print("[yellow]No coding standards found.[/yellow]")
        return

    table = Table(title="Coding Standards", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Ruleset")
    table.add_column("Default", justify="center")
    for path, name in standards.items():
        table.add_row(name, path, "✓" if name == config.get("standard") else "")
    console.print(table)
