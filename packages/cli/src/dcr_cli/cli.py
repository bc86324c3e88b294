"""CLI entry point for dcr.

Commands:
  review     — review the files changed on the current branch (or named paths)
  standards  — list the coding standards available to review against
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from dcr_cli.commands.review import review_cmd
from dcr_cli.commands.standards import standards_cmd

console = Console()


def _build_reporters(config: dict) -> list:
    """Instantiate a reporter for every configured destination.

    Report paths ending in .json get a JsonReporter, anything else a plain
    TextReporter. A mail template adds a MailNotifier. With nothing
    configured a single NoOpReporter is returned, so callers never need a
    conditional before writing.

    This factory lives in cli.py so neither dcr_core nor dcr_report know
    about the CLI config format.
    """
    from dcr_report.json_report import JsonReporter
    from dcr_report.mail import MailNotifier
    from dcr_report.noop import NoOpReporter
    from dcr_report.text import TextReporter

    reporters: list = []
    for path in config.get("reports") or []:
        if str(path).lower().endswith(".json"):
            reporters.append(JsonReporter(path))
        else:
            reporters.append(TextReporter(path))

    if config.get("mail") is not None:
        reporters.append(
            MailNotifier(
                config["mail"],
                smtp_host=config.get("smtp_host", "localhost"),
                smtp_port=config.get("smtp_port", 25),
            )
        )

    return reporters or [NoOpReporter()]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("dcr"),
    prog_name="dcr",
)
@click.option(
    "--config",
    "config_path",
    default=".dcr.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="DCR_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every git and analysis command.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Drupal Code Review: run coding-standard checks on changed files."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(review_cmd)
main.add_command(standards_cmd)
