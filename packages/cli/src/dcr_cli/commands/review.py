"""review command — run the coding-standard review and report the outcome."""

from __future__ import annotations

import smtplib

import click
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from dcr_core.changeset import ReviewTarget
from dcr_core.config import load_config
from dcr_core.errors import DcrError
from dcr_core.exit_codes import ExitCode
from dcr_core.reviewer import ReviewSummary, run_review
from dcr_report.models import FileRecord, ReportRecord

console = Console()
err_console = Console(stderr=True)


def _summary_to_record(summary: ReviewSummary) -> ReportRecord:
    """Map a ReviewSummary returned by run_review() to a ReportRecord for reporters.

    The CLI layer owns this mapping — dcr_core has no report knowledge and
    dcr_report has no core knowledge. The CLI bridges the two.
    """
    return ReportRecord(
        branch=summary.branch,
        standard=summary.standard,
        generated_at=summary.reviewed_at,
        exit_code=int(summary.exit_code),
        total_files=len(summary.targets),
        files=[
            FileRecord(
                path=r.path,
                status=r.code.name,
                output=r.output,
                author=summary.author_of(r.path),
            )
            for r in summary.outcome.results.values()
        ],
    )


def _print_results(summary: ReviewSummary) -> None:
    results = summary.outcome.results
    for r in summary.outcome.failed:
        console.print(f"\n[bold red]FAILED[/bold red] {escape(r.path)}")
        console.print(Text.from_ansi(r.output.rstrip()))

    skipped = len(summary.targets) - len(results)
    failed = len(summary.outcome.failed)
    if not results:
        console.print("[yellow]No files to review.[/yellow]")
    elif failed:
        console.print(f"\n[red]{failed} of {len(results)} file(s) failed review.[/red]")
    else:
        console.print(f"\n[green]{len(results)} file(s) passed review.[/green]")
    if skipped:
        console.print(f"[yellow]Failure limit reached: {skipped} file(s) not reviewed.[/yellow]")


def _committer_option(committer: str | None, mine: bool, all_committers: bool):
    """Return the `mine` override: an email, True, False, or None to keep the config value."""
    if committer:
        return committer
    if mine:
        return True
    if all_committers:
        return False
    return None


@click.command("review")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--main-branch", "-b", default=None, help="Branch to compare against. Defaults to master.")
@click.option("--standard", default=None, help="Name of the coding standard to apply.")
@click.option("--standards-dir", default=None, help="Directory to search for ruleset.xml files.")
@click.option("--mine", is_flag=True, help="Only review files last committed by the current git user.")
@click.option(
    "--all-committers",
    is_flag=True,
    help="Review files from every committer, overriding `mine` in the config file.",
)
@click.option("--committer", default=None, help="Only review files last committed by this email.")
@click.option("--failure-limit", type=int, default=None, help="Stop after this many failed files (0 = no limit).")
@click.option("--report", "reports", multiple=True, help="Write a report file (.json for JSON). Repeatable.")
@click.option(
    "--sendmail",
    default=None,
    help="Mail failures to committers. Value is 'subject|body|from'; placeholders !author, !branch, !report.",
)
@click.option("--show-codes", is_flag=True, help="Include sniff codes in the analysis output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress per-file output.")
@click.pass_context
def review_cmd(
    ctx,
    paths: tuple[str, ...],
    main_branch: str | None,
    standard: str | None,
    standards_dir: str | None,
    mine: bool,
    all_committers: bool,
    committer: str | None,
    failure_limit: int | None,
    reports: tuple[str, ...],
    sendmail: str | None,
    show_codes: bool,
    quiet: bool,
):
    """Review changed files against a coding standard.

    With PATHS, reviews those files and every file beneath those directories.
    Without, reviews the files changed by commits on the current branch that
    the main branch does not have yet.

    \b
    Exit status:
      0  every reviewed file passed
      1  at least one file failed review
      3  application error (bad path, git failure, analysis tool malfunction)
    """
    from dcr_cli.cli import _build_reporters

    config_path = ctx.obj.get("config_path", ".dcr.yml") if ctx.obj else ".dcr.yml"
    config = load_config(
        config_path,
        cli_overrides={
            "main_branch": main_branch,
            "standard": standard,
            "standards_dir": standards_dir,
            "mine": _committer_option(committer, mine, all_committers),
            "failure_limit": failure_limit,
            "reports": list(reports) or None,
            "mail": sendmail,
            "show_codes": True if show_codes else None,
        },
    )

    def on_progress(index: int, total: int, target: ReviewTarget) -> None:
        if not quiet:
            console.print(f"[{index}/{total}] Reviewing: {escape(target.path)}")

    try:
        summary = run_review(config, list(paths), on_progress=on_progress)
    except DcrError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(ExitCode.APPLICATION_ERROR)

    if not quiet:
        _print_results(summary)

    record = _summary_to_record(summary)
    try:
        for reporter in _build_reporters(config):
            try:
                reporter.write(record)
            finally:
                reporter.close()
    except (OSError, smtplib.SMTPException) as e:
        err_console.print(f"[red]Could not deliver report: {escape(str(e))}[/red]")
        ctx.exit(ExitCode.APPLICATION_ERROR)

    ctx.exit(int(summary.exit_code))
