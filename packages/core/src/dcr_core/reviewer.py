"""Top-level review orchestration: change set → standard → pipeline → summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from dcr_core.changeset import ChangeSetResolver, ReviewTarget, committer_filter_from_option
from dcr_core.exit_codes import ExitCode
from dcr_core.pipeline import AggregateOutcome, ProgressCallback, ReviewPipeline
from dcr_core.runner import CommandRunner, SubprocessRunner
from dcr_core.standards import discover_standards, get_default_standard, select_standard
from dcr_core.vcs.git import Git

logger = logging.getLogger(__name__)


@dataclass
class ReviewSummary:
    """Result returned by run_review — carries what reporters and notifiers need.

    Decoupled from dcr_report so dcr_core has no dependency on the report layer.
    The CLI converts this to a ReportRecord before writing reports.
    """

    branch: str
    standard: str
    outcome: AggregateOutcome
    targets: list[ReviewTarget] = field(default_factory=list)
    reviewed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def exit_code(self) -> ExitCode:
        return self.outcome.exit_code

    def author_of(self, path: str) -> str | None:
        for target in self.targets:
            if target.path == path:
                return target.author
        return None

    def authors(self) -> dict[str, list[str]]:
        """Map each committer email to the failing files attributed to them."""
        by_author: dict[str, list[str]] = {}
        for result in self.outcome.failed:
            author = self.author_of(result.path)
            if author:
                by_author.setdefault(author, []).append(result.path)
        return by_author


def resolve_standard(config: dict) -> str:
    """Return the ruleset path for the configured standard name."""
    standards = discover_standards(config.get("standards_dir"))
    name = config.get("standard")
    if name:
        return select_standard(standards, name)
    return get_default_standard(standards)


def run_review(
    config: dict,
    paths: list[str] | None = None,
    runner: CommandRunner | None = None,
    on_progress: ProgressCallback | None = None,
) -> ReviewSummary:
    """Resolve the change set and review it.

    Any DcrError raised along the way propagates; no partial summary is
    returned.
    """
    runner = runner if runner is not None else SubprocessRunner()
    git = Git(runner)

    # The standard is checked before any git query so a bad name fails fast.
    standard_path = resolve_standard(config)

    resolver = ChangeSetResolver(git, exclude=config.get("exclude", []))
    targets = resolver.resolve(
        paths or None,
        config["main_branch"],
        committer_filter_from_option(config.get("mine")),
    )
    branch = resolver.branch or ""
    logger.debug("Reviewing %d file(s) with %s", len(targets), standard_path)

    pipeline = ReviewPipeline(runner, config["phpcs"], standard_path, on_progress=on_progress)
    outcome = pipeline.run(
        targets,
        failure_threshold=config.get("failure_limit", 0),
        show_codes=config.get("show_codes", False),
    )
    return ReviewSummary(branch=branch, standard=standard_path, outcome=outcome, targets=targets)
