"""Review pipeline: run the analysis tool on each target, strictly in order.

Files are processed one at a time. The failure limit is checked before each
file against the number of failures seen so far, which is only well defined
because processing is sequential.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from dcr_core.changeset import ReviewTarget
from dcr_core.errors import ToolInvocationError
from dcr_core.exit_codes import ExitCode, combine
from dcr_core.runner import CommandRunner
from dcr_core.standards import build_command

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, ReviewTarget], None]

_VALID_CODES = {ExitCode.SUCCESS.value, ExitCode.FAILED.value}


@dataclass(frozen=True)
class ReviewResult:
    path: str
    output: str
    code: ExitCode


@dataclass
class AggregateOutcome:
    exit_code: ExitCode = ExitCode.SUCCESS
    # Keyed by path, in processing order.
    results: dict[str, ReviewResult] = field(default_factory=dict)

    @property
    def failed(self) -> list[ReviewResult]:
        return [r for r in self.results.values() if r.code == ExitCode.FAILED]


class ReviewPipeline:
    def __init__(
        self,
        runner: CommandRunner,
        tool: str,
        standard_path: str,
        on_progress: ProgressCallback | None = None,
    ):
        self._runner = runner
        self._tool = tool
        self._standard_path = standard_path
        self._on_progress = on_progress

    def run(
        self,
        targets: list[ReviewTarget],
        failure_threshold: int = 0,
        show_codes: bool = False,
    ) -> AggregateOutcome:
        """Review targets in order and return the aggregate outcome.

        A failure_threshold of 0 means no limit. Once failure_threshold files
        have failed, the remaining targets are left out of the results.
        Raises ToolInvocationError on any exit status other than 0 or 1; no
        outcome is returned in that case.
        """
        results: dict[str, ReviewResult] = {}
        failed_count = 0
        total = len(targets)

        for index, target in enumerate(targets, 1):
            if failure_threshold > 0 and failed_count >= failure_threshold:
                logger.info("Failure limit %d reached; skipping %d file(s)", failure_threshold, total - index + 1)
                break

            if self._on_progress is not None:
                self._on_progress(index, total, target)

            result = self._review(target, show_codes)
            if result.code == ExitCode.FAILED:
                failed_count += 1
            results[target.path] = result

        return AggregateOutcome(
            exit_code=combine(r.code for r in results.values()),
            results=results,
        )

    def _review(self, target: ReviewTarget, show_codes: bool) -> ReviewResult:
        command = build_command(self._tool, self._standard_path, target.path, show_codes)
        completed = self._runner.run(command)
        if completed.exit_status not in _VALID_CODES:
            raise ToolInvocationError(target.path, completed.exit_status, completed.stderr or completed.stdout)
        code = ExitCode(completed.exit_status)
        logger.debug("%s: %s", target.path, code.name)
        return ReviewResult(path=target.path, output=completed.stdout, code=code)
