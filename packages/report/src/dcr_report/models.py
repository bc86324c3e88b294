"""Report data models.

Decoupled from dcr_core so the report layer can be used independently
and dcr_core has no knowledge of reporting concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FileRecord:
    """The analysis outcome of one reviewed file."""

    path: str
    status: str  # "SUCCESS" | "FAILED"
    output: str
    author: str | None = None  # committer email; None for explicitly named paths


@dataclass
class ReportRecord:
    """A completed review run, as handed to reporters and notifiers.

    Created by the CLI layer after run_review() returns a ReviewSummary.
    """

    branch: str
    standard: str
    generated_at: str  # ISO-8601 UTC timestamp
    exit_code: int
    total_files: int  # resolved targets, including any skipped by the failure limit
    files: list[FileRecord] = field(default_factory=list)

    @property
    def failed_files(self) -> list[FileRecord]:
        return [f for f in self.files if f.status == "FAILED"]
