"""No-op reporter — used when no report destination is configured."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dcr_report.base import BaseReporter

if TYPE_CHECKING:
    from dcr_report.models import ReportRecord


class NoOpReporter(BaseReporter):
    def write(self, record: ReportRecord) -> None:
        pass  # intentional no-op
