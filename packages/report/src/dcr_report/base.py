"""Abstract reporter interface.

Any report destination (text file, JSON file, mail) implements this
interface. The CLI depends on BaseReporter, not on a concrete
implementation, so destinations can be combined freely.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dcr_report.models import ReportRecord


class BaseReporter(ABC):
    @abstractmethod
    def write(self, record: ReportRecord) -> None:
        """Deliver the report. Raises OSError or SMTPException on failure."""

    def close(self) -> None:
        """Release any resources held by the reporter.

        Default is a no-op so callers can always call close() safely.
        """
