"""Plain-text report file."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from dcr_report.base import BaseReporter

if TYPE_CHECKING:
    from dcr_report.models import ReportRecord

logger = logging.getLogger(__name__)

# The analysis tool is run with --colors; files should not carry escape codes.
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def render_text(record: ReportRecord) -> str:
    lines = [
        "Code review report",
        f"Generated: {record.generated_at}",
    ]
    if record.branch:
        lines.append(f"Branch:    {record.branch}")
    lines.append(f"Standard:  {record.standard}")
    lines.append(
        f"Result:    {'FAILED' if record.exit_code else 'SUCCESS'} "
        f"({len(record.failed_files)} of {len(record.files)} reviewed file(s) failed"
        + (f", {record.total_files - len(record.files)} not reviewed" if record.total_files > len(record.files) else "")
        + ")"
    )
    for f in record.failed_files:
        lines.append("")
        header = f"== {f.path}"
        if f.author:
            header += f" ({f.author})"
        lines.append(header)
        lines.append(strip_ansi(f.output).rstrip())
    return "\n".join(lines) + "\n"


class TextReporter(BaseReporter):
    def __init__(self, path: str):
        self.path = Path(path)

    def write(self, record: ReportRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(render_text(record), encoding="utf-8")
        logger.debug("Wrote text report to %s", self.path)
