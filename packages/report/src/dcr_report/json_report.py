"""JSON report file, for consumption by CI dashboards."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

from dcr_report.base import BaseReporter
from dcr_report.text import strip_ansi

if TYPE_CHECKING:
    from dcr_report.models import ReportRecord

logger = logging.getLogger(__name__)


class JsonReporter(BaseReporter):
    def __init__(self, path: str):
        self.path = Path(path)

    def write(self, record: ReportRecord) -> None:
        data = asdict(record)
        for f in data["files"]:
            f["output"] = strip_ansi(f["output"])
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Wrote JSON report to %s", self.path)
