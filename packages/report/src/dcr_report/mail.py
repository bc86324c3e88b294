"""Mail notification — tells each committer about the files they broke.

The template is the pipe-separated string "subject|body|from". Any part may
be left blank to use the default. Supported placeholders:
  !author  — committer email
  !branch  — current branch name
  !report  — the report text for that committer's failing files

Only files attributed to a commit (branch-diff mode) can be mailed; files
reviewed from explicit paths have no author and are left out.
"""

from __future__ import annotations

import logging
import smtplib
from dataclasses import replace
from email.message import EmailMessage
from typing import TYPE_CHECKING

from dcr_report.base import BaseReporter
from dcr_report.text import render_text

if TYPE_CHECKING:
    from dcr_report.models import ReportRecord

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Code review: problems found in !branch"
DEFAULT_BODY = "Hello !author,\n\nThe automated code review found problems in your commits:\n\n!report"
DEFAULT_FROM = "dcr@localhost"


def parse_template(template: str | None) -> tuple[str, str, str]:
    parts = (template or "").split("|", 2)
    parts += [""] * (3 - len(parts))
    subject, body, sender = (p.strip() for p in parts)
    return subject or DEFAULT_SUBJECT, body or DEFAULT_BODY, sender or DEFAULT_FROM


def expand(text: str, author: str, branch: str, report: str) -> str:
    # !report last so placeholders inside the tool output are left alone.
    return text.replace("!author", author).replace("!branch", branch).replace("!report", report)


class MailNotifier(BaseReporter):
    def __init__(self, template: str | None, smtp_host: str = "localhost", smtp_port: int = 25):
        self.subject, self.body, self.sender = parse_template(template)
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port

    def build_messages(self, record: ReportRecord) -> list[EmailMessage]:
        by_author: dict[str, list] = {}
        for f in record.failed_files:
            if f.author:
                by_author.setdefault(f.author, []).append(f)

        messages = []
        for author, files in by_author.items():
            report = render_text(replace(record, files=files, total_files=len(files)))
            msg = EmailMessage()
            # Headers must stay on one line, so !report is not expanded in the subject.
            msg["Subject"] = expand(self.subject, author, record.branch, "")
            msg["From"] = self.sender
            msg["To"] = author
            msg.set_content(expand(self.body, author, record.branch, report))
            messages.append(msg)
        return messages

    def write(self, record: ReportRecord) -> None:
        messages = self.build_messages(record)
        if not messages:
            logger.debug("No attributed failures; nothing to mail")
            return
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as smtp:
            for msg in messages:
                smtp.send_message(msg)
                logger.info("Mailed review report to %s", msg["To"])
