"""Commit attribution: which commit owns each changed file.

The outgoing log is parsed into commits keyed by id in the order git emits
them. Ownership is then resolved so that every file belongs to exactly one
commit: the one emitted first among the commits that touch it. This is
deliberately not a timestamp comparison; log order alone decides.
"""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass, field
from typing import Callable

from dcr_core.vcs.git import COMMIT_PREFIX, Git

logger = logging.getLogger(__name__)


@dataclass
class Commit:
    id: str
    committer_email: str
    subject: str
    timestamp: int
    # Absolute path -> existence marker. A dict keeps insertion order and
    # gives constant-time membership checks during ownership resolution.
    files: dict[str, bool] = field(default_factory=dict)


def _parse_header(line: str) -> Commit | None:
    fields = line[len(COMMIT_PREFIX) :].split("|")
    if len(fields) < 4:
        return None
    commit_id, email = fields[0].strip(), fields[1].strip()
    # The subject may itself contain pipes; the timestamp is always last.
    subject = "|".join(fields[2:-1])
    try:
        timestamp = int(fields[-1].strip())
    except ValueError:
        return None
    if not commit_id:
        return None
    return Commit(id=commit_id, committer_email=email, subject=subject, timestamp=timestamp)


def unquote_path(line: str) -> str:
    """Undo git's C-style quoting of paths with tabs, quotes or backslashes."""
    if len(line) < 2 or not (line.startswith('"') and line.endswith('"')):
        return line
    return codecs.escape_decode(line[1:-1].encode("utf-8"))[0].decode("utf-8", errors="replace")


def parse_log(
    output: str,
    root: str,
    exists: Callable[[str], bool] = os.path.isfile,
) -> dict[str, Commit]:
    """Parse outgoing-log output into {commit id: Commit} in emission order.

    File lines are joined onto root and kept only if the file exists now.
    Lines that fit neither the header nor the file shape are skipped, as are
    file lines seen before any valid header.
    """
    commits: dict[str, Commit] = {}
    current: Commit | None = None

    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith(COMMIT_PREFIX):
            current = _parse_header(line)
            if current is None:
                logger.debug("Skipping malformed commit header: %r", line)
                continue
            if current.id in commits:
                # Same revision emitted twice: keep the first record.
                current = commits[current.id]
                continue
            commits[current.id] = current
            continue
        if current is None:
            logger.debug("Skipping line outside of any commit: %r", line)
            continue
        path = os.path.normpath(os.path.join(root, unquote_path(line)))
        if exists(path):
            current.files[path] = True
        else:
            logger.debug("Dropping %s from %s: no longer on disk", path, current.id[:7])

    return commits


def resolve_ownership(commits: dict[str, Commit]) -> dict[str, Commit]:
    """Attribute each file to exactly one commit, first emitted wins.

    Commits are walked from last emitted to first. Each one claims its files
    in turn, so an earlier-emitted commit overrides any later claim and takes
    the file away from it. The result keeps the original emission order;
    commits left with no files are still returned.
    """
    owner: dict[str, str] = {}
    for commit in reversed(list(commits.values())):
        for path in commit.files:
            owner[path] = commit.id

    for commit in commits.values():
        for path in [p for p in commit.files if owner[p] != commit.id]:
            logger.debug("%s: %s is owned by %s", commit.id[:7], path, owner[path][:7])
            del commit.files[path]
    return commits


class CommitAttributor:
    def __init__(self, git: Git):
        self._git = git

    def attribute(self, compare_to_branch: str, author_filter: str | None = None) -> dict[str, Commit]:
        root = self._git.toplevel()
        output = self._git.outgoing_log(compare_to_branch, author_filter)
        commits = parse_log(output, root)
        logger.debug("Parsed %d outgoing commit(s) against %s", len(commits), compare_to_branch)
        return resolve_ownership(commits)
