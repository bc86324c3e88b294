"""Change-set resolution: the ordered list of files to review in one run.

Two modes:
  explicit paths  → the named files, plus every regular file beneath named directories
  branch diff     → files touched by commits on the current branch that the main
                    branch does not have yet, each carrying its owning commit
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Union

from dcr_core.commits import Commit, CommitAttributor
from dcr_core.errors import InvalidSourceError
from dcr_core.utils.paths import is_excluded
from dcr_core.vcs.git import Git

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoCommitter:
    """Filter on the email configured as git's user.email."""


@dataclass(frozen=True)
class ExplicitCommitter:
    email: str


@dataclass(frozen=True)
class NoCommitterFilter:
    """Include commits from every committer."""


CommitterFilter = Union[AutoCommitter, ExplicitCommitter, NoCommitterFilter]


def committer_filter_from_option(value) -> CommitterFilter:
    """Map the `mine` option (True, False/None or an email string) to a CommitterFilter."""
    if value is True:
        return AutoCommitter()
    if not value:
        return NoCommitterFilter()
    return ExplicitCommitter(str(value))


@dataclass(frozen=True)
class ReviewTarget:
    path: str
    # Set only in branch-diff mode; used for reporting and notification.
    commit: Commit | None = None

    @property
    def author(self) -> str | None:
        return self.commit.committer_email if self.commit else None


def _walk_files(directory: str) -> list[str]:
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if os.path.isfile(path):
                files.append(path)
    return files


class ChangeSetResolver:
    def __init__(self, git: Git, attributor: CommitAttributor | None = None, exclude: list[str] | None = None):
        self._git = git
        self._attributor = attributor if attributor is not None else CommitAttributor(git)
        self._exclude = exclude or []
        # Branch seen by the last branch-diff resolve; None in explicit-path mode.
        self.branch: str | None = None

    def resolve(
        self,
        explicit_paths: list[str] | None,
        main_branch: str,
        committer_filter: CommitterFilter = NoCommitterFilter(),
    ) -> list[ReviewTarget]:
        self.branch = None
        if explicit_paths:
            targets = self._from_paths(explicit_paths)
        else:
            targets = self._from_branch(main_branch, committer_filter)

        if self._exclude:
            root = os.getcwd()
            kept = [t for t in targets if not is_excluded(t.path, self._exclude, root)]
            logger.debug("Excluded %d of %d file(s)", len(targets) - len(kept), len(targets))
            targets = kept
        return targets

    def _from_paths(self, explicit_paths: list[str]) -> list[ReviewTarget]:
        # Validate everything first so a bad argument never yields partial results.
        for entry in explicit_paths:
            if not os.path.isfile(entry) and not os.path.isdir(entry):
                raise InvalidSourceError(entry)

        seen: set[str] = set()
        targets: list[ReviewTarget] = []
        for entry in explicit_paths:
            absolute = os.path.abspath(entry)
            paths = _walk_files(absolute) if os.path.isdir(absolute) else [absolute]
            for path in paths:
                if path not in seen:
                    seen.add(path)
                    targets.append(ReviewTarget(path=path))
        return targets

    def _from_branch(self, main_branch: str, committer_filter: CommitterFilter) -> list[ReviewTarget]:
        branch = self._git.current_branch()
        self.branch = branch
        if branch == main_branch:
            logger.debug("On main branch %s; nothing to compare", main_branch)
            return []

        author = self._author_for(committer_filter)
        commits = self._attributor.attribute(main_branch, author)

        seen: set[str] = set()
        targets: list[ReviewTarget] = []
        for commit in commits.values():
            for path in commit.files:
                if path not in seen:
                    seen.add(path)
                    targets.append(ReviewTarget(path=path, commit=commit))
        logger.debug("Branch %s: %d file(s) across %d commit(s)", branch, len(targets), len(commits))
        return targets

    def _author_for(self, committer_filter: CommitterFilter) -> str | None:
        if isinstance(committer_filter, AutoCommitter):
            return self._git.config_value("user.email")
        if isinstance(committer_filter, ExplicitCommitter):
            return committer_filter.email
        return None
