"""Git queries used to work out which files a branch has changed.

Each helper issues one git command through a CommandRunner. A non-zero exit
status is surfaced as VcsQueryError carrying git's diagnostic output.
"""

from __future__ import annotations

import logging

from dcr_core.errors import VcsQueryError
from dcr_core.runner import CommandRunner

logger = logging.getLogger(__name__)

# Marks commit header lines in the outgoing log so they can be told apart
# from the file names that follow them.
COMMIT_PREFIX = "INFO:"

_LOG_FORMAT = f"{COMMIT_PREFIX}%H|%ce|%s|%ct"


class Git:
    def __init__(self, runner: CommandRunner, cwd: str | None = None):
        self._runner = runner
        self._cwd = cwd

    def _query(self, *args: str) -> str:
        command = ["git", *args]
        result = self._runner.run(command, cwd=self._cwd)
        if not result.ok:
            raise VcsQueryError(command, result.stderr or result.stdout)
        return result.stdout

    def current_branch(self) -> str:
        return self._query("rev-parse", "--abbrev-ref", "HEAD").strip()

    def config_value(self, key: str) -> str:
        return self._query("config", "--get", key).strip()

    def toplevel(self) -> str:
        return self._query("rev-parse", "--show-toplevel").strip()

    def outgoing_log(self, compare_to_branch: str, author: str | None = None) -> str:
        """Return the log of commits on HEAD that are not in compare_to_branch.

        --cherry-pick drops commits whose patch is already present upstream,
        so rebased or cherry-picked work is not reviewed twice. Each commit is
        emitted as a COMMIT_PREFIX header followed by the paths it touches.
        core.quotePath=false keeps non-ASCII paths as plain UTF-8 text instead
        of quoted octal escapes.
        """
        args = [
            "-c",
            "core.quotePath=false",
            "log",
            "--cherry-pick",
            "--right-only",
            "--no-merges",
            "--name-only",
            f"--pretty=format:{_LOG_FORMAT}",
        ]
        if author:
            args.append(f"--author={author}")
        args.append(f"{compare_to_branch}...HEAD")
        logger.debug("Querying outgoing commits against %s (author=%s)", compare_to_branch, author)
        return self._query(*args)
