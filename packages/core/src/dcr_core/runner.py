"""Synchronous external command execution.

Both git queries and analysis-tool runs go through CommandRunner so tests can
substitute an in-memory fake for the real subprocess boundary. There is no
timeout and no retry: every call blocks until the command exits.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass

from dcr_core.errors import CommandNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    stdout: str
    stderr: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class CommandRunner(ABC):
    @abstractmethod
    def run(self, command: list[str], cwd: str | None = None) -> CommandResult:
        """Run command to completion and return its captured output."""


class SubprocessRunner(CommandRunner):
    """Runs commands with subprocess, capturing stdout and stderr as text.

    Output is decoded as UTF-8; undecodable bytes become U+FFFD.
    """

    def run(self, command: list[str], cwd: str | None = None) -> CommandResult:
        logger.debug("Running: %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=cwd,
                check=False,
            )
        except FileNotFoundError:
            raise CommandNotFoundError(command)
        logger.debug("Exit status %d: %s", completed.returncode, command[0])
        return CommandResult(
            stdout=completed.stdout,
            stderr=completed.stderr,
            exit_status=completed.returncode,
        )
