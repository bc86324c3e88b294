"""Fatal error taxonomy for a review run.

Every error here aborts the run and reaches the process boundary, where the
CLI maps it to ExitCode.APPLICATION_ERROR. Review findings are never raised;
they are ordinary ReviewResult values.
"""

from __future__ import annotations


class DcrError(Exception):
    """Base class for all application errors."""


class InvalidSourceError(DcrError):
    """An explicitly named file or directory does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path not found: {path}")


class VcsQueryError(DcrError):
    """A version-control command exited with a non-zero status."""

    def __init__(self, command: list[str], output: str):
        self.command = command
        self.output = output
        super().__init__(f"Command failed: {' '.join(command)}\n{output.strip()}")


class ToolInvocationError(DcrError):
    """The analysis tool returned a status outside {success, failed}."""

    def __init__(self, path: str, exit_status: int, output: str):
        self.path = path
        self.exit_status = exit_status
        self.output = output
        super().__init__(f"Analysis tool exited with status {exit_status} on {path}\n{output.strip()}")


class StandardNotFoundError(DcrError):
    """No discovered ruleset carries the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Coding standard not found: {name}")


class CommandNotFoundError(DcrError):
    """The executable of an external command is not installed."""

    def __init__(self, command: list[str]):
        self.command = command
        super().__init__(f"Executable not found: {command[0] if command else '<empty>'}")
