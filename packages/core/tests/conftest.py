"""Shared fixtures: an in-memory CommandRunner standing in for git and phpcs."""

from __future__ import annotations

import pytest

from dcr_core.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """Answers commands by longest matching prefix and records every call."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self._responses: list[tuple[tuple[str, ...], object]] = []

    def on(self, *prefix: str, stdout: str = "", stderr: str = "", exit_status: int = 0):
        self._responses.append((prefix, CommandResult(stdout, stderr, exit_status)))
        return self

    def on_call(self, *prefix: str, handler):
        """Answer with handler(command) -> CommandResult, for per-file behaviour."""
        self._responses.append((prefix, handler))
        return self

    def run(self, command: list[str], cwd: str | None = None) -> CommandResult:
        self.calls.append(list(command))
        best = None
        for prefix, response in self._responses:
            if tuple(command[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best[0])):
                best = (prefix, response)
        if best is None:
            raise AssertionError(f"Unexpected command: {command}")
        response = best[1]
        return response(command) if callable(response) else response

    def ran(self, *prefix: str) -> bool:
        return any(tuple(c[: len(prefix)]) == prefix for c in self.calls)


@pytest.fixture
def runner():
    return FakeRunner()
