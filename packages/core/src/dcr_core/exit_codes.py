"""Process-level exit codes and the policy that combines per-file outcomes."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILED = 1
    # 2 is left to click for usage errors.
    APPLICATION_ERROR = 3


def combine(codes: Iterable[ExitCode]) -> ExitCode:
    """Return FAILED if any code is FAILED, else SUCCESS (including for no codes)."""
    result = ExitCode.SUCCESS
    for code in codes:
        result = ExitCode(result | code)
    return result
