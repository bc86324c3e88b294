"""Coding-standard (ruleset) discovery and analysis-tool command construction."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ElementTree
from pathlib import Path

from dcr_core.errors import StandardNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_STANDARD = "DCR"
RULESET_FILENAME = "ruleset.xml"
BUILTIN_STANDARDS_DIR = Path(__file__).parent / "rulesets"


def discover_standards(root: str | os.PathLike | None = None) -> dict[str, str]:
    """Return {ruleset path: standard name} for every ruleset.xml beneath root.

    Rulesets that cannot be parsed or have no name attribute are skipped.
    """
    root = Path(root) if root is not None else BUILTIN_STANDARDS_DIR
    standards: dict[str, str] = {}
    for path in sorted(root.rglob(RULESET_FILENAME)):
        try:
            name = ElementTree.parse(path).getroot().get("name")
        except ElementTree.ParseError as e:
            logger.warning("Skipping unreadable ruleset %s: %s", path, e)
            continue
        if not name:
            logger.warning("Skipping ruleset without a name attribute: %s", path)
            continue
        standards[str(path)] = name
    return standards


def select_standard(standards: dict[str, str], name: str) -> str:
    """Return the ruleset path whose standard is called name."""
    for path, standard in standards.items():
        if standard == name:
            return path
    raise StandardNotFoundError(name)


def get_default_standard(standards: dict[str, str]) -> str:
    return select_standard(standards, DEFAULT_STANDARD)


def build_command(tool: str, standard_path: str, path: str, show_codes: bool = False) -> list[str]:
    command = [tool, f"--standard={standard_path}", "--colors"]
    if show_codes:
        command.append("--sniff-codes")
    command.append(path)
    return command
