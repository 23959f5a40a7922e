from __future__ import annotations

"""
Ignore-File Rules.

Reads the `.gitignore` and `.ignore` files found while walking a project
and translates their glob lines into compiled regexes. Rules stack up as
the walk descends: a directory sees the rules of every ancestor inside the
scan root plus its own, and the last matching rule decides (a `!` rule
re-includes what an earlier one excluded).
"""

import fnmatch
import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from contextscan.domain.constants import IGNORE_FILE_NAMES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnoreRule:
    """
    One translated ignore line.

    Attributes:
        base_dir: Directory holding the ignore file; anchored rules are
            matched relative to it.
        regex: Compiled translation of the glob.
        negated: `!pattern`, re-includes matching entries.
        directory_only: `pattern/`, only applies to directories.
        anchored: The glob contains a slash and is matched against the
            relative path instead of the base name.
    """
    base_dir: str
    regex: re.Pattern
    negated: bool = False
    directory_only: bool = False
    anchored: bool = False


# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

def parse_ignore_line(line: str, base_dir: str) -> Optional[IgnoreRule]:
    """
    Translate a single ignore-file line.

    Args:
        line: Raw line, trailing newline allowed.
        base_dir: Directory the ignore file lives in.

    Returns:
        Optional[IgnoreRule]: None for blank lines, comments and globs
        that do not translate into a valid regex.
    """
    pattern = line.rstrip("\r\n").rstrip(" ")
    if not pattern or pattern.startswith("#"):
        return None

    negated = pattern.startswith("!")
    if negated:
        pattern = pattern[1:]
    elif pattern.startswith("\\"):
        # \# and \! escape a literal first character
        pattern = pattern[1:]

    directory_only = pattern.endswith("/")
    pattern = pattern.rstrip("/")

    if pattern.startswith("**/"):
        pattern = pattern[3:]
    anchored = "/" in pattern
    pattern = pattern.lstrip("/")
    if not pattern:
        return None

    try:
        regex = re.compile(fnmatch.translate(pattern))
    except re.error:
        return None

    return IgnoreRule(
        base_dir=base_dir,
        regex=regex,
        negated=negated,
        directory_only=directory_only,
        anchored=anchored,
    )


def load_ignore_rules(directory: str) -> List[IgnoreRule]:
    """
    Read the ignore files placed directly inside a directory.

    Args:
        directory: Directory being entered by the walk.

    Returns:
        List[IgnoreRule]: Rules in file order, `.gitignore` first.
    """
    rules: List[IgnoreRule] = []
    for file_name in IGNORE_FILE_NAMES:
        ignore_path = os.path.join(directory, file_name)
        if not os.path.isfile(ignore_path):
            continue
        try:
            with open(ignore_path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    rule = parse_ignore_line(line, directory)
                    if rule is not None:
                        rules.append(rule)
        except OSError as e:
            logger.warning(f"Could not read ignore file {ignore_path}: {e}")
    return rules


# -----------------------------------------------------------------------------
# MATCHING
# -----------------------------------------------------------------------------

class IgnoreMatcher:
    """Ordered rule stack for one directory of the walk."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self._rules: Tuple[IgnoreRule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[IgnoreRule, ...]:
        return self._rules

    def descend(self, directory: str) -> "IgnoreMatcher":
        """Matcher for the children of `directory`, adding its own ignore files."""
        local = load_ignore_rules(directory)
        if not local:
            return self
        logger.debug(f"Loaded {len(local)} ignore rule(s) from {directory}")
        return IgnoreMatcher(self._rules + tuple(local))

    def is_ignored(self, path: str, is_directory: bool) -> bool:
        """
        Decide whether an entry is excluded by the accumulated rules.

        Args:
            path: Absolute path of the entry.
            is_directory: Directory-only rules are skipped for files.

        Returns:
            bool: True when the last matching rule is not a negation.
        """
        ignored = False
        name = os.path.basename(path)
        for rule in self._rules:
            if rule.directory_only and not is_directory:
                continue
            if _rule_matches(rule, path, name):
                ignored = not rule.negated
        return ignored


def _rule_matches(rule: IgnoreRule, path: str, name: str) -> bool:
    if not rule.anchored:
        return rule.regex.match(name) is not None

    relative = os.path.relpath(path, rule.base_dir)
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return False
    return rule.regex.match(relative.replace(os.sep, "/")) is not None
