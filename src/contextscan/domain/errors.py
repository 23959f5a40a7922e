from __future__ import annotations

"""
Error Taxonomy.

Defines the exception hierarchy shared by the scanning, reading and
tokenization layers. Only path validation and root-level traversal failures
escape a scan; every other error degrades to missing data on a single node.
"""


class ContextScanError(Exception):
    """Base class for every error raised by the contextscan package."""


# -----------------------------------------------------------------------------
# SCAN-LEVEL (FATAL) ERRORS
# -----------------------------------------------------------------------------

class InvalidPathError(ContextScanError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, path: str, reason: str = "not an existing directory") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid directory path: {path} ({reason})")


class DirectoryScanError(ContextScanError):
    """The scan root exists but could not be listed."""


# -----------------------------------------------------------------------------
# PER-FILE (RECOVERABLE) ERRORS
# -----------------------------------------------------------------------------

class FileReadError(ContextScanError):
    """
    A single file could not be opened, mapped or read.

    Attributes:
        path: Filesystem path of the failing file.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to read {path}: {message}")


class TokenizerUnavailable(ContextScanError):
    """The token-counting backend failed to initialize."""
