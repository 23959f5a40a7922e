from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides scan-root path resolution and resolution of the per-user
data directory (used for persistent diagnostics).
"""

import os

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "ContextScan"
UNIX_APP_DIR_NAME = ".contextscan"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for application data.

    The directory is not created here; writers create it on demand.
    Standards:
    - Windows: %LOCALAPPDATA%/ContextScan
    - Linux/Mac: ~/.contextscan

    Returns:
        str: Absolute path to the application data directory.
    """
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return os.path.abspath(os.path.join(base, APP_DIR_NAME))

    return os.path.abspath(os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME))


def get_default_log_path(file_name: str = "contextscan.log") -> str:
    """Standard diagnostic log path within the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def resolve_root_path(path: str) -> str:
    """
    Resolve a scan root into an absolute filesystem path.

    The path is taken literally: environment variables are not expanded and
    surrounding whitespace is kept, so directories named `$HOME` or
    ` padded ` resolve to themselves. A leading `~` is expanded only when
    the literal path does not exist.

    Args:
        path: Raw root path as supplied by the caller.

    Returns:
        str: Absolute path without trailing separator.
    """
    literal = os.path.abspath(path)
    if os.path.exists(literal):
        return literal
    return os.path.abspath(os.path.expanduser(path))
