from __future__ import annotations

"""
Logging Configuration Models.

Describes how the diagnostic subsystem is wired for a run: verbosity,
console output on stderr and an optional rotating log file. Front ends
derive it from their verbosity switches.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted level names (case-insensitive) and their numeric values
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
# Counting workers log from pool threads, hence the thread name
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings consumed by configure_logging().

    Attributes:
        level: Minimum severity captured by every output.
        console: Write records to stderr.
        log_file: Optional path of a rotating diagnostic file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the log file.
        datefmt: Timestamp layout in the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = CONSOLE_FORMAT
    file_fmt: str = FILE_FORMAT
    datefmt: str = DATE_FORMAT

    @classmethod
    def for_verbosity(
            cls,
            verbose: bool = False,
            debug: bool = False,
            log_file: Optional[str] = None,
    ) -> "LoggingConfig":
        """
        Map command-line verbosity switches to a configuration.

        Args:
            verbose: Report phase timings (INFO).
            debug: Report per-entry decisions (DEBUG); wins over verbose.
            log_file: Optional diagnostic file.

        Returns:
            LoggingConfig: Console-enabled configuration.
        """
        if debug:
            level = "DEBUG"
        elif verbose:
            level = "INFO"
        else:
            level = "WARNING"
        return cls(level=level, console=True, log_file=log_file)
