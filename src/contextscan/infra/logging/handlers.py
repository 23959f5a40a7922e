from __future__ import annotations

"""
Logging Output Handlers.

Builds the concrete outputs fed by the queue listener (stderr stream and
rotating file) and tags them, so reconfiguration and shutdown only ever
touch handlers this package installed.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from contextscan.infra.logging.config import LoggingConfig

# Marker attribute set on every handler owned by contextscan
_HANDLER_TAG_ATTR: str = "_contextscan_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _build_output_handlers(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    """
    Create the outputs requested by a configuration.

    Args:
        cfg: Logging configuration.
        level: Numeric threshold applied to each output.

    Returns:
        List[logging.Handler]: Tagged handlers, possibly empty.
    """
    outputs: List[logging.Handler] = []

    if cfg.console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(level)
        stream.setFormatter(logging.Formatter(cfg.console_fmt))
        outputs.append(_tag_handler(stream))

    if cfg.log_file:
        rotating = _open_rotating_file(cfg)
        if rotating is not None:
            rotating.setLevel(level)
            rotating.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            outputs.append(_tag_handler(rotating))

    return outputs


def _open_rotating_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its folder.

    An unwritable location only costs the file output: the failure is
    reported on stderr and the remaining outputs keep working.
    """
    path = os.path.abspath(cfg.log_file)
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot write log file '{path}': {e}\n")
        return None
