from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the lifecycle of the logging subsystem. The root logger receives a
single QueueHandler; a QueueListener thread drains the queue into the real
outputs, so counting workers never block on console or file I/O.
Configuration is idempotent and shutdown flushes every pending record.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from contextscan.infra.logging.config import _LEVEL_MAP, LoggingConfig
from contextscan.infra.logging.handlers import (
    _build_output_handlers,
    _is_our_handler,
    _tag_handler,
)

# State stored on the root logger between calls
_CONFIGURED_FLAG_ATTR: str = "_contextscan_configured"
_QUEUE_LISTENER_ATTR: str = "_contextscan_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route every log record through a queue to the configured outputs.

    Calling it again is a no-op unless force is set, in which case the
    previous listener is stopped and its handlers are replaced.

    Args:
        cfg: Logging configuration.
        force: Rebuild the pipeline even if it is already installed.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level = _parse_level(cfg.level)
        root.setLevel(level)
        _teardown(root)

        outputs = _build_output_handlers(cfg, level)
        if not outputs:
            return root

        records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        listener = QueueListener(records, *outputs, respect_handler_level=True)
        listener.start()
        root.addHandler(_tag_handler(QueueHandler(records)))

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        atexit.register(_safe_stop_listener, listener)
        return root

    except Exception as e:
        # Diagnostics must never take the scan down with them
        _teardown(root)
        emergency = logging.StreamHandler(sys.stderr)
        emergency.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        root.addHandler(_tag_handler(emergency))
        root.warning(f"Logging setup failed ({e}). Falling back to plain stderr output.")
        return root


def shutdown_logging() -> None:
    """Flush pending records, detach our handlers and allow reconfiguration."""
    root = logging.getLogger()
    _teardown(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Named logger feeding the root pipeline (usually called with __name__)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Numeric level for a level name; unknown or empty names mean INFO."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _teardown(root: logging.Logger) -> None:
    """Stop the current listener and remove every handler we attached."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

        # Outputs belong to the listener, not to the root logger
        for output in listener.handlers:
            output.close()

    for handler in list(root.handlers):
        if _is_our_handler(handler):
            root.removeHandler(handler)
            handler.close()


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener that may already have been stopped.

    atexit runs after any explicit shutdown, when the listener thread has
    already been joined.
    """
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
