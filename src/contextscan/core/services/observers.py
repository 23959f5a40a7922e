from __future__ import annotations

"""
Scan Observers.

Ready-made phase observers: one that reports scan timings through the
logging subsystem and one that records events for later inspection.
"""

import logging
from typing import List

from contextscan.domain.scan_models import (
    PHASE_ASSEMBLY,
    PHASE_COUNTING,
    PHASE_TRAVERSAL,
    ScanEvent,
)


class LoggingScanObserver:
    """Writes one log line per completed scan phase."""

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        self._logger = logger
        self._level = level

    def __call__(self, event: ScanEvent) -> None:
        self._logger.log(self._level, format_event(event))


class RecordingScanObserver:
    """Keeps every received event in arrival order."""

    def __init__(self) -> None:
        self.events: List[ScanEvent] = []

    def __call__(self, event: ScanEvent) -> None:
        self.events.append(event)

    @property
    def phases(self) -> List[str]:
        return [e.phase for e in self.events]


def format_event(event: ScanEvent) -> str:
    """Human-readable summary of a phase event."""
    elapsed_ms = event.elapsed * 1000
    if event.phase == PHASE_TRAVERSAL:
        return (
            f"Directory walking completed in {elapsed_ms:.1f} ms - "
            f"found {event.entries} entries, {event.source_files} source files"
        )
    if event.phase == PHASE_COUNTING:
        return (
            f"Token counting completed in {elapsed_ms:.1f} ms - "
            f"{event.counted}/{event.candidates} candidates counted"
        )
    if event.phase == PHASE_ASSEMBLY:
        return (
            f"Tree building completed in {elapsed_ms:.1f} ms - "
            f"created {event.root_nodes} root nodes"
        )
    return f"Phase '{event.phase}' completed in {elapsed_ms:.1f} ms"
