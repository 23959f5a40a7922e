from __future__ import annotations

"""
Unit tests for the Scan Observers.
"""

import logging

from contextscan.core.services.observers import (
    LoggingScanObserver,
    RecordingScanObserver,
    format_event,
)
from contextscan.domain.scan_models import ScanEvent


def test_format_event_per_phase() -> None:
    traversal = ScanEvent(phase="traversal", root="/p", elapsed=0.0125, entries=10, source_files=4)
    counting = ScanEvent(phase="counting", root="/p", elapsed=0.5, candidates=4, counted=3)
    assembly = ScanEvent(phase="assembly", root="/p", elapsed=0.001, root_nodes=2)

    assert format_event(traversal) == (
        "Directory walking completed in 12.5 ms - found 10 entries, 4 source files"
    )
    assert "3/4 candidates counted" in format_event(counting)
    assert "created 2 root nodes" in format_event(assembly)
    assert format_event(ScanEvent(phase="other", root="/p", elapsed=0.0)).startswith("Phase 'other'")


def test_logging_observer_writes_at_level(caplog) -> None:
    logger = logging.getLogger("contextscan.test.observer")
    observer = LoggingScanObserver(logger, logging.WARNING)

    with caplog.at_level(logging.WARNING, logger="contextscan.test.observer"):
        observer(ScanEvent(phase="assembly", root="/p", elapsed=0.0, root_nodes=1))

    assert any("Tree building completed" in r.getMessage() for r in caplog.records)


def test_recording_observer() -> None:
    observer = RecordingScanObserver()
    observer(ScanEvent(phase="traversal", root="/p", elapsed=0.0))
    observer(ScanEvent(phase="counting", root="/p", elapsed=0.0))

    assert observer.phases == ["traversal", "counting"]
    assert len(observer.events) == 2
