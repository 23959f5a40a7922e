from __future__ import annotations

"""
Scan Domain Data Models.

Defines the immutable policy object that drives a single scan, the binary
sniffing policy derived from it, the phase events delivered to scan
observers, and the result record of plain batched file reads.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from contextscan.domain.constants import (
    DEFAULT_CONTROL_RATIO,
    DEFAULT_CONTROL_WINDOW,
    DEFAULT_ENCODING,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_SMALL_FILE_THRESHOLD,
    DEFAULT_SNIFF_SAMPLE_SIZE,
)

# -----------------------------------------------------------------------------
# POLICY MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SniffPolicy:
    """
    Heuristic thresholds for content-based binary detection.

    Attributes:
        sample_size: Number of leading bytes inspected.
        control_window: Leading bytes of the sample checked for control characters.
        control_ratio: Fraction of control characters above which content is binary.
    """
    sample_size: int = DEFAULT_SNIFF_SAMPLE_SIZE
    control_window: int = DEFAULT_CONTROL_WINDOW
    control_ratio: float = DEFAULT_CONTROL_RATIO


@dataclass(frozen=True)
class ScanConfig:
    """
    Immutable policy for one directory scan.

    Attributes:
        max_file_size: Files larger than this (bytes) are never read for counting.
        small_file_threshold: Files up to this size (bytes) are read eagerly;
            larger ones are memory-mapped.
        max_depth: Traversal depth limit (scan root = 0).
        enable_parallel_counting: Count candidates on a worker pool.
        enable_token_counting: When False, no file is read and every
            token count stays absent.
        follow_symlinks: Descend into symlinked directories (cycle-checked).
        respect_gitignore: Prune entries matched by `.gitignore` and `.ignore`
            files found inside the scanned tree.
        max_workers: Worker pool size; None uses the hardware concurrency.
        encoding: Tokenizer encoding name ('o200k_base', 'cl100k_base' or
            'hf:<repo-id>').
        sniff_sample_size: See SniffPolicy.sample_size.
        control_window: See SniffPolicy.control_window.
        control_ratio: See SniffPolicy.control_ratio.
    """
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    small_file_threshold: int = DEFAULT_SMALL_FILE_THRESHOLD
    max_depth: int = DEFAULT_MAX_DEPTH
    enable_parallel_counting: bool = True
    enable_token_counting: bool = True
    follow_symlinks: bool = False
    respect_gitignore: bool = True
    max_workers: Optional[int] = None
    encoding: str = DEFAULT_ENCODING
    sniff_sample_size: int = DEFAULT_SNIFF_SAMPLE_SIZE
    control_window: int = DEFAULT_CONTROL_WINDOW
    control_ratio: float = DEFAULT_CONTROL_RATIO

    @property
    def sniff_policy(self) -> SniffPolicy:
        """Binary sniffing thresholds carried by this configuration."""
        return SniffPolicy(
            sample_size=self.sniff_sample_size,
            control_window=self.control_window,
            control_ratio=self.control_ratio,
        )


# -----------------------------------------------------------------------------
# OBSERVER EVENTS
# -----------------------------------------------------------------------------

PHASE_TRAVERSAL = "traversal"
PHASE_COUNTING = "counting"
PHASE_ASSEMBLY = "assembly"


@dataclass(frozen=True)
class ScanEvent:
    """
    Phase-boundary notification emitted by the scanner.

    Attributes:
        phase: One of 'traversal', 'counting' or 'assembly'.
        root: Normalized scan root.
        elapsed: Seconds spent in the phase that just completed.
        entries: Entries recorded during traversal.
        source_files: Entries classified as source files.
        candidates: Files selected for token counting.
        counted: Files that received a token count.
        root_nodes: Top-level nodes of the assembled tree.
    """
    phase: str
    root: str
    elapsed: float
    entries: int = 0
    source_files: int = 0
    candidates: int = 0
    counted: int = 0
    root_nodes: int = 0


ScanObserver = Callable[[ScanEvent], None]


# -----------------------------------------------------------------------------
# PLAIN READ RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileContent:
    """
    Outcome of reading one file in a batched read.

    Attributes:
        path: Requested path.
        content: Decoded text, or None if the read failed.
        error: Failure description, or None on success.
    """
    path: str
    content: Optional[str] = None
    error: Optional[str] = None
