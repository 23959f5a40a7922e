from __future__ import annotations

"""
Adaptive File Reader.

Produces the text handed to the tokenizer, choosing the cheapest reading
strategy for the file size: small files are read eagerly into memory while
larger ones are memory-mapped and decoded straight from the mapped pages.
Content that looks binary or is not valid UTF-8 yields no text rather than
an error.
"""

import logging
import mmap
from typing import Optional

from contextscan.core.classification.classifier import is_likely_binary
from contextscan.domain.errors import FileReadError
from contextscan.domain.scan_models import ScanConfig

logger = logging.getLogger(__name__)

STRATEGY_SKIP = "skip"
STRATEGY_EMPTY = "empty"
STRATEGY_BUFFERED = "buffered"
STRATEGY_MMAP = "mmap"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def select_strategy(size: int, config: ScanConfig) -> str:
    """
    Pick the reading strategy for a file of a given size.

    Args:
        size: File size in bytes.
        config: Active scan policy.

    Returns:
        str: 'skip' (oversized), 'empty', 'buffered' or 'mmap'.
    """
    if size > config.max_file_size:
        return STRATEGY_SKIP
    if size == 0:
        return STRATEGY_EMPTY
    if size <= config.small_file_threshold:
        return STRATEGY_BUFFERED
    return STRATEGY_MMAP


def read_for_counting(path: str, size: int, config: ScanConfig) -> Optional[str]:
    """
    Read a file as text for token counting.

    Args:
        path: File to read.
        size: Size reported by traversal, in bytes.
        config: Active scan policy (size limits and sniffing thresholds).

    Returns:
        Optional[str]: Decoded text, '' for empty files, or None when the
                       file is oversized, looks binary or is not valid UTF-8.

    Raises:
        FileReadError: If the file cannot be opened, mapped or read.
    """
    strategy = select_strategy(size, config)

    if strategy == STRATEGY_SKIP:
        logger.debug(f"Skipping oversized file ({size} bytes): {path}")
        return None
    if strategy == STRATEGY_EMPTY:
        return ""

    try:
        if strategy == STRATEGY_BUFFERED:
            return _read_buffered(path, config)
        return _read_mapped(path, config)
    except (OSError, ValueError, BufferError) as e:
        raise FileReadError(path, str(e)) from e


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _read_buffered(path: str, config: ScanConfig) -> Optional[str]:
    """Read the whole file into memory and decode it."""
    with open(path, "rb") as f:
        data = f.read()

    policy = config.sniff_policy
    if is_likely_binary(path, sample=data[:policy.sample_size], policy=policy):
        logger.debug(f"Binary content detected: {path}")
        return None

    return _decode(path, data)


def _read_mapped(path: str, config: ScanConfig) -> Optional[str]:
    """Map the file read-only and decode directly from the mapped view."""
    with open(path, "rb") as f:
        # The file may have been truncated since traversal
        if f.seek(0, 2) == 0:
            return ""

        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
            policy = config.sniff_policy
            if is_likely_binary(path, sample=mapped[:policy.sample_size], policy=policy):
                logger.debug(f"Binary content detected: {path}")
                return None

            # The view must be released before the mapping is closed
            with memoryview(mapped) as view:
                return _decode(path, view)


def _decode(path: str, data) -> Optional[str]:
    """Strict UTF-8 decode; invalid sequences mean unsupported content."""
    try:
        return str(data, "utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Invalid UTF-8 content: {path}")
        return None
