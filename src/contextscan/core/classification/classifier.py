from __future__ import annotations

"""
Entry Classification Engine.

Decides whether a directory must be pruned from traversal and whether a
file is a source file. Classification is a two-tier check: a cheap
extension/filename test decides inclusion, while content sniffing is only
consulted to gate token counting and never changes the classification.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from contextscan.domain.constants import (
    BINARY_EXTENSIONS,
    IGNORED_DIRECTORIES,
    SOURCE_EXTENSIONS,
    SOURCE_FILENAMES,
    TEXT_CONTROL_BYTES,
    UTF16_BOMS,
)
from contextscan.domain.scan_models import SniffPolicy

logger = logging.getLogger(__name__)

_DEFAULT_POLICY = SniffPolicy()


@dataclass(frozen=True)
class Classification:
    """
    Result of classifying a single path.

    Attributes:
        is_directory: True for directories.
        is_source_file: True for files matching the source allow-list.
    """
    is_directory: bool
    is_source_file: bool


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def classify(path: str, is_directory: Optional[bool] = None) -> Classification:
    """
    Classify a filesystem path as directory, source file or non-source file.

    Args:
        path: Path to classify.
        is_directory: Known entry type. When None the filesystem is queried.

    Returns:
        Classification: Directory flag and source-file flag.
    """
    if is_directory is None:
        is_directory = os.path.isdir(path)

    if is_directory:
        return Classification(is_directory=True, is_source_file=False)

    return Classification(is_directory=False, is_source_file=is_source_name(os.path.basename(path)))


def is_ignored_directory(name: str) -> bool:
    """
    Check whether a directory name belongs to the pruning list.

    Args:
        name: Directory base name.

    Returns:
        bool: True if the directory must never be traversed.
    """
    return name.lower() in IGNORED_DIRECTORIES


def is_source_name(file_name: str) -> bool:
    """
    Classify a file name against the binary deny-list and source allow-list.

    Known binary extensions win unconditionally. Otherwise a known source
    extension or a conventional build/metadata filename marks the file as
    source. Everything else is non-source.

    Args:
        file_name: Base name of the file.

    Returns:
        bool: True for source files.
    """
    _, ext = os.path.splitext(file_name)
    ext = ext.lower()

    if ext in BINARY_EXTENSIONS:
        return False
    if ext in SOURCE_EXTENSIONS:
        return True
    return file_name.lower() in SOURCE_FILENAMES


def is_likely_binary(
        path: str,
        sample: Optional[bytes] = None,
        policy: SniffPolicy = _DEFAULT_POLICY,
) -> bool:
    """
    Sniff file content to decide whether it is binary.

    Args:
        path: File to inspect. Only opened when no sample is supplied.
        sample: Leading bytes already read by the caller.
        policy: Sniffing thresholds.

    Returns:
        bool: True if the content looks binary. Unreadable files return
              False; the read that follows reports the failure.
    """
    if sample is None:
        try:
            with open(path, "rb") as f:
                sample = f.read(policy.sample_size)
        except OSError as e:
            logger.debug(f"Binary sniff skipped for {path}: {e}")
            return False

    return is_binary_sample(sample, policy)


def is_binary_sample(sample: bytes, policy: SniffPolicy = _DEFAULT_POLICY) -> bool:
    """
    Apply the binary heuristics to a byte sample.

    The sample is binary if it starts with a UTF-16 byte-order mark,
    contains a NUL byte, or more than 'control_ratio' of its first
    'control_window' bytes are control characters other than tab,
    line-feed, form-feed and carriage-return.

    Args:
        sample: Leading bytes of a file (truncated to policy.sample_size).
        policy: Sniffing thresholds.

    Returns:
        bool: True if the sample looks binary.
    """
    sample = bytes(sample[:policy.sample_size])
    if not sample:
        return False

    if sample[:2] in UTF16_BOMS:
        return True

    if b"\x00" in sample:
        return True

    window = sample[:policy.control_window]
    if not window:
        return False

    control_chars = sum(
        1 for b in window
        if (b < 0x20 and b not in TEXT_CONTROL_BYTES) or b == 0x7F
    )
    return control_chars / len(window) > policy.control_ratio
