from __future__ import annotations

"""
Token Counting Fan-out.

Selects counting candidates among the entries recorded by traversal and
counts them either sequentially or on a bounded worker pool. Every task
reads one file and writes one result keyed by its path; the pool is joined
in full before the results are returned, so callers never observe a
partially populated map.
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

from contextscan.core.processing.reader import read_for_counting
from contextscan.core.processing.tokenizer import TokenizerService
from contextscan.domain.errors import FileReadError, TokenizerUnavailable
from contextscan.domain.scan_models import ScanConfig
from contextscan.domain.tree_models import EntryInfo

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CANDIDATE SELECTION
# -----------------------------------------------------------------------------

def select_candidates(entries: Iterable[EntryInfo], config: ScanConfig) -> List[EntryInfo]:
    """
    Filter traversal records down to the files eligible for counting.

    A file is a candidate when counting is enabled, it is classified as
    source and it does not exceed the size limit. Content sniffing happens
    inside each counting task, on the bytes that task reads anyway.

    Args:
        entries: Records collected during traversal.
        config: Active scan policy.

    Returns:
        List[EntryInfo]: Immutable work list for the counting stage.
    """
    if not config.enable_token_counting:
        return []

    return [
        e for e in entries
        if e.is_source_file and not e.is_directory and e.size <= config.max_file_size
    ]


# -----------------------------------------------------------------------------
# COUNTING
# -----------------------------------------------------------------------------

def count_file(entry: EntryInfo, config: ScanConfig, tokenizer: TokenizerService) -> Optional[int]:
    """
    Count the tokens of a single file, degrading every failure to None.

    Args:
        entry: Candidate file record.
        config: Active scan policy.
        tokenizer: Shared token counter.

    Returns:
        Optional[int]: Token count, or None if the file could not be counted.
    """
    try:
        text = read_for_counting(entry.path, entry.size, config)
    except FileReadError as e:
        logger.debug(f"No token count for {entry.path}: {e}")
        return None

    if text is None:
        return None

    try:
        return tokenizer.count(text)
    except TokenizerUnavailable:
        return None
    except Exception as e:
        logger.warning(f"Tokenizer failed on {entry.path}: {e}")
        return None


def count_candidates(
        candidates: List[EntryInfo],
        config: ScanConfig,
        tokenizer: TokenizerService,
) -> Dict[str, Optional[int]]:
    """
    Count every candidate and collect the results keyed by path.

    Args:
        candidates: Files selected for counting.
        config: Active scan policy (parallelism and pool size).
        tokenizer: Shared token counter.

    Returns:
        Dict[str, Optional[int]]: Path to token count (None on failure).
    """
    results: Dict[str, Optional[int]] = {}
    if not candidates:
        return results

    # Initialization failure degrades the whole stage before any file is read
    if not tokenizer.available:
        logger.warning(f"Token counting skipped for {len(candidates)} files: tokenizer unavailable.")
        return {entry.path: None for entry in candidates}

    if not config.enable_parallel_counting or len(candidates) == 1:
        for entry in candidates:
            results[entry.path] = count_file(entry, config, tokenizer)
        return results

    lock = threading.Lock()

    def _task(entry: EntryInfo) -> None:
        count = count_file(entry, config, tokenizer)
        with lock:
            results[entry.path] = count

    workers = config.max_workers or os.cpu_count() or 1
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="TokenCounter") as executor:
        # Consuming the iterator joins every task and surfaces unexpected errors
        for _ in executor.map(_task, candidates):
            pass

    return results
