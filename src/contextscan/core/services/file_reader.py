from __future__ import annotations

"""
Plain File Reading Service.

Full-content reads used when the caller needs the text of selected files
(e.g. to build a prompt). No size adaptation or binary sniffing is applied.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from contextscan.domain.errors import FileReadError
from contextscan.domain.scan_models import FileContent

logger = logging.getLogger(__name__)


def read_file_content(path: str) -> str:
    """
    Read a whole file as UTF-8 text.

    Args:
        path: File to read.

    Returns:
        str: File content.

    Raises:
        FileReadError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, str(e)) from e


def read_file_contents(paths: Sequence[str], max_workers: Optional[int] = None) -> List[FileContent]:
    """
    Read several files concurrently, recording failures per file.

    Args:
        paths: Files to read.
        max_workers: Pool size; defaults to the hardware concurrency.

    Returns:
        List[FileContent]: One result per input path, in input order.
    """
    if not paths:
        return []

    workers = max_workers or os.cpu_count() or 1
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="FileReader") as executor:
        return list(executor.map(_read_one, paths))


def _read_one(path: str) -> FileContent:
    try:
        return FileContent(path=path, content=read_file_content(path))
    except FileReadError as e:
        logger.debug(str(e))
        return FileContent(path=path, error=str(e))
