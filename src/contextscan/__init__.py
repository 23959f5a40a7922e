from __future__ import annotations

from .api import count_prompt_tokens, read_file_content, read_file_contents, scan_directory
from .domain.errors import (
    ContextScanError,
    DirectoryScanError,
    FileReadError,
    InvalidPathError,
    TokenizerUnavailable,
)
from .domain.scan_models import FileContent, ScanConfig, ScanEvent
from .domain.tree_models import FileNode

__version__ = "0.1.0"

__all__ = [
    "ContextScanError",
    "DirectoryScanError",
    "FileContent",
    "FileNode",
    "FileReadError",
    "InvalidPathError",
    "ScanConfig",
    "ScanEvent",
    "TokenizerUnavailable",
    "count_prompt_tokens",
    "read_file_content",
    "read_file_contents",
    "scan_directory",
]
