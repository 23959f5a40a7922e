from __future__ import annotations

"""
Public Boundary Operations.

The operations consumed by front ends (desktop shell, CLI, scripts):
directory scanning, ad-hoc prompt token counting, and plain file reads.
"""

from typing import List, Optional, Sequence

from contextscan.core.processing.tokenizer import TokenizerService, get_default_tokenizer
from contextscan.core.services import file_reader
from contextscan.core.services.scanner import DirectoryScanner
from contextscan.domain.constants import DEFAULT_ENCODING
from contextscan.domain.scan_models import FileContent, ScanConfig, ScanObserver
from contextscan.domain.tree_models import FileNode


def scan_directory(
        folder_path: str,
        config: Optional[ScanConfig] = None,
        tokenizer: Optional[TokenizerService] = None,
        observer: Optional[ScanObserver] = None,
) -> List[FileNode]:
    """
    Scan a folder into a sorted, token-annotated tree.

    Raises:
        InvalidPathError: If the folder does not exist or is not a directory.
        DirectoryScanError: If the folder cannot be listed.
    """
    return DirectoryScanner(config, tokenizer=tokenizer, observer=observer).scan(folder_path)


def count_prompt_tokens(
        text: str,
        tokenizer: Optional[TokenizerService] = None,
        encoding: str = DEFAULT_ENCODING,
) -> int:
    """
    Count tokens of free text (e.g. a prompt template), independent of any file.

    Raises:
        TokenizerUnavailable: If the tokenizer failed to initialize.
    """
    service = tokenizer or get_default_tokenizer(encoding)
    return service.count(text)


def read_file_content(path: str) -> str:
    """
    Read a whole file as UTF-8 text.

    Raises:
        FileReadError: If the file cannot be read.
    """
    return file_reader.read_file_content(path)


def read_file_contents(paths: Sequence[str]) -> List[FileContent]:
    """Read several files, reporting failures per file instead of raising."""
    return file_reader.read_file_contents(paths)
