from __future__ import annotations

"""
Directory Scanning Service.

Orchestrates a scan in strictly separated phases: validation of the root,
single-threaded traversal with pruning, selection of counting candidates,
(optionally parallel) token counting, and single-threaded assembly of the
sorted result tree. Only root-level failures abort a scan; every per-entry
or per-file problem degrades to an omitted entry or an absent token count.
"""

import logging
import os
import stat
import time
from typing import Dict, FrozenSet, List, Optional, Tuple

from contextscan.core.analysis.tree_builder import build_tree
from contextscan.core.classification.classifier import classify, is_ignored_directory
from contextscan.core.classification.ignore_rules import IgnoreMatcher
from contextscan.core.processing.tokenizer import TokenizerService, get_default_tokenizer
from contextscan.core.services.counter import count_candidates, select_candidates
from contextscan.domain.errors import DirectoryScanError, InvalidPathError
from contextscan.domain.scan_models import (
    PHASE_ASSEMBLY,
    PHASE_COUNTING,
    PHASE_TRAVERSAL,
    ScanConfig,
    ScanEvent,
    ScanObserver,
)
from contextscan.domain.tree_models import EntryInfo, FileNode
from contextscan.infra.fs import resolve_root_path

logger = logging.getLogger(__name__)

_DirKey = Tuple[int, int]
# Directory awaiting a listing: path, depth, keys of the directories above
# it (cycle detection) and the ignore rules in force for its children
_Frame = Tuple[str, int, FrozenSet[_DirKey], Optional[IgnoreMatcher]]


class DirectoryScanner:
    """
    Builds token-annotated directory trees.

    Each call to scan() is independent: no mutable state is shared
    between scans apart from the read-only tokenizer.
    """

    def __init__(
            self,
            config: Optional[ScanConfig] = None,
            tokenizer: Optional[TokenizerService] = None,
            observer: Optional[ScanObserver] = None,
    ) -> None:
        """
        Args:
            config: Scan policy; defaults apply when omitted.
            tokenizer: Token counter. When omitted, the process-wide service
                for config.encoding is used (resolved only if needed).
            observer: Callback invoked at every phase boundary.
        """
        self.config = config or ScanConfig()
        self._tokenizer = tokenizer
        self._observer = observer

    @property
    def tokenizer(self) -> TokenizerService:
        if self._tokenizer is None:
            self._tokenizer = get_default_tokenizer(self.config.encoding)
        return self._tokenizer

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def scan(self, root_path: str) -> List[FileNode]:
        """
        Scan a directory and return the sorted tree of its descendants.

        Args:
            root_path: Folder to scan. The root itself is not part of the result.

        Returns:
            List[FileNode]: Sorted top-level nodes.

        Raises:
            InvalidPathError: If the path does not exist or is not a directory.
            DirectoryScanError: If the root directory cannot be listed.
        """
        root = self._validate(root_path)
        logger.debug(f"Starting directory scan for: {root}")

        # 1. Traversal
        start = time.perf_counter()
        entries = self._collect_entries(root)
        source_files = sum(1 for e in entries if e.is_source_file)
        self._emit(ScanEvent(
            phase=PHASE_TRAVERSAL,
            root=root,
            elapsed=time.perf_counter() - start,
            entries=len(entries),
            source_files=source_files,
        ))

        # 2. Counting (starts only once the whole tree has been walked)
        start = time.perf_counter()
        candidates = select_candidates(entries, self.config)
        token_counts: Dict[str, Optional[int]] = {}
        if candidates:
            token_counts = count_candidates(candidates, self.config, self.tokenizer)
        counted = sum(1 for c in token_counts.values() if c is not None)
        self._emit(ScanEvent(
            phase=PHASE_COUNTING,
            root=root,
            elapsed=time.perf_counter() - start,
            entries=len(entries),
            source_files=source_files,
            candidates=len(candidates),
            counted=counted,
        ))

        # 3. Assembly and sorting
        start = time.perf_counter()
        nodes = build_tree(root, entries, token_counts)
        self._emit(ScanEvent(
            phase=PHASE_ASSEMBLY,
            root=root,
            elapsed=time.perf_counter() - start,
            entries=len(entries),
            source_files=source_files,
            candidates=len(candidates),
            counted=counted,
            root_nodes=len(nodes),
        ))

        return nodes

    # -------------------------------------------------------------------------
    # VALIDATION
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate(root_path: str) -> str:
        if not root_path:
            raise InvalidPathError(str(root_path), "empty path")

        root = resolve_root_path(str(root_path))
        if not os.path.exists(root):
            raise InvalidPathError(root, "path does not exist")
        if not os.path.isdir(root):
            raise InvalidPathError(root, "not a directory")
        return root

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def _collect_entries(self, root: str) -> List[EntryInfo]:
        """
        Walk the tree depth-first, recording every non-pruned entry.

        Directories whose listing fails are dropped together with their
        subtree. Only a failure to list the root itself is fatal.
        """
        entries: Dict[str, EntryInfo] = {}

        ancestors: FrozenSet[_DirKey] = frozenset()
        if self.config.follow_symlinks:
            try:
                st = os.stat(root)
            except OSError as e:
                raise DirectoryScanError(f"Cannot stat scan root {root}: {e}") from e
            ancestors = frozenset({(st.st_dev, st.st_ino)})

        matcher = IgnoreMatcher().descend(root) if self.config.respect_gitignore else None

        stack: List[_Frame] = [(root, 0, ancestors, matcher)]
        while stack:
            dir_path, depth, ancestors, matcher = stack.pop()
            child_depth = depth + 1
            if child_depth > self.config.max_depth:
                continue

            try:
                with os.scandir(dir_path) as it:
                    listing = list(it)
            except OSError as e:
                if dir_path == root:
                    raise DirectoryScanError(f"Cannot read scan root {root}: {e}") from e
                logger.warning(f"Skipping unreadable directory {dir_path}: {e}")
                entries.pop(dir_path, None)
                continue

            for dir_entry in listing:
                inspected = self._inspect(dir_entry, dir_path, child_depth, ancestors, matcher)
                if inspected is None:
                    continue
                info, key = inspected
                entries[info.path] = info
                if info.is_directory and child_depth < self.config.max_depth:
                    stack.append((
                        info.path,
                        child_depth,
                        ancestors | {key} if key is not None else ancestors,
                        matcher.descend(info.path) if matcher is not None else None,
                    ))

        return list(entries.values())

    def _inspect(
            self,
            dir_entry: os.DirEntry,
            parent: str,
            depth: int,
            ancestors: FrozenSet[_DirKey],
            matcher: Optional[IgnoreMatcher],
    ) -> Optional[Tuple[EntryInfo, Optional[_DirKey]]]:
        """
        Build the record for one directory entry, or None to skip it.

        Directories also return their (st_dev, st_ino) key when symlinks
        are followed. A directory is only cut when that key belongs to one
        of its own ancestors, so a real directory and a symlink alias to it
        are both listed and neither can hide the other.
        """
        name = dir_entry.name
        path = os.path.join(parent, name)

        try:
            is_symlink = dir_entry.is_symlink()
            is_dir = dir_entry.is_dir()
        except OSError as e:
            logger.warning(f"Skipping entry {path}: {e}")
            return None

        if is_dir and is_ignored_directory(name):
            logger.debug(f"Pruned directory: {path}")
            return None

        if matcher is not None and matcher.is_ignored(path, is_directory=is_dir):
            logger.debug(f"Excluded by ignore file: {path}")
            return None

        if is_dir:
            if is_symlink and not self.config.follow_symlinks:
                logger.debug(f"Not following directory symlink: {path}")
                return None

            key: Optional[_DirKey] = None
            if self.config.follow_symlinks:
                try:
                    st = dir_entry.stat()
                except OSError as e:
                    logger.warning(f"Skipping directory {path}: {e}")
                    return None
                key = (st.st_dev, st.st_ino)
                if key in ancestors:
                    logger.debug(f"Directory cycle detected, skipping: {path}")
                    return None

            info = EntryInfo(
                name=name,
                path=path,
                parent=parent,
                depth=depth,
                is_directory=True,
                is_source_file=False,
            )
            return info, key

        try:
            st = dir_entry.stat()
        except OSError as e:
            # Broken symlinks land here
            logger.debug(f"Skipping entry {path}: {e}")
            return None

        # FIFOs, sockets and devices are never read
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping special file: {path}")
            return None

        classification = classify(path, is_directory=False)
        info = EntryInfo(
            name=name,
            path=path,
            parent=parent,
            depth=depth,
            is_directory=False,
            is_source_file=classification.is_source_file,
            size=st.st_size,
        )
        return info, None

    # -------------------------------------------------------------------------
    # OBSERVER
    # -------------------------------------------------------------------------

    def _emit(self, event: ScanEvent) -> None:
        if self._observer is None:
            return
        try:
            self._observer(event)
        except Exception as e:
            logger.warning(f"Scan observer failed on '{event.phase}' event: {e}")


# -----------------------------------------------------------------------------
# FUNCTIONAL FACADE
# -----------------------------------------------------------------------------

def scan_directory(
        root_path: str,
        config: Optional[ScanConfig] = None,
        tokenizer: Optional[TokenizerService] = None,
        observer: Optional[ScanObserver] = None,
) -> List[FileNode]:
    """Scan a directory with a one-off DirectoryScanner (see DirectoryScanner.scan)."""
    return DirectoryScanner(config, tokenizer=tokenizer, observer=observer).scan(root_path)
