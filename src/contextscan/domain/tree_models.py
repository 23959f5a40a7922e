from __future__ import annotations

"""
Directory Tree Data Models.

Provides the immutable node type returned by a scan together with the
flat entry record collected during traversal. A scan result is a frozen
snapshot: nodes hold no filesystem handles and no back-references.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# -----------------------------------------------------------------------------
# RESULT TREE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileNode:
    """
    Represents one filesystem entry in the scan result tree.

    Attributes:
        name: Base name of the entry.
        path: Full path of the entry, unique within a scan.
        is_directory: True for directories.
        is_source_file: Extension/filename classification result.
            Always False for directories.
        children: Sorted child nodes for directories, None for files.
        token_count: Token count for successfully counted source files,
            None otherwise.
    """
    name: str
    path: str
    is_directory: bool
    is_source_file: bool = False
    children: Optional[Tuple["FileNode", ...]] = None
    token_count: Optional[int] = None

    def __post_init__(self) -> None:
        if self.is_directory != (self.children is not None):
            raise ValueError(
                f"Node '{self.path}': directories must carry children and files must not."
            )
        if self.is_directory and (self.is_source_file or self.token_count is not None):
            raise ValueError(f"Directory node '{self.path}' cannot be a counted source file.")
        if self.token_count is not None and self.token_count < 0:
            raise ValueError(f"Node '{self.path}' has a negative token count.")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the node (and its subtree) into JSON-compatible primitives.

        Field names follow the wire format consumed by front ends:
        'children' is omitted for files and 'token_count' when absent.

        Returns:
            Dict[str, Any]: Nested dictionary representation.
        """
        data: Dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "is_directory": self.is_directory,
            "is_source_file": self.is_source_file,
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        if self.token_count is not None:
            data["token_count"] = self.token_count
        return data


# -----------------------------------------------------------------------------
# TRAVERSAL RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class EntryInfo:
    """
    Flat record of a non-pruned entry discovered during traversal.

    Attributes:
        name: Base name of the entry.
        path: Full path of the entry.
        parent: Exact path of the containing directory (grouping key).
        depth: Distance from the scan root (root children have depth 1).
        is_directory: True for directories.
        is_source_file: Classification result (False for directories).
        size: File size in bytes (0 for directories).
    """
    name: str
    path: str
    parent: str
    depth: int
    is_directory: bool
    is_source_file: bool
    size: int = 0
