from __future__ import annotations

"""
Result Tree Assembly.

Turns the flat list of traversal records into nested, sorted FileNode
values. Records are grouped by their exact parent path and consumed
bottom-up (deepest entries first), so arbitrarily deep trees are assembled
without recursion and each directory is sorted once, when it is built.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from contextscan.domain.tree_models import EntryInfo, FileNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def node_sort_key(node: FileNode) -> Tuple[bool, str, str]:
    """Directories first, then case-insensitive name, then exact name."""
    return not node.is_directory, node.name.lower(), node.name


def sort_nodes(nodes: Iterable[FileNode]) -> List[FileNode]:
    """
    Return nodes ordered directories-first, then by case-insensitive name.

    Only the given level is ordered; assembled trees are already sorted at
    every level.
    """
    return sorted(nodes, key=node_sort_key)


def build_tree(
        root_path: str,
        entries: Iterable[EntryInfo],
        token_counts: Optional[Mapping[str, Optional[int]]] = None,
) -> List[FileNode]:
    """
    Assemble the sorted result tree below a scan root.

    Args:
        root_path: Exact path used as parent key for top-level entries.
            The root itself never becomes a node.
        entries: Traversal records (any order).
        token_counts: Path to token count for counted files.

    Returns:
        List[FileNode]: Sorted children of the scan root.
    """
    counts = token_counts or {}
    groups: Dict[str, List[EntryInfo]] = defaultdict(list)
    ordered: List[EntryInfo] = []

    for entry in entries:
        groups[entry.parent].append(entry)
        ordered.append(entry)

    # Deepest first guarantees children are built before their parent
    ordered.sort(key=lambda e: e.depth, reverse=True)

    built: Dict[str, FileNode] = {}
    for entry in ordered:
        if entry.is_directory:
            children = _take_children(entry.path, groups, built)
            built[entry.path] = FileNode(
                name=entry.name,
                path=entry.path,
                is_directory=True,
                is_source_file=False,
                children=tuple(children),
            )
        else:
            built[entry.path] = FileNode(
                name=entry.name,
                path=entry.path,
                is_directory=False,
                is_source_file=entry.is_source_file,
                token_count=counts.get(entry.path) if entry.is_source_file else None,
            )

    return _take_children(root_path, groups, built)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _take_children(
        parent: str,
        groups: Dict[str, List[EntryInfo]],
        built: Dict[str, FileNode],
) -> List[FileNode]:
    """Remove a directory's finished children from the work maps, sorted."""
    records = groups.pop(parent, [])
    return sort_nodes(built.pop(r.path) for r in records if r.path in built)
