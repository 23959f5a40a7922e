from __future__ import annotations

"""
Tree Query Helpers.

Read-only utilities over an assembled scan result: walking, lookups,
source-file collection, token aggregation and JSON conversion.
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence

from contextscan.domain.tree_models import FileNode


def iter_nodes(nodes: Sequence[FileNode]) -> Iterator[FileNode]:
    """
    Walk a forest depth-first in pre-order without recursion.

    Args:
        nodes: Top-level nodes.

    Yields:
        FileNode: Every node, parents before their children, siblings in order.
    """
    stack: List[FileNode] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if node.children:
            stack.extend(reversed(node.children))


def count_source_files(nodes: Sequence[FileNode]) -> int:
    """Number of nodes classified as source files."""
    return sum(1 for n in iter_nodes(nodes) if n.is_source_file)


def get_all_source_files(nodes: Sequence[FileNode]) -> List[str]:
    """Paths of all source files in tree order."""
    return [n.path for n in iter_nodes(nodes) if n.is_source_file]


def collect_all_directories(nodes: Sequence[FileNode]) -> List[str]:
    """Paths of all directories in tree order."""
    return [n.path for n in iter_nodes(nodes) if n.is_directory]


def get_node_by_path(nodes: Sequence[FileNode], target_path: str) -> Optional[FileNode]:
    """
    Find the node with an exact path.

    Args:
        nodes: Top-level nodes.
        target_path: Path to look up.

    Returns:
        Optional[FileNode]: Matching node or None.
    """
    for node in iter_nodes(nodes):
        if node.path == target_path:
            return node
    return None


def total_token_count(nodes: Sequence[FileNode]) -> int:
    """Sum of every present token count in the tree."""
    return sum(n.token_count for n in iter_nodes(nodes) if n.token_count is not None)


def tree_to_dicts(nodes: Sequence[FileNode]) -> List[Dict[str, Any]]:
    """JSON-ready representation of a forest (see FileNode.to_dict)."""
    return [node.to_dict() for node in nodes]
