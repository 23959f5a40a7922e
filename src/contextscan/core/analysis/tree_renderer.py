from __future__ import annotations

"""
Tree Renderer.

Converts scan results into visual ASCII representations: an annotated
listing with per-file token counts, and a compact file map that marks a
selection of files.
"""

from typing import AbstractSet, List, Optional, Sequence

from contextscan.domain.tree_models import FileNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(nodes: Sequence[FileNode]) -> List[str]:
    """
    Render a scan result with token annotations.

    Directories end with '/', counted files show '(N tokens)' and files that
    are not source files show '(non-source)'.

    Args:
        nodes: Top-level nodes of a scan result.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = []
    _render_level(nodes, lines, prefix="", selected=None, annotate=True)
    return lines


def generate_file_map(
        root_path: str,
        nodes: Sequence[FileNode],
        selected: AbstractSet[str] = frozenset(),
) -> str:
    """
    Build a file map headed by the root path, marking selected files with ' *'.

    Args:
        root_path: Scanned folder, used as header line.
        nodes: Top-level nodes of a scan result.
        selected: Paths of the selected files.

    Returns:
        str: Header followed by the tree lines.
    """
    header = root_path or "/"
    lines: List[str] = []
    _render_level(nodes, lines, prefix="", selected=selected, annotate=False)
    if not lines:
        return header
    return "\n".join([header] + lines)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _render_level(
        nodes: Sequence[FileNode],
        lines: List[str],
        prefix: str,
        selected: Optional[AbstractSet[str]],
        annotate: bool,
) -> None:
    """Recursively append one tree level using standard ASCII connectors."""
    total = len(nodes)

    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if node.is_directory:
            label = f"{node.name}/" if annotate else node.name
            lines.append(f"{prefix}{connector}{label}")
            if node.children:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _render_level(node.children, lines, new_prefix, selected, annotate)
            continue

        lines.append(f"{prefix}{connector}{node.name}{_file_suffix(node, selected, annotate)}")


def _file_suffix(node: FileNode, selected: Optional[AbstractSet[str]], annotate: bool) -> str:
    if not annotate:
        return " *" if selected and node.path in selected else ""
    if not node.is_source_file:
        return " (non-source)"
    if node.token_count is not None:
        return f" ({node.token_count:,} tokens)"
    return ""
