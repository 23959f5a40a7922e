from __future__ import annotations

"""
Unit tests for the Tree Query Helpers.
"""

import json
from typing import List

import pytest

from contextscan.core.analysis.tree_queries import (
    collect_all_directories,
    count_source_files,
    get_all_source_files,
    get_node_by_path,
    iter_nodes,
    total_token_count,
    tree_to_dicts,
)
from contextscan.domain.tree_models import FileNode


@pytest.fixture
def forest() -> List[FileNode]:
    core = FileNode("core.py", "/p/src/core.py", False, True, token_count=40)
    util = FileNode("util.py", "/p/src/util.py", False, True)
    src = FileNode("src", "/p/src", True, children=(core, util))
    logo = FileNode("logo.png", "/p/logo.png", False, False)
    readme = FileNode("README.md", "/p/README.md", False, True, token_count=2)
    return [src, logo, readme]


def test_iter_nodes_pre_order(forest: List[FileNode]) -> None:
    assert [n.name for n in iter_nodes(forest)] == ["src", "core.py", "util.py", "logo.png", "README.md"]


def test_source_file_queries(forest: List[FileNode]) -> None:
    assert count_source_files(forest) == 3
    assert get_all_source_files(forest) == ["/p/src/core.py", "/p/src/util.py", "/p/README.md"]


def test_collect_all_directories(forest: List[FileNode]) -> None:
    assert collect_all_directories(forest) == ["/p/src"]


def test_get_node_by_path(forest: List[FileNode]) -> None:
    assert get_node_by_path(forest, "/p/src/util.py").name == "util.py"
    assert get_node_by_path(forest, "/p/missing") is None


def test_total_token_count_skips_absent(forest: List[FileNode]) -> None:
    assert total_token_count(forest) == 42
    assert total_token_count([]) == 0


def test_tree_to_dicts_is_json_serializable(forest: List[FileNode]) -> None:
    data = tree_to_dicts(forest)
    restored = json.loads(json.dumps(data))

    src = restored[0]
    assert src["is_directory"] is True
    assert [c["name"] for c in src["children"]] == ["core.py", "util.py"]
    assert src["children"][0]["token_count"] == 40
    assert "token_count" not in src["children"][1]
    assert "children" not in restored[1]
