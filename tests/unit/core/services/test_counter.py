from __future__ import annotations

"""
Unit tests for the Token Counting Fan-out.

Verifies candidate selection, per-file failure degradation and the
sequential/parallel execution paths.
"""

from pathlib import Path
from typing import List
from unittest.mock import MagicMock, patch

from contextscan.core.processing.tokenizer import TokenizerService
from contextscan.core.services.counter import count_candidates, count_file, select_candidates
from contextscan.domain.errors import FileReadError
from contextscan.domain.scan_models import ScanConfig
from contextscan.domain.tree_models import EntryInfo


def _entry(path: Path, source: bool = True, directory: bool = False) -> EntryInfo:
    size = path.stat().st_size if path.is_file() else 0
    return EntryInfo(
        name=path.name,
        path=str(path),
        parent=str(path.parent),
        depth=1,
        is_directory=directory,
        is_source_file=source,
        size=size,
    )


def _files(tmp_path: Path, count: int) -> List[EntryInfo]:
    entries = []
    for i in range(count):
        f = tmp_path / f"f{i}.py"
        f.write_text(" ".join(["tok"] * (i + 1)), encoding="utf-8")
        entries.append(_entry(f))
    return entries


# -----------------------------------------------------------------------------
# Candidate selection
# -----------------------------------------------------------------------------

def test_select_candidates_filters_entries(tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("x", encoding="utf-8")
    (tmp_path / "b.bin").write_bytes(b"\x00")
    (tmp_path / "big.py").write_text("x" * 200, encoding="utf-8")
    (tmp_path / "pkg").mkdir()

    entries = [
        _entry(tmp_path / "a.py"),
        _entry(tmp_path / "b.bin", source=False),
        _entry(tmp_path / "big.py"),
        _entry(tmp_path / "pkg", source=False, directory=True),
    ]

    selected = select_candidates(entries, ScanConfig(max_file_size=100))

    assert [e.name for e in selected] == ["a.py"]


def test_select_candidates_disabled_counting(tmp_path: Path) -> None:
    entries = _files(tmp_path, 3)
    assert select_candidates(entries, ScanConfig(enable_token_counting=False)) == []


# -----------------------------------------------------------------------------
# Single file
# -----------------------------------------------------------------------------

def test_count_file(tmp_path: Path, fake_tokenizer: TokenizerService) -> None:
    entry = _files(tmp_path, 3)[2]
    assert count_file(entry, ScanConfig(), fake_tokenizer) == 3


def test_count_file_read_error_is_none(tmp_path: Path, fake_tokenizer: TokenizerService) -> None:
    entry = _files(tmp_path, 1)[0]
    with patch(
            "contextscan.core.services.counter.read_for_counting",
            side_effect=FileReadError(entry.path, "locked"),
    ):
        assert count_file(entry, ScanConfig(), fake_tokenizer) is None


def test_count_file_vanished_file_is_none(tmp_path: Path, fake_tokenizer: TokenizerService) -> None:
    entry = _files(tmp_path, 1)[0]
    Path(entry.path).unlink()
    assert count_file(entry, ScanConfig(), fake_tokenizer) is None


def test_count_file_unavailable_tokenizer_is_none(tmp_path: Path, broken_tokenizer: TokenizerService) -> None:
    entry = _files(tmp_path, 1)[0]
    assert count_file(entry, ScanConfig(), broken_tokenizer) is None


# -----------------------------------------------------------------------------
# Fan-out
# -----------------------------------------------------------------------------

def test_count_candidates_parallel(tmp_path: Path, fake_tokenizer: TokenizerService) -> None:
    entries = _files(tmp_path, 20)

    results = count_candidates(entries, ScanConfig(max_workers=4), fake_tokenizer)

    assert len(results) == 20
    for i, entry in enumerate(entries):
        assert results[entry.path] == i + 1


def test_count_candidates_sequential_skips_pool(tmp_path: Path, fake_tokenizer: TokenizerService) -> None:
    entries = _files(tmp_path, 5)

    with patch("contextscan.core.services.counter.ThreadPoolExecutor") as mock_pool:
        results = count_candidates(entries, ScanConfig(enable_parallel_counting=False), fake_tokenizer)

    mock_pool.assert_not_called()
    assert [results[e.path] for e in entries] == [1, 2, 3, 4, 5]


def test_single_candidate_runs_inline(tmp_path: Path, fake_tokenizer: TokenizerService) -> None:
    entries = _files(tmp_path, 1)

    with patch("contextscan.core.services.counter.ThreadPoolExecutor") as mock_pool:
        results = count_candidates(entries, ScanConfig(), fake_tokenizer)

    mock_pool.assert_not_called()
    assert results == {entries[0].path: 1}


def test_unavailable_tokenizer_reads_nothing(tmp_path: Path, broken_tokenizer: TokenizerService) -> None:
    entries = _files(tmp_path, 4)

    with patch("contextscan.core.services.counter.read_for_counting") as mock_read:
        results = count_candidates(entries, ScanConfig(), broken_tokenizer)

    mock_read.assert_not_called()
    assert results == {e.path: None for e in entries}


def test_empty_candidate_list() -> None:
    factory = MagicMock()
    service = TokenizerService(factory)

    assert count_candidates([], ScanConfig(), service) == {}
    factory.assert_not_called()
