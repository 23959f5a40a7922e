from __future__ import annotations

"""
Unit tests for the Scan Configuration Loader.

Verifies JSON file loading, corruption fallbacks and the precedence of
explicit overrides over file values.
"""

import json
from pathlib import Path

from contextscan.core.services.config_loader import load_config_overrides, load_scan_config
from contextscan.domain.scan_models import ScanConfig


def test_no_path_returns_empty() -> None:
    assert load_config_overrides(None) == {}
    assert load_config_overrides("") == {}


def test_missing_file_returns_empty(tmp_path: Path) -> None:
    assert load_config_overrides(str(tmp_path / "missing.json")) == {}


def test_corrupted_file_returns_empty(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{ not json", encoding="utf-8")
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")

    assert load_config_overrides(str(broken)) == {}
    assert load_config_overrides(str(listing)) == {}


def test_file_values_are_loaded(tmp_path: Path) -> None:
    cfg = tmp_path / "scan.json"
    cfg.write_text(json.dumps({"max_depth": 4, "encoding": "cl100k_base"}), encoding="utf-8")

    config, warnings = load_scan_config(str(cfg))

    assert warnings == []
    assert config.max_depth == 4
    assert config.encoding == "cl100k_base"


def test_overrides_win_over_file(tmp_path: Path) -> None:
    cfg = tmp_path / "scan.json"
    cfg.write_text(json.dumps({"max_depth": 4, "follow_symlinks": True}), encoding="utf-8")

    config, _ = load_scan_config(str(cfg), {"max_depth": 2, "follow_symlinks": None})

    assert config.max_depth == 2
    # None overrides do not erase file values
    assert config.follow_symlinks is True


def test_defaults_without_sources() -> None:
    config, warnings = load_scan_config()
    assert config == ScanConfig()
    assert warnings == []


def test_invalid_file_values_produce_warnings(tmp_path: Path) -> None:
    cfg = tmp_path / "scan.json"
    cfg.write_text(json.dumps({"max_depth": "deep", "unknown": 1}), encoding="utf-8")

    config, warnings = load_scan_config(str(cfg))

    assert config.max_depth == ScanConfig().max_depth
    assert len(warnings) == 2
