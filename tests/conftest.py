from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A deterministic in-process tokenizer so tests never depend on the
   BPE files tiktoken downloads on first use.
3. Shared filesystem fixtures for scanning tests.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from contextscan.core.processing.strategies.base import EncoderStrategy  # noqa: E402
from contextscan.core.processing.tokenizer import TokenizerService  # noqa: E402


# -----------------------------------------------------------------------------
# Tokenizer Fakes
# -----------------------------------------------------------------------------
class WhitespaceStrategy(EncoderStrategy):
    """Counts whitespace-separated words; deterministic and dependency-free."""

    def count(self, text: str) -> int:
        return len(text.split())


@pytest.fixture
def fake_tokenizer() -> TokenizerService:
    """Tokenizer service backed by the whitespace strategy."""
    return TokenizerService(WhitespaceStrategy, name="whitespace")


@pytest.fixture
def broken_tokenizer() -> TokenizerService:
    """Tokenizer service whose backend always fails to initialize."""
    def _factory() -> EncoderStrategy:
        raise RuntimeError("vocabulary download failed")

    return TokenizerService(_factory, name="broken")


# -----------------------------------------------------------------------------
# Filesystem Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small project tree.

    Structure:
    /project
      /src
        main.py
        Utils.py
        /pkg
          core.py
      /docs
        README.md
      /node_modules
        lib.js
      /.git
        HEAD
      Makefile
      logo.png
      app.py
    """
    root = tmp_path / "project"
    root.mkdir()

    (root / "src").mkdir()
    (root / "src" / "pkg").mkdir()
    (root / "docs").mkdir()
    (root / "node_modules").mkdir()
    (root / ".git").mkdir()

    (root / "src" / "main.py").write_text("def main():\n    return 1\n", encoding="utf-8")
    (root / "src" / "Utils.py").write_text("x = 1\n", encoding="utf-8")
    (root / "src" / "pkg" / "core.py").write_text("class Core: pass\n", encoding="utf-8")
    (root / "docs" / "README.md").write_text("# Project docs\n", encoding="utf-8")
    (root / "node_modules" / "lib.js").write_text("var x = 1;", encoding="utf-8")
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (root / "Makefile").write_text("all:\n\techo hi\n", encoding="utf-8")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    (root / "app.py").write_text("print('app')\n", encoding="utf-8")

    return root
