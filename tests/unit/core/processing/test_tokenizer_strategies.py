from __future__ import annotations

"""
Unit tests for individual Tokenizer Strategies.

Verifies the integration with the tiktoken and transformers SDKs using
mocking, so tests are deterministic and never download vocabularies.
"""

from unittest.mock import MagicMock, patch

import pytest

from contextscan.core.processing.strategies import build_strategy
from contextscan.core.processing.strategies.local import TransformersStrategy
from contextscan.core.processing.strategies.openai import TiktokenStrategy


@patch("contextscan.core.processing.strategies.openai.TIKTOKEN_AVAILABLE", True)
@patch("contextscan.core.processing.strategies.openai.tiktoken", create=True)
def test_tiktoken_strategy_encoding(mock_tiktoken: MagicMock) -> None:
    """Verify the default encoding is loaded and special markers are counted as text."""
    mock_encoding = MagicMock()
    mock_encoding.encode.return_value = [1, 2, 3]
    mock_tiktoken.get_encoding.return_value = mock_encoding

    strategy = TiktokenStrategy()
    count = strategy.count("sample <|endoftext|>")

    assert count == 3
    mock_tiktoken.get_encoding.assert_called_with("o200k_base")
    mock_encoding.encode.assert_called_with("sample <|endoftext|>", disallowed_special=())


@patch("contextscan.core.processing.strategies.openai.TIKTOKEN_AVAILABLE", False)
def test_tiktoken_strategy_missing_dependency() -> None:
    with pytest.raises(ImportError):
        TiktokenStrategy()


@patch("contextscan.core.processing.strategies.local.TRANSFORMERS_AVAILABLE", True)
@patch("contextscan.core.processing.strategies.local.AutoTokenizer", create=True)
def test_transformers_strategy(mock_auto: MagicMock) -> None:
    """Verify HF tokenizers are loaded by repo id and BOS/EOS markers are excluded."""
    mock_tokenizer = MagicMock()
    mock_tokenizer.encode.return_value = [10, 20, 30, 40]
    mock_auto.from_pretrained.return_value = mock_tokenizer

    strategy = TransformersStrategy("Qwen/Qwen2.5-7B-Instruct")

    assert strategy.count("hello") == 4
    mock_auto.from_pretrained.assert_called_once_with("Qwen/Qwen2.5-7B-Instruct")
    mock_tokenizer.encode.assert_called_with("hello", add_special_tokens=False)


@patch("contextscan.core.processing.strategies.local.TRANSFORMERS_AVAILABLE", False)
def test_transformers_strategy_missing_dependency() -> None:
    with pytest.raises(ImportError):
        TransformersStrategy("any/model")


def test_build_strategy_routing() -> None:
    with patch("contextscan.core.processing.strategies.TransformersStrategy") as mock_hf, \
            patch("contextscan.core.processing.strategies.TiktokenStrategy") as mock_tk:
        build_strategy("hf:meta-llama/Llama-3.1-8B")
        build_strategy("cl100k_base")

    mock_hf.assert_called_once_with("meta-llama/Llama-3.1-8B")
    mock_tk.assert_called_once_with("cl100k_base")
