from __future__ import annotations

"""
OpenAI Tokenization Strategy.

Implements local BPE (Byte Pair Encoding) counting using the tiktoken library.
Supports the o200k (GPT-4o / o-series) and cl100k (GPT-4 / GPT-3.5) encodings.
"""

import logging

from contextscan.core.processing.strategies.base import EncoderStrategy

logger = logging.getLogger(__name__)

# --- Dynamic Dependency Check ---
TIKTOKEN_AVAILABLE = False
try:
    import tiktoken
    TIKTOKEN_AVAILABLE = True
except ImportError:
    pass


class TiktokenStrategy(EncoderStrategy):
    """
    OpenAI-specific encoder utilizing the tiktoken library.
    """

    def __init__(self, encoding_name: str = "o200k_base") -> None:
        """
        Load the BPE ranks for the requested encoding.

        Args:
            encoding_name: tiktoken encoding identifier.

        Raises:
            ImportError: If tiktoken is not installed.
            ValueError: If the encoding name is unknown.
        """
        if not TIKTOKEN_AVAILABLE:
            raise ImportError("Library 'tiktoken' is not installed.")

        logger.debug(f"Loading tiktoken encoding '{encoding_name}'...")
        self.encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def count(self, text: str) -> int:
        """
        Execute local BPE encoding via tiktoken.

        Special-token markers are counted as ordinary text.

        Args:
            text: Input string to tokenize.

        Returns:
            int: Calculated token count.
        """
        return len(self._encoding.encode(text, disallowed_special=()))
