from __future__ import annotations

"""
Base Definitions for Encoder Strategies.

Provides the abstract interface implemented by every token-counting
backend wrapped by the tokenizer service.
"""

from abc import ABC, abstractmethod


class EncoderStrategy(ABC):
    """
    Abstract base class for a loaded token-counting backend.

    Implementations load their vocabulary in __init__ (raising on failure)
    and must be safe for concurrent use once constructed.
    """

    @abstractmethod
    def count(self, text: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.

        Returns:
            int: Total token count.
        """
        pass
