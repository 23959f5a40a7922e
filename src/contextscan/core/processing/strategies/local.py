from __future__ import annotations

"""
Local HuggingFace Tokenization Strategy.

Leverages a locally installed 'transformers' package to count tokens with
an open-source model vocabulary (Llama, Qwen, DeepSeek...). Selected through
encoding names of the form 'hf:<repo-id>'.
"""

import logging

from contextscan.core.processing.strategies.base import EncoderStrategy

logger = logging.getLogger(__name__)

# --- Dynamic Dependency Check ---
TRANSFORMERS_AVAILABLE = False
try:
    from transformers import AutoTokenizer
    TRANSFORMERS_AVAILABLE = True
except ImportError:
    pass

HF_PREFIX = "hf:"


class TransformersStrategy(EncoderStrategy):
    """
    Open-source model strategy using HuggingFace AutoTokenizers.
    """

    def __init__(self, repo_id: str) -> None:
        """
        Load the tokenizer files for a HuggingFace Hub repository.

        Args:
            repo_id: Hub repository identifier (e.g. 'Qwen/Qwen2.5-7B-Instruct').

        Raises:
            ImportError: If transformers is not installed.
            OSError: If the tokenizer files cannot be resolved.
        """
        if not TRANSFORMERS_AVAILABLE:
            raise ImportError("Package 'transformers' is not installed.")

        logger.debug(f"Loading local tokenizer for {repo_id}...")
        self.repo_id = repo_id
        self._tokenizer = AutoTokenizer.from_pretrained(repo_id)

    def count(self, text: str) -> int:
        """
        Execute local tokenization via transformers SDK.

        Args:
            text: Input string.

        Returns:
            int: Calculated token count, excluding BOS/EOS markers.
        """
        return int(len(self._tokenizer.encode(text, add_special_tokens=False)))
