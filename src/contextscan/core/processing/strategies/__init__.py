from __future__ import annotations

from .base import EncoderStrategy
from .local import HF_PREFIX, TRANSFORMERS_AVAILABLE, TransformersStrategy
from .openai import TIKTOKEN_AVAILABLE, TiktokenStrategy


def build_strategy(encoding: str) -> EncoderStrategy:
    """
    Instantiate the backend matching an encoding name.

    Args:
        encoding: 'hf:<repo-id>' for HuggingFace tokenizers, otherwise a
                  tiktoken encoding name.

    Returns:
        EncoderStrategy: Loaded backend.
    """
    if encoding.startswith(HF_PREFIX):
        return TransformersStrategy(encoding[len(HF_PREFIX):])
    return TiktokenStrategy(encoding)


__all__ = [
    "EncoderStrategy",
    "HF_PREFIX",
    "TIKTOKEN_AVAILABLE",
    "TRANSFORMERS_AVAILABLE",
    "TiktokenStrategy",
    "TransformersStrategy",
    "build_strategy",
]
