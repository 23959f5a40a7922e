from __future__ import annotations

"""
Token Counting Adapter.

Wraps a token-counting backend behind an initialize-once service. The
backend is built lazily on first use and shared read-only afterwards; if
construction fails the failure is recorded once and every later call fails
fast with TokenizerUnavailable instead of retrying.
"""

import logging
import threading
from typing import Callable, Dict, Optional

from contextscan.core.processing.strategies import EncoderStrategy, build_strategy
from contextscan.domain.constants import DEFAULT_ENCODING
from contextscan.domain.errors import TokenizerUnavailable

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[], EncoderStrategy]


# -----------------------------------------------------------------------------
# SERVICE
# -----------------------------------------------------------------------------

class TokenizerService:
    """
    Thread-safe, lazily initialized token counter.

    The factory is invoked at most once, under a lock, the first time a
    count is requested. Counting is a pure function of the input text.
    """

    def __init__(self, factory: StrategyFactory, name: str = "custom") -> None:
        """
        Args:
            factory: Zero-argument callable building the backend.
            name: Identifier used in log messages.
        """
        self.name = name
        self._factory = factory
        self._lock = threading.Lock()
        self._initialized = False
        self._strategy: Optional[EncoderStrategy] = None
        self._failure: Optional[str] = None

    @classmethod
    def for_encoding(cls, encoding: str = DEFAULT_ENCODING) -> "TokenizerService":
        """Build a service whose backend is resolved from an encoding name."""
        return cls(lambda: build_strategy(encoding), name=encoding)

    def _ensure_initialized(self) -> Optional[EncoderStrategy]:
        if self._initialized:
            return self._strategy

        with self._lock:
            if not self._initialized:
                try:
                    self._strategy = self._factory()
                    logger.debug(f"Tokenizer '{self.name}' initialized.")
                except Exception as e:
                    self._failure = f"{type(e).__name__}: {e}"
                    logger.error(
                        f"Tokenizer '{self.name}' failed to initialize ({self._failure}). "
                        "Token counting is disabled."
                    )
                self._initialized = True

        return self._strategy

    @property
    def available(self) -> bool:
        """Initialize the backend if needed and report whether it is usable."""
        return self._ensure_initialized() is not None

    @property
    def failure(self) -> Optional[str]:
        """Recorded initialization failure, if any."""
        return self._failure

    def count(self, text: str) -> int:
        """
        Count the tokens in a text.

        Args:
            text: Valid decoded text.

        Returns:
            int: Non-negative token count.

        Raises:
            TokenizerUnavailable: If the backend failed to initialize.
        """
        strategy = self._ensure_initialized()
        if strategy is None:
            raise TokenizerUnavailable(
                f"Tokenizer '{self.name}' is not available: {self._failure}"
            )
        if not text:
            return 0
        return strategy.count(text)


# -----------------------------------------------------------------------------
# PROCESS-WIDE REGISTRY
# -----------------------------------------------------------------------------

# One service per encoding name for the lifetime of the process
_SERVICES: Dict[str, TokenizerService] = {}
_SERVICES_LOCK = threading.Lock()


def get_default_tokenizer(encoding: str = DEFAULT_ENCODING) -> TokenizerService:
    """
    Return the shared service for an encoding, creating it on first request.

    Args:
        encoding: tiktoken encoding name or 'hf:<repo-id>'.

    Returns:
        TokenizerService: Memoized service instance.
    """
    with _SERVICES_LOCK:
        service = _SERVICES.get(encoding)
        if service is None:
            service = TokenizerService.for_encoding(encoding)
            _SERVICES[encoding] = service
        return service


def count_tokens(text: str, encoding: str = DEFAULT_ENCODING) -> int:
    """
    Count tokens with the shared service for an encoding.

    Raises:
        TokenizerUnavailable: If the backend failed to initialize.
    """
    return get_default_tokenizer(encoding).count(text)
