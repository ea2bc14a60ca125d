"""
LLM Provider Port - Abstract interface for LLM providers.

Hexagonal Architecture: This is a domain port that infrastructure adapters implement.
The summary orchestrator depends on this port, not on concrete implementations
(Anthropic, OpenAI).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LLMGenerationResult:
    """
    Result from one text-generation call.

    Attributes:
        text: Generated text (all text blocks concatenated)
        provider: Provider name (e.g., 'anthropic', 'openai')
        model: Model name
        tokens_in: Input tokens used (None if provider doesn't report)
        tokens_out: Output tokens used (None if provider doesn't report)
        latency_ms: Latency in milliseconds
        warnings: List of non-critical warnings (e.g. output truncated)
    """
    text: str
    provider: str
    model: str
    tokens_in: Optional[int] = None
    tokens_out: Optional[int] = None
    latency_ms: int = 0
    warnings: list[str] = field(default_factory=list)


class LLMProviderPort(ABC):
    """
    Abstract interface for LLM providers.

    Implementations must handle:
    - API authentication
    - Request formatting for provider
    - Response parsing
    - Error handling (timeouts, rate limits, non-success statuses)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name used in logs."""
        pass

    @abstractmethod
    async def generate(self, prompt: str, max_tokens: int) -> LLMGenerationResult:
        """
        Generate text for a single user prompt.

        Args:
            prompt: Complete instruction prompt
            max_tokens: Upper bound on generated tokens

        Returns:
            LLMGenerationResult with generated text and metadata

        Raises:
            LLMTimeoutError: Request timed out
            LLMRateLimitError: Rate limit exceeded
            LLMAuthError: Authentication failed or no API key configured
            LLMServiceError: Provider unavailable or non-success status
            LLMInvalidResponseError: Response carried no text
        """
        pass


# Custom exceptions for LLM operations
class LLMError(Exception):
    """Base exception for LLM operations"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LLMTimeoutError(LLMError):
    """LLM request timed out"""
    pass


class LLMRateLimitError(LLMError):
    """Rate limit exceeded"""
    pass


class LLMAuthError(LLMError):
    """Authentication failed"""
    pass


class LLMServiceError(LLMError):
    """Provider service unavailable or returned error"""
    pass


class LLMInvalidResponseError(LLMError):
    """Provider returned invalid/unexpected response"""
    pass
