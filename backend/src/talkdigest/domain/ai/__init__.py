"""AI domain layer - Port and errors for LLM providers"""

from .ports import (
    LLMProviderPort,
    LLMGenerationResult,
    LLMError,
    LLMTimeoutError,
    LLMRateLimitError,
    LLMAuthError,
    LLMServiceError,
    LLMInvalidResponseError,
)

__all__ = [
    "LLMProviderPort",
    "LLMGenerationResult",
    "LLMError",
    "LLMTimeoutError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMServiceError",
    "LLMInvalidResponseError",
]
