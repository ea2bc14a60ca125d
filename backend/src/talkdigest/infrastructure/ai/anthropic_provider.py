"""
Anthropic Provider - Concrete implementation of LLMProviderPort for Claude.

Sends the summary prompt as a single user message through the Messages API
and returns the concatenated text blocks of the answer.
"""

import logging
import time
from typing import Optional

from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncAnthropic,
    AuthenticationError,
    RateLimitError,
)

from ...domain.ai.ports import (
    LLMAuthError,
    LLMGenerationResult,
    LLMInvalidResponseError,
    LLMProviderPort,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class AnthropicProvider(LLMProviderPort):
    """
    Anthropic implementation of LLMProviderPort.

    The SDK client is created on first use so that a missing API key only
    fails the generation call (which then falls back), not application
    startup.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[AsyncAnthropic] = None,
    ):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Claude model name
            client: Pre-built SDK client (tests)
        """
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def name(self) -> str:
        return "anthropic"

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            if not self.api_key:
                raise LLMAuthError("Anthropic API key not provided. Set ANTHROPIC_API_KEY.")
            self._client = AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str, max_tokens: int) -> LLMGenerationResult:
        client = self._get_client()
        start_time = time.perf_counter()
        warnings = []

        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )

        except APITimeoutError as e:
            raise LLMTimeoutError(f"Anthropic API timeout: {str(e)}")

        except RateLimitError as e:
            raise LLMRateLimitError(f"Anthropic rate limit exceeded: {str(e)}", status_code=e.status_code)

        except AuthenticationError as e:
            raise LLMAuthError(f"Anthropic authentication failed: {str(e)}", status_code=e.status_code)

        except APIStatusError as e:
            raise LLMServiceError(
                f"Anthropic API returned status {e.status_code}: {str(e)}",
                status_code=e.status_code,
            )

        except APIConnectionError as e:
            raise LLMServiceError(f"Anthropic connection error: {str(e)}")

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise LLMInvalidResponseError("Anthropic response contained no text")

        if response.stop_reason == "max_tokens":
            warnings.append(f"Output truncated at max_tokens={max_tokens}")

        usage = response.usage
        return LLMGenerationResult(
            text=text,
            provider=self.name,
            model=response.model or self.model,
            tokens_in=usage.input_tokens if usage else None,
            tokens_out=usage.output_tokens if usage else None,
            latency_ms=latency_ms,
            warnings=warnings,
        )
