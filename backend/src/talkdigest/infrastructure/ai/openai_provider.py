"""
OpenAI Provider - Concrete implementation of LLMProviderPort for OpenAI.

Alternative to the default Anthropic provider, selected with
LLM_PROVIDER=openai. Uses the chat completions API with the summary prompt as
the single user message.
"""

import logging
import time
from typing import Optional

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
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

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIProvider(LLMProviderPort):
    """
    OpenAI implementation of LLMProviderPort.

    Handles authentication, request formatting, response parsing, error handling.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def name(self) -> str:
        return "openai"

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise LLMAuthError("OpenAI API key not provided. Set OPENAI_API_KEY.")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str, max_tokens: int) -> LLMGenerationResult:
        client = self._get_client()
        start_time = time.perf_counter()
        warnings = []

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
            )

        except APITimeoutError as e:
            raise LLMTimeoutError(f"OpenAI API timeout: {str(e)}")

        except RateLimitError as e:
            raise LLMRateLimitError(f"OpenAI rate limit exceeded: {str(e)}", status_code=e.status_code)

        except AuthenticationError as e:
            raise LLMAuthError(f"OpenAI authentication failed: {str(e)}", status_code=e.status_code)

        except APIStatusError as e:
            raise LLMServiceError(
                f"OpenAI API returned status {e.status_code}: {str(e)}",
                status_code=e.status_code,
            )

        except APIConnectionError as e:
            raise LLMServiceError(f"OpenAI connection error: {str(e)}")

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not response.choices:
            raise LLMInvalidResponseError("OpenAI response contained no choices")

        choice = response.choices[0]
        text = choice.message.content or ""
        if not text:
            raise LLMInvalidResponseError("OpenAI response contained no text")

        if choice.finish_reason == "length":
            warnings.append(f"Output truncated at max_tokens={max_tokens}")

        usage = response.usage
        return LLMGenerationResult(
            text=text,
            provider=self.name,
            model=response.model or self.model,
            tokens_in=usage.prompt_tokens if usage else None,
            tokens_out=usage.completion_tokens if usage else None,
            latency_ms=latency_ms,
            warnings=warnings,
        )
