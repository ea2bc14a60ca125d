"""LLM provider adapters"""

from ...config import Settings
from ...domain.ai.ports import LLMProviderPort
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider


def create_llm_provider(settings: Settings) -> LLMProviderPort:
    """Build the provider named by LLM_PROVIDER.

    Raises:
        ValueError: If the provider name is not known
    """
    provider = settings.LLM_PROVIDER.lower()
    if provider == "anthropic":
        return AnthropicProvider(api_key=settings.ANTHROPIC_API_KEY, model=settings.ANTHROPIC_MODEL)
    if provider == "openai":
        return OpenAIProvider(api_key=settings.OPENAI_API_KEY, model=settings.OPENAI_MODEL)
    raise ValueError(f"Unknown LLM provider: {settings.LLM_PROVIDER}")


__all__ = ["AnthropicProvider", "OpenAIProvider", "create_llm_provider"]
