"""LLM provider factory."""

from taskchat.services.llm.base import BaseLLMProvider


def get_llm_provider(api_key: str) -> BaseLLMProvider:
    """Factory function that returns the provider bound to ``api_key``."""
    from taskchat.services.llm.openai import OpenAIProvider
    return OpenAIProvider(api_key)
