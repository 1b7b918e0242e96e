"""LLM provider abstraction layer."""

import os

from resume2latex.config.models import LLMSettings
from resume2latex.llm.base import LLMProvider
from resume2latex.llm.claude import ClaudeProvider
from resume2latex.llm.gemini import GeminiProvider
from resume2latex.llm.models import (
    AttachmentPart,
    ContentPart,
    LLMConfig,
    LLMError,
    LLMResponse,
    TextPart,
    TokenUsage,
)
from resume2latex.llm.openai_adapter import OpenAIProvider

_PROVIDER_MAP: dict[str, type[LLMProvider]] = {
    "google": GeminiProvider,
    "openai": OpenAIProvider,
    "anthropic": ClaudeProvider,
}


def create_llm_provider(settings: LLMSettings) -> LLMProvider:
    """Create an LLM provider from app-level settings.

    Resolves the API key from the env var in settings.api_key_env, then
    bridges the app-level LLMSettings to the provider-level LLMConfig.
    For "auto" provider, delegates to auto_detect_provider().
    """
    if settings.provider == "auto":
        from resume2latex.llm.auto_detect import auto_detect_provider

        return auto_detect_provider(settings)

    cls = _PROVIDER_MAP.get(settings.provider)
    if cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {settings.provider!r}. "
            f"Supported: {', '.join(_PROVIDER_MAP)}"
        )

    api_key = os.environ.get(settings.api_key_env)
    if not api_key:
        raise ValueError(
            f"Missing API key: set environment variable {settings.api_key_env!r}"
        )
    llm_config = LLMConfig(
        provider=settings.provider,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        top_p=settings.top_p,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        api_key=api_key,
        base_url=settings.base_url,
        default_headers=settings.headers,
    )
    return cls(llm_config)


__all__ = [
    "AttachmentPart",
    "ClaudeProvider",
    "ContentPart",
    "GeminiProvider",
    "LLMConfig",
    "LLMError",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TextPart",
    "TokenUsage",
    "create_llm_provider",
]
