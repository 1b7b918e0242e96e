"""Auto-detect the best available LLM provider."""

from __future__ import annotations

import os

from resume2latex.config.models import LLMSettings
from resume2latex.llm.base import LLMProvider
from resume2latex.llm.models import LLMConfig

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


def auto_detect_provider(settings: LLMSettings | None = None) -> LLMProvider:
    """Try providers in priority order and return the first with a key set.

    Order: Gemini > OpenRouter > OpenAI > Anthropic. Generation parameters
    (temperature, top_p, max_tokens, timeout) are taken from ``settings`` when
    given. Raises ValueError if no key is found.
    """
    params = (
        settings.model_dump(include={"max_tokens", "temperature", "top_p", "timeout", "max_retries"})
        if settings is not None
        else {}
    )

    # 1. Google Gemini
    api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
    if api_key:
        from resume2latex.llm.gemini import GeminiProvider

        return GeminiProvider(
            LLMConfig(provider="google", model="gemini-2.5-pro", api_key=api_key, **params)
        )

    # 2. OpenRouter (OpenAI-compatible)
    api_key = os.environ.get("OPENROUTER_API_KEY")
    if api_key:
        from resume2latex.llm.openai_adapter import OpenAIProvider

        return OpenAIProvider(
            LLMConfig(
                provider="openai",
                model="google/gemini-2.5-pro",
                api_key=api_key,
                base_url=OPENROUTER_BASE_URL,
                default_headers={
                    "HTTP-Referer": os.environ.get("SITE_URL", "http://localhost:3000"),
                    "X-Title": "LaTeX Resume Converter",
                },
                **params,
            )
        )

    # 3. OpenAI
    api_key = os.environ.get("OPENAI_API_KEY")
    if api_key:
        from resume2latex.llm.openai_adapter import OpenAIProvider

        return OpenAIProvider(
            LLMConfig(provider="openai", model="gpt-4o", api_key=api_key, **params)
        )

    # 4. Anthropic
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if api_key:
        from resume2latex.llm.claude import ClaudeProvider

        return ClaudeProvider(
            LLMConfig(
                provider="anthropic",
                model="claude-sonnet-4-5",
                api_key=api_key,
                **params,
            )
        )

    raise ValueError(
        "No LLM provider found. Set llm.provider in resume2latex.yaml or export an "
        "API key (GEMINI_API_KEY, OPENROUTER_API_KEY, OPENAI_API_KEY, ANTHROPIC_API_KEY)."
    )
