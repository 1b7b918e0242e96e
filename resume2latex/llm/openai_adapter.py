"""OpenAI-compatible adapter for resume2latex (OpenAI, OpenRouter)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from openai import APIError, AsyncOpenAI, RateLimitError

from resume2latex.llm.base import LLMProvider
from resume2latex.llm.models import (
    AttachmentPart,
    ContentPart,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)


def _to_openai_part(part: ContentPart, index: int) -> dict[str, Any]:
    if isinstance(part, AttachmentPart):
        return {
            "type": "file",
            "file": {
                "filename": part.source_name or f"document-{index}",
                "file_data": part.data_url(),
            },
        }
    return {"type": "text", "text": part.text}


class OpenAIProvider(LLMProvider):
    """Chat-completions adapter using the OpenAI async SDK.

    Pointing ``base_url`` at https://openrouter.ai/api/v1 routes the same
    request through OpenRouter.
    """

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncOpenAI(
            api_key=config.api_key,  # falls back to OPENAI_API_KEY env var
            base_url=config.base_url,
            default_headers=config.default_headers or None,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    async def generate(
        self,
        parts: Sequence[ContentPart],
        system: str | None = None,
    ) -> LLMResponse:
        messages: list[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append(
            {
                "role": "user",
                "content": [_to_openai_part(p, i) for i, p in enumerate(parts, 1)],
            }
        )
        try:
            response = await self._client.chat.completions.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                top_p=self.config.top_p,
                messages=messages,
            )
        except APIError as e:
            raise LLMError(
                "openai", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e

        content = response.choices[0].message.content if response.choices else None
        usage = response.usage
        return LLMResponse(
            content=content or "",
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
            ),
            model=response.model or self.config.model,
        )
