"""Anthropic Claude adapter for resume2latex."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from anthropic import APIError, AsyncAnthropic, RateLimitError

from resume2latex.llm.base import LLMProvider
from resume2latex.llm.models import (
    AttachmentPart,
    ContentPart,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)

PDF_MEDIA_TYPE = "application/pdf"


def _to_claude_block(part: ContentPart) -> dict[str, Any]:
    if isinstance(part, AttachmentPart):
        if part.media_type != PDF_MEDIA_TYPE:
            raise ValueError(
                f"Claude accepts PDF attachments only, got {part.media_type} "
                f"for {part.source_name or 'attachment'}; set attachments.mode to 'text'"
            )
        return {
            "type": "document",
            "source": {
                "type": "base64",
                "media_type": PDF_MEDIA_TYPE,
                "data": part.data,
            },
        }
    return {"type": "text", "text": part.text}


class ClaudeProvider(LLMProvider):
    """Claude adapter using the Anthropic async SDK.

    Only PDFs can be attached; use text mode for DOCX. ``top_p`` is never
    sent, so the Messages API default of 1.0 applies.
    """

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncAnthropic(
            api_key=config.api_key,  # falls back to ANTHROPIC_API_KEY env var
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    async def generate(
        self,
        parts: Sequence[ContentPart],
        system: str | None = None,
    ) -> LLMResponse:
        blocks = [_to_claude_block(p) for p in parts]
        kwargs: dict[str, Any] = {}
        if system:
            kwargs["system"] = system
        try:
            message = await self._client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                messages=[{"role": "user", "content": blocks}],
                **kwargs,
            )
        except APIError as e:
            raise LLMError(
                "claude", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        return LLMResponse(
            content=text,
            usage=TokenUsage(
                input_tokens=message.usage.input_tokens,
                output_tokens=message.usage.output_tokens,
            ),
            model=message.model,
        )
