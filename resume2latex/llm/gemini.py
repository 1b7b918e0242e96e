"""Google Gemini adapter for resume2latex."""

from __future__ import annotations

from collections.abc import Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from resume2latex.llm.base import LLMProvider
from resume2latex.llm.models import (
    AttachmentPart,
    ContentPart,
    LLMConfig,
    LLMError,
    LLMResponse,
    TokenUsage,
)


def _to_gemini_part(part: ContentPart) -> types.Part:
    if isinstance(part, AttachmentPart):
        return types.Part.from_bytes(data=part.decode(), mime_type=part.media_type)
    return types.Part.from_text(text=part.text)


class GeminiProvider(LLMProvider):
    """Gemini adapter using the google-genai async client.

    Gemini reads PDF and DOCX bytes natively, so attachments are sent inline.
    """

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = genai.Client(
            api_key=config.api_key,
            http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
        )

    async def generate(
        self,
        parts: Sequence[ContentPart],
        system: str | None = None,
    ) -> LLMResponse:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.config.model,
                contents=[_to_gemini_part(p) for p in parts],
                config=types.GenerateContentConfig(
                    temperature=self.config.temperature,
                    top_p=self.config.top_p,
                    max_output_tokens=self.config.max_tokens,
                    system_instruction=system,
                ),
            )
        except genai_errors.APIError as e:
            raise LLMError("gemini", "generate", e, retryable=e.code == 429) from e

        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            usage=TokenUsage(
                input_tokens=(usage.prompt_token_count or 0) if usage else 0,
                output_tokens=(usage.candidates_token_count or 0) if usage else 0,
            ),
            model=self.config.model,
        )
