"""Pydantic models for the LLM subsystem."""

from __future__ import annotations

import base64
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class LLMError(Exception):
    """Wraps provider-specific exceptions with context."""

    def __init__(
        self, provider: str, operation: str, cause: Exception, retryable: bool = False
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.retryable = retryable
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause


class LLMConfig(BaseModel):
    """Configuration for an LLM provider."""

    provider: Literal["google", "openai", "anthropic"]
    model: str
    max_tokens: int = 8192
    temperature: float = 0.4
    top_p: float = 1.0
    timeout: float = 120.0
    max_retries: int = 2
    api_key: str | None = None
    base_url: str | None = None
    default_headers: dict[str, str] = Field(default_factory=dict)


class TextPart(BaseModel):
    """Plain text content: the prompt, a note, or extracted document text."""

    type: Literal["text"] = "text"
    text: str


class AttachmentPart(BaseModel):
    """A binary document, base64-encoded for transmission."""

    type: Literal["attachment"] = "attachment"
    data: str
    media_type: str
    source_name: str = ""

    def decode(self) -> bytes:
        return base64.b64decode(self.data)

    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


ContentPart = Annotated[Union[TextPart, AttachmentPart], Field(discriminator="type")]


class TokenUsage(BaseModel):
    """Token usage stats from a single LLM call."""

    input_tokens: int
    output_tokens: int


class LLMResponse(BaseModel):
    """Structured response from an LLM provider."""

    content: str
    usage: TokenUsage
    model: str
