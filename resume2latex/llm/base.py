"""Abstract LLM interface for resume2latex."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from resume2latex.llm.models import ContentPart, LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface for one-shot multimodal generation.

    Adapters receive an ordered content sequence of text and attachment
    parts and return the model's text completion. Generation parameters
    (temperature, top_p, max_tokens) come from ``self.config`` so every call
    through one provider is shaped the same way.

    Adapters return an empty ``content`` when the model produced no text;
    deciding whether that is an error belongs to the caller.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        parts: Sequence[ContentPart],
        system: str | None = None,
    ) -> LLMResponse:
        """Generate a complete response (one-shot)."""
        ...
