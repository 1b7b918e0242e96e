"""Conversion orchestrator: uploaded resumes in, LaTeX source out."""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from collections.abc import Sequence

from pydantic import BaseModel, Field

from resume2latex.config import Resume2LatexConfig
from resume2latex.converter import DocumentConverter
from resume2latex.errors import ConversionFailedError, NoValidFilesError
from resume2latex.intake import Upload, UploadedFile, collect_uploads
from resume2latex.latex import (
    build_extracted_manifest_note,
    build_manifest_note,
    build_prompt,
    extract_latex,
    load_template,
    wrap_extracted_text,
)
from resume2latex.llm.base import LLMProvider
from resume2latex.llm.models import AttachmentPart, ContentPart, TextPart, TokenUsage

logger = logging.getLogger(__name__)


class ConversionRequest(BaseModel):
    """Everything sent to the provider for one conversion."""

    template: str
    parts: list[ContentPart] = Field(default_factory=list)

    @property
    def attachment_count(self) -> int:
        return sum(1 for p in self.parts if isinstance(p, AttachmentPart))


class ConversionResult(BaseModel):
    latex_source: str
    model: str | None = None
    usage: TokenUsage | None = None


def encode_attachment(file: UploadedFile) -> AttachmentPart:
    """Standard base64 (no line wrapping) of the file's bytes."""
    return AttachmentPart(
        data=base64.b64encode(file.data).decode("ascii"),
        media_type=file.media_type,
        source_name=file.name,
    )


class ResumeConverter:
    """Turns a validated batch of resume files into LaTeX via one model call.

    Pipeline:
        template → prompt → [prompt, attachments..., manifest note] → LLM → unwrap

    Holds no per-request state; one instance serves concurrent calls.
    """

    def __init__(
        self,
        llm: LLMProvider,
        config: Resume2LatexConfig | None = None,
        extractor: DocumentConverter | None = None,
    ) -> None:
        self.llm = llm
        self.config = config or Resume2LatexConfig()
        self._extractor = extractor

    @property
    def extractor(self) -> DocumentConverter:
        if self._extractor is None:
            self._extractor = DocumentConverter()
        return self._extractor

    async def build_request(self, files: Sequence[UploadedFile]) -> ConversionRequest:
        """Assemble the ordered content sequence for ``files``.

        Text extraction runs in a worker thread; MarkItDown parsing is blocking.
        """
        template = load_template(self.config.template.path)
        parts: list[ContentPart] = [TextPart(text=build_prompt(template))]
        names = [f.name for f in files]

        if self.config.attachments.mode == "text":
            for f in files:
                text = await asyncio.to_thread(self.extractor.extract_text, f)
                parts.append(TextPart(text=wrap_extracted_text(f.name, text)))
            note = build_extracted_manifest_note(names)
        else:
            parts.extend(encode_attachment(f) for f in files)
            note = build_manifest_note(names)

        if note is not None:
            parts.append(TextPart(text=note))
        return ConversionRequest(template=template, parts=parts)

    async def convert(self, files: Sequence[UploadedFile]) -> ConversionResult:
        """Convert an already-validated batch.

        Raises NoValidFilesError for an empty batch, ConversionFailedError
        (or its subclass EmptyModelResponseError) for everything else.
        """
        if not files:
            raise NoValidFilesError()

        try:
            request = await self.build_request(files)
            logger.info(
                "Calling %s (%s) with %d part(s), %d attachment(s)",
                self.llm.config.provider,
                self.llm.config.model,
                len(request.parts),
                request.attachment_count,
            )
            started = time.monotonic()
            response = await asyncio.wait_for(
                self.llm.generate(request.parts),
                timeout=self.config.llm.timeout,
            )
            logger.info(
                "Model responded in %.0f ms (%d chars)",
                (time.monotonic() - started) * 1000,
                len(response.content),
            )
            latex = extract_latex(response.content)
        except ConversionFailedError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("Model call exceeded %ss deadline", self.config.llm.timeout)
            raise ConversionFailedError(
                f"Model call timed out after {self.config.llm.timeout}s", e
            ) from e
        except Exception as e:
            logger.exception("Resume conversion failed")
            raise ConversionFailedError(
                f"Failed to convert resume to LaTeX: {e}", e
            ) from e

        return ConversionResult(latex_source=latex, model=response.model, usage=response.usage)

    async def convert_uploads(self, uploads: Sequence[Upload] | None) -> ConversionResult:
        """Run intake on raw uploads, then convert.

        Intake errors (EmptyUploadError, NoValidFilesError, FileReadError)
        propagate before the provider is touched.
        """
        files = await collect_uploads(uploads, on_read_error=self.config.intake.on_read_error)
        return await self.convert(files)
