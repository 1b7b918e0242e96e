"""Tests for the conversion orchestrator."""

import asyncio
import base64
import time
from unittest.mock import AsyncMock, MagicMock

import pytest

from resume2latex.config.models import (
    AttachmentConfig,
    IntakeConfig,
    LLMSettings,
    Resume2LatexConfig,
    TemplateConfig,
)
from resume2latex.converter import DocumentConverter
from resume2latex.errors import (
    ConversionFailedError,
    EmptyModelResponseError,
    EmptyUploadError,
    FileReadError,
    NoValidFilesError,
)
from resume2latex.intake import IncomingFile
from resume2latex.llm.models import (
    AttachmentPart,
    LLMError,
    LLMResponse,
    TextPart,
    TokenUsage,
)
from resume2latex.orchestrator import ConversionResult, ResumeConverter, encode_attachment


def _reply(content: str) -> LLMResponse:
    return LLMResponse(
        content=content,
        usage=TokenUsage(input_tokens=1, output_tokens=1),
        model="test-model",
    )


class _BrokenUpload:
    filename = "bad.pdf"
    content_type = "application/pdf"

    async def read(self) -> bytes:
        raise OSError("disconnected")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class TestEncodeAttachment:
    def test_round_trip_is_lossless(self, pdf_file):
        part = encode_attachment(pdf_file)
        assert part.decode() == pdf_file.data
        assert base64.b64decode(part.data) == pdf_file.data

    def test_binary_bytes_round_trip(self, pdf_file):
        blob = pdf_file.model_copy(update={"data": bytes(range(256)) * 300})
        part = encode_attachment(blob)
        assert "\n" not in part.data
        assert part.decode() == blob.data

    def test_carries_media_type_and_name(self, docx_file):
        part = encode_attachment(docx_file)
        assert part.media_type == docx_file.media_type
        assert part.source_name == "resume.docx"


# ---------------------------------------------------------------------------
# Request assembly
# ---------------------------------------------------------------------------


class TestBuildRequest:
    @pytest.mark.asyncio
    async def test_two_files_sequence_shape(self, mock_llm_provider, pdf_file, docx_file):
        converter = ResumeConverter(mock_llm_provider)
        request = await converter.build_request([pdf_file, docx_file])

        kinds = [type(p) for p in request.parts]
        assert kinds == [TextPart, AttachmentPart, AttachmentPart, TextPart]
        assert request.attachment_count == 2
        assert request.parts[1].source_name == "resume.pdf"
        assert request.parts[2].source_name == "resume.docx"
        note = request.parts[3].text
        assert "- resume.pdf" in note and "- resume.docx" in note

    @pytest.mark.asyncio
    async def test_prompt_embeds_template(self, mock_llm_provider, pdf_file, tmp_path):
        template = tmp_path / "t.tex"
        template.write_text("\\documentclass{memoir}")
        cfg = Resume2LatexConfig(template=TemplateConfig(path=str(template)))
        request = await ResumeConverter(mock_llm_provider, cfg).build_request([pdf_file])

        assert request.template == "\\documentclass{memoir}"
        assert "```latex\n\\documentclass{memoir}\n```" in request.parts[0].text

    @pytest.mark.asyncio
    async def test_missing_template_does_not_fail(self, mock_llm_provider, pdf_file, tmp_path):
        cfg = Resume2LatexConfig(template=TemplateConfig(path=str(tmp_path / "nope.tex")))
        request = await ResumeConverter(mock_llm_provider, cfg).build_request([pdf_file])
        assert request.template == ""
        assert request.parts[0].text.startswith("You are a professional resume formatter")

    @pytest.mark.asyncio
    async def test_no_manifest_when_names_unknown(self, mock_llm_provider, pdf_file):
        nameless = pdf_file.model_copy(update={"name": ""})
        request = await ResumeConverter(mock_llm_provider).build_request([nameless])
        assert [type(p) for p in request.parts] == [TextPart, AttachmentPart]

    @pytest.mark.asyncio
    async def test_text_mode_uses_extracted_text(self, mock_llm_provider, pdf_file, docx_file):
        extractor = MagicMock(spec=DocumentConverter)
        extractor.extract_text.side_effect = ["PDF TEXT", "DOCX TEXT"]
        cfg = Resume2LatexConfig(attachments=AttachmentConfig(mode="text"))
        converter = ResumeConverter(mock_llm_provider, cfg, extractor=extractor)

        request = await converter.build_request([pdf_file, docx_file])

        assert all(isinstance(p, TextPart) for p in request.parts)
        assert request.attachment_count == 0
        assert "--- Resume Content from resume.pdf ---\nPDF TEXT" in request.parts[1].text
        assert "DOCX TEXT" in request.parts[2].text
        assert request.parts[3].text.startswith("Note: The above content was extracted from:")


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------


class TestConvert:
    @pytest.mark.asyncio
    async def test_returns_unwrapped_latex(self, mock_llm_provider, pdf_file):
        result = await ResumeConverter(mock_llm_provider).convert([pdf_file])

        assert isinstance(result, ConversionResult)
        assert result.latex_source == (
            "\\documentclass{article}\n\\begin{document}\nHi\n\\end{document}"
        )
        assert result.model == "test-model"
        assert result.usage.output_tokens == 850
        mock_llm_provider.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_passes_content_sequence_to_provider(self, mock_llm_provider, pdf_file, docx_file):
        await ResumeConverter(mock_llm_provider).convert([pdf_file, docx_file])

        parts = mock_llm_provider.generate.await_args.args[0]
        assert len(parts) == 4
        assert parts[1].decode() == pdf_file.data
        assert parts[2].decode() == docx_file.data

    @pytest.mark.asyncio
    async def test_unfenced_reply_returned_trimmed(self, mock_llm_provider, pdf_file):
        mock_llm_provider.generate.return_value = _reply("\n\\documentclass{article}\n  ")
        result = await ResumeConverter(mock_llm_provider).convert([pdf_file])
        assert result.latex_source == "\\documentclass{article}"

    @pytest.mark.asyncio
    async def test_empty_reply_raises_empty_model_response(self, mock_llm_provider, pdf_file):
        mock_llm_provider.generate.return_value = _reply("")
        with pytest.raises(EmptyModelResponseError):
            await ResumeConverter(mock_llm_provider).convert([pdf_file])

    @pytest.mark.asyncio
    async def test_empty_batch_raises_no_valid_files(self, mock_llm_provider):
        with pytest.raises(NoValidFilesError):
            await ResumeConverter(mock_llm_provider).convert([])
        mock_llm_provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_error_wrapped(self, mock_llm_provider, pdf_file):
        cause = LLMError("gemini", "generate", RuntimeError("401 unauthorized"))
        mock_llm_provider.generate.side_effect = cause

        with pytest.raises(ConversionFailedError) as exc_info:
            await ResumeConverter(mock_llm_provider).convert([pdf_file])

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert "401 unauthorized" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_extraction_error_wrapped(self, mock_llm_provider, pdf_file):
        extractor = MagicMock(spec=DocumentConverter)
        extractor.extract_text.side_effect = ValueError("No readable text found in resume.pdf")
        cfg = Resume2LatexConfig(attachments=AttachmentConfig(mode="text"))

        with pytest.raises(ConversionFailedError, match="No readable text"):
            await ResumeConverter(mock_llm_provider, cfg, extractor=extractor).convert([pdf_file])
        mock_llm_provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_deadline_enforced(self, mock_llm_provider, pdf_file):
        async def _slow(*args, **kwargs):
            await asyncio.sleep(5)

        mock_llm_provider.generate = AsyncMock(side_effect=_slow)
        cfg = Resume2LatexConfig(llm=LLMSettings(timeout=0.05))

        with pytest.raises(ConversionFailedError, match="timed out"):
            await ResumeConverter(mock_llm_provider, cfg).convert([pdf_file])

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, mock_llm_provider, pdf_file, docx_file):
        converter = ResumeConverter(mock_llm_provider)
        a, b = await asyncio.gather(converter.convert([pdf_file]), converter.convert([docx_file]))
        assert a.latex_source == b.latex_source
        first, second = (c.args[0] for c in mock_llm_provider.generate.await_args_list)
        assert first[1].source_name == "resume.pdf"
        assert second[1].source_name == "resume.docx"

    @pytest.mark.asyncio
    async def test_text_extraction_does_not_block_event_loop(self, mock_llm_provider, pdf_file):
        def _slow_extract(file):
            time.sleep(0.4)
            return "PDF TEXT"

        extractor = MagicMock(spec=DocumentConverter)
        extractor.extract_text.side_effect = _slow_extract
        cfg = Resume2LatexConfig(attachments=AttachmentConfig(mode="text"))
        converter = ResumeConverter(mock_llm_provider, cfg, extractor=extractor)

        gaps = []
        done = asyncio.Event()

        async def _ticker():
            last = time.monotonic()
            while not done.is_set():
                await asyncio.sleep(0.02)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        async def _run():
            try:
                return await converter.convert([pdf_file])
            finally:
                done.set()

        result, _ = await asyncio.gather(_run(), _ticker())

        assert result.latex_source.startswith("\\documentclass")
        assert len(gaps) > 5
        assert max(gaps) < 0.2


# ---------------------------------------------------------------------------
# convert_uploads
# ---------------------------------------------------------------------------


class TestConvertUploads:
    @pytest.mark.asyncio
    async def test_zero_files_never_calls_provider(self, mock_llm_provider):
        with pytest.raises(EmptyUploadError):
            await ResumeConverter(mock_llm_provider).convert_uploads([])
        assert mock_llm_provider.generate.call_count == 0

    @pytest.mark.asyncio
    async def test_unsupported_files_never_call_provider(self, mock_llm_provider):
        uploads = [IncomingFile("a.txt", b"x"), IncomingFile("b.jpg", b"y")]
        with pytest.raises(NoValidFilesError):
            await ResumeConverter(mock_llm_provider).convert_uploads(uploads)
        assert mock_llm_provider.generate.call_count == 0

    @pytest.mark.asyncio
    async def test_read_error_policy_from_config(self, mock_llm_provider, pdf_upload):
        uploads = [_BrokenUpload(), pdf_upload]

        with pytest.raises(FileReadError):
            await ResumeConverter(mock_llm_provider).convert_uploads(uploads)

        cfg = Resume2LatexConfig(intake=IntakeConfig(on_read_error="skip"))
        result = await ResumeConverter(mock_llm_provider, cfg).convert_uploads(uploads)
        assert result.latex_source.startswith("\\documentclass")
        parts = mock_llm_provider.generate.await_args.args[0]
        assert [p.source_name for p in parts if isinstance(p, AttachmentPart)] == ["resume.pdf"]

    @pytest.mark.asyncio
    async def test_mixed_batch(self, mock_llm_provider, pdf_upload, docx_upload):
        uploads = [pdf_upload, IncomingFile("notes.txt", b"x"), docx_upload]
        await ResumeConverter(mock_llm_provider).convert_uploads(uploads)
        parts = mock_llm_provider.generate.await_args.args[0]
        assert [p.media_type for p in parts if isinstance(p, AttachmentPart)] == [
            "application/pdf",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ]


class TestExtractorDefault:
    def test_extractor_created_lazily(self, mock_llm_provider):
        converter = ResumeConverter(mock_llm_provider)
        assert converter._extractor is None
        assert isinstance(converter.extractor, DocumentConverter)
        assert converter.extractor is converter.extractor
