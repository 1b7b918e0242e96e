"""Shared test fixtures for resume2latex."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from resume2latex.config.models import Resume2LatexConfig
from resume2latex.intake.models import IncomingFile, UploadedFile
from resume2latex.latex.template import clear_template_cache
from resume2latex.llm.base import LLMProvider
from resume2latex.llm.models import LLMConfig, LLMResponse, TokenUsage

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"
DOCX_BYTES = b"PK\x03\x04\x14\x00\x06\x00word/document.xml\x00\xff\xfe"

LATEX_REPLY = (
    "```latex\n"
    "\\documentclass{article}\n"
    "\\begin{document}\n"
    "Hi\n"
    "\\end{document}\n"
    "```"
)


@pytest.fixture(autouse=True)
def _fresh_template_cache():
    clear_template_cache()
    yield
    clear_template_cache()


@pytest.fixture
def sample_config():
    return Resume2LatexConfig()


@pytest.fixture
def pdf_file():
    return UploadedFile(
        name="resume.pdf", media_type="application/pdf", kind="pdf", data=PDF_BYTES
    )


@pytest.fixture
def docx_file():
    return UploadedFile(
        name="resume.docx",
        media_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        kind="docx",
        data=DOCX_BYTES,
    )


@pytest.fixture
def pdf_upload():
    return IncomingFile("resume.pdf", PDF_BYTES)


@pytest.fixture
def docx_upload():
    return IncomingFile("resume.docx", DOCX_BYTES)


@pytest.fixture
def mock_llm_provider():
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMConfig(provider="google", model="test-model")
    provider.generate = AsyncMock(
        return_value=LLMResponse(
            content=LATEX_REPLY,
            usage=TokenUsage(input_tokens=1200, output_tokens=850),
            model="test-model",
        )
    )
    return provider
