"""resume2latex - convert uploaded resumes into LaTeX through a hosted language model."""

from resume2latex.config import Resume2LatexConfig, load_config
from resume2latex.errors import (
    ConversionFailedError,
    EmptyModelResponseError,
    EmptyUploadError,
    FileReadError,
    NoValidFilesError,
)
from resume2latex.intake import UploadedFile, collect_uploads
from resume2latex.llm import LLMProvider, create_llm_provider
from resume2latex.orchestrator import ConversionResult, ResumeConverter

__version__ = "0.1.0"

__all__ = [
    "ConversionFailedError",
    "ConversionResult",
    "EmptyModelResponseError",
    "EmptyUploadError",
    "FileReadError",
    "LLMProvider",
    "NoValidFilesError",
    "Resume2LatexConfig",
    "ResumeConverter",
    "UploadedFile",
    "collect_uploads",
    "create_llm_provider",
    "load_config",
]
