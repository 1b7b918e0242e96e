"""Pydantic models for the text extraction subsystem."""

from __future__ import annotations

from pydantic import BaseModel


class ExtractionResult(BaseModel):
    """Plain text extracted from one uploaded document."""

    source_name: str
    markdown: str
    format: str  # pdf, docx
