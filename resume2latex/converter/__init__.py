"""Text extraction subsystem, wrapping MarkItDown."""

from resume2latex.converter.converter import DocumentConverter
from resume2latex.converter.models import ExtractionResult

__all__ = [
    "DocumentConverter",
    "ExtractionResult",
]
