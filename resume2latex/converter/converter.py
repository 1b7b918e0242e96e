"""Document-to-text extraction wrapping MarkItDown."""

from __future__ import annotations

import io
import logging
from functools import cached_property

from markitdown import MarkItDown

from resume2latex.converter.models import ExtractionResult
from resume2latex.intake.models import UploadedFile

logger = logging.getLogger(__name__)


class DocumentConverter:
    """Turns uploaded PDF/DOCX bytes into markdown text for text-only prompting."""

    @cached_property
    def _md(self) -> MarkItDown:
        return MarkItDown(enable_plugins=False)

    def convert(self, file: UploadedFile) -> ExtractionResult:
        """Extract text from ``file``.

        Raises ValueError when the document yields no readable text; errors
        from MarkItDown propagate.
        """
        result = self._md.convert_stream(io.BytesIO(file.data), file_extension=file.extension)
        markdown = (result.markdown or "").strip()
        if not markdown:
            raise ValueError(f"No readable text found in {file.name or 'document'}")
        logger.debug("Extracted %d chars from %s", len(markdown), file.name)
        return ExtractionResult(source_name=file.name, markdown=markdown, format=file.kind)

    def extract_text(self, file: UploadedFile) -> str:
        return self.convert(file).markdown
