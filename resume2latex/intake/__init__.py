"""Upload intake: classification and byte materialization."""

from resume2latex.intake.intake import (
    DOCX_MEDIA_TYPE,
    MEDIA_TYPES,
    PDF_MEDIA_TYPE,
    classify,
    collect_uploads,
    resolve_media_type,
)
from resume2latex.intake.models import IncomingFile, LocalUpload, Upload, UploadedFile

__all__ = [
    "DOCX_MEDIA_TYPE",
    "IncomingFile",
    "LocalUpload",
    "MEDIA_TYPES",
    "PDF_MEDIA_TYPE",
    "Upload",
    "UploadedFile",
    "classify",
    "collect_uploads",
    "resolve_media_type",
]
