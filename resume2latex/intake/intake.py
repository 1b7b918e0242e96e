"""Filter a multi-file upload down to the resume documents we can send."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import PurePath
from typing import Literal

from resume2latex.errors import EmptyUploadError, FileReadError, NoValidFilesError
from resume2latex.intake.models import DocumentKind, Upload, UploadedFile

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MEDIA_TYPES: dict[DocumentKind, str] = {
    "pdf": PDF_MEDIA_TYPE,
    "docx": DOCX_MEDIA_TYPE,
}

_EXTENSIONS: dict[str, DocumentKind] = {
    ".pdf": "pdf",
    ".docx": "docx",
}

_DECLARED: dict[str, DocumentKind] = {v: k for k, v in MEDIA_TYPES.items()}

ReadErrorPolicy = Literal["abort", "skip"]


# A real extension is short, single-case and carries a letter: ".txt", ".PDF",
# ".mp3". "J.Smith" or "resume_v2.1" end in a dot segment that is not one.
_REAL_EXTENSION = re.compile(r"\.(?=[0-9]*[A-Za-z])(?:[a-z0-9]{1,5}|[A-Z0-9]{1,5})")


def _normalize_declared(declared_type: str | None) -> str:
    # "application/pdf; charset=binary" -> "application/pdf"
    return (declared_type or "").split(";", 1)[0].strip().lower()


def _extension(file_name: str | None) -> str:
    """The lowercased extension of ``file_name``, or "" when it has none."""
    suffix = PurePath(file_name or "").suffix
    if suffix.lower() in _EXTENSIONS:
        return suffix.lower()
    if not _REAL_EXTENSION.fullmatch(suffix):
        return ""
    return suffix.lower()


def classify(file_name: str | None, declared_type: str | None = None) -> DocumentKind | None:
    """Return "pdf", "docx", or None for an unsupported file.

    The declared media type wins when it names a supported type. A file name
    whose extension is neither .pdf nor .docx rules the file out whatever the
    declared type says; a name without an extension defers to the declared
    type. Dots inside a name ("Resume - J.Smith") do not make an extension.
    """
    suffix = _extension(file_name)
    if suffix and suffix not in _EXTENSIONS:
        return None

    declared = _DECLARED.get(_normalize_declared(declared_type))
    if declared is not None:
        return declared
    return _EXTENSIONS.get(suffix)


def resolve_media_type(kind: DocumentKind, declared_type: str | None) -> str:
    """The canonical MIME type for ``kind``, keeping the declared one if it matches."""
    declared = _normalize_declared(declared_type)
    if _DECLARED.get(declared) == kind:
        return declared
    return MEDIA_TYPES[kind]


async def collect_uploads(
    uploads: Sequence[Upload] | None,
    on_read_error: ReadErrorPolicy = "abort",
) -> list[UploadedFile]:
    """Materialize the recognized resume documents from ``uploads``, in order.

    Raises:
        EmptyUploadError: nothing was uploaded.
        FileReadError: a file could not be read and the policy is "abort".
        NoValidFilesError: files were uploaded but none is a PDF or DOCX.
    """
    if not uploads:
        raise EmptyUploadError()

    accepted: list[UploadedFile] = []
    for upload in uploads:
        name = upload.filename or ""
        kind = classify(name, upload.content_type)
        if kind is None:
            logger.warning(
                "Skipping unsupported file %r (declared type: %s)",
                name,
                upload.content_type or "none",
            )
            continue

        try:
            data = await upload.read()
        except Exception as e:
            if on_read_error == "skip":
                logger.warning("Could not read %r, skipping it", name, exc_info=True)
                continue
            raise FileReadError(name, e) from e

        media_type = resolve_media_type(kind, upload.content_type)
        accepted.append(UploadedFile(name=name, media_type=media_type, kind=kind, data=data))
        logger.debug("Accepted %r as %s (%d bytes)", name, media_type, len(data))

    if not accepted:
        logger.warning("No valid files among %d upload(s)", len(uploads))
        raise NoValidFilesError()

    logger.info("Accepted %d of %d uploaded file(s)", len(accepted), len(uploads))
    return accepted
