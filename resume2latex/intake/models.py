"""Upload types accepted and produced by intake."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

from pydantic import BaseModel

DocumentKind = Literal["pdf", "docx"]


@runtime_checkable
class Upload(Protocol):
    """Anything shaped like a multipart file part (FastAPI's UploadFile fits)."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


class IncomingFile:
    """An upload whose bytes are already in memory."""

    def __init__(self, filename: str, data: bytes, content_type: str | None = None) -> None:
        self.filename = filename
        self.content_type = content_type
        self._data = data

    async def read(self) -> bytes:
        return self._data


class LocalUpload:
    """An upload backed by a file on disk; the declared type is left blank."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.filename = self.path.name
        self.content_type: str | None = None

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


class UploadedFile(BaseModel):
    """A recognized resume document with its bytes materialized."""

    name: str
    media_type: str
    kind: DocumentKind
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return f".{self.kind}"
