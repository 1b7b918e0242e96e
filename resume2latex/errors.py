"""Error taxonomy for resume intake and conversion."""

from __future__ import annotations


class Resume2LatexError(Exception):
    """Base class for all errors raised by resume2latex."""

    status_code: int = 500


class IntakeError(Resume2LatexError):
    """The upload was rejected before any model call was made."""

    status_code = 400


class EmptyUploadError(IntakeError):
    def __init__(self, message: str = "No files uploaded.") -> None:
        super().__init__(message)


class NoValidFilesError(IntakeError):
    def __init__(self, message: str = "No valid files found.") -> None:
        super().__init__(message)


class FileReadError(IntakeError):
    """A file's bytes could not be read from the upload."""

    def __init__(self, file_name: str, cause: Exception) -> None:
        self.file_name = file_name
        super().__init__(f"Failed to process {file_name}: {cause}")
        self.__cause__ = cause


class ConversionFailedError(Resume2LatexError):
    """Wraps any failure between prompt assembly and response unwrapping."""

    status_code = 500

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def details(self) -> str:
        # TimeoutError and friends stringify to ""
        if self.cause is not None and str(self.cause):
            return str(self.cause)
        return str(self)


class EmptyModelResponseError(ConversionFailedError):
    def __init__(self, message: str = "No response text from the model") -> None:
        super().__init__(message)
