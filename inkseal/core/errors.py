"""
Exceptions raised by the signing core.

Every error carries a short machine readable ``code`` next to the
user-facing message so controllers can decide how loudly to report it.
"""
from typing import Optional


class InksealError(Exception):
    """Base class for all recoverable signing errors."""

    code = "INKSEAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NoActiveDocument(InksealError):
    """An operation needed a loaded document and a render scale."""

    code = "NO_ACTIVE_DOCUMENT"

    def __init__(self, message: str = "No PDF document is loaded."):
        super().__init__(message)


class InvalidPageReference(InksealError):
    """A page number does not exist in the loaded document."""

    code = "INVALID_PAGE"

    def __init__(self, page: int, total_pages: int):
        super().__init__(f"Page {page} does not exist (document has {total_pages} pages).")
        self.page = page
        self.total_pages = total_pages


class UnsupportedImageFormat(InksealError):
    code = "UNSUPPORTED_IMAGE"

    def __init__(self, message: str = "Only PNG and JPEG images are supported."):
        super().__init__(message)


class ImageTooLarge(InksealError):
    code = "IMAGE_TOO_LARGE"

    def __init__(self, size: int, limit: int):
        super().__init__(f"Image files must be {limit // (1024 * 1024)} MB or smaller.")
        self.size = size
        self.limit = limit


class EmptyDrawing(InksealError):
    code = "EMPTY_DRAWING"

    def __init__(self, message: str = "Draw a signature before saving it."):
        super().__init__(message)


class EmptyStampName(InksealError):
    code = "EMPTY_STAMP_NAME"

    def __init__(self, message: str = "Enter a name for the stamp."):
        super().__init__(message)


class DocumentLoadError(InksealError):
    code = "DOCUMENT_LOAD_FAILED"

    def __init__(self, message: str = "The PDF file could not be read."):
        super().__init__(message)


class ExportFailed(InksealError):
    """Loading, embedding, drawing or serializing failed during export."""

    code = "EXPORT_FAILED"

    def __init__(self, message: str = "Saving the PDF failed."):
        super().__init__(message)
