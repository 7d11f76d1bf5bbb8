"""
PDF mutation backend used when saving signed documents.

The exporter only talks to the small :class:`PdfBackend` /
:class:`DocumentHandle` protocol; :class:`PyMuPDFBackend` implements it on
top of PyMuPDF. Rectangles passed to ``draw_image`` are in PDF user space
(origin bottom-left).
"""
from dataclasses import dataclass
from typing import List, NamedTuple, Protocol

import fitz  # PyMuPDF

from inkseal.core.errors import ExportFailed
from inkseal.core.geometry import PdfRect, to_page_rect


class PageSize(NamedTuple):
    width: float
    height: float


@dataclass
class ImageHandle:
    """An image registered with a document, drawable on any page."""
    data: bytes
    image_format: str
    xref: int = 0  # set once the image is stored in the PDF


class DocumentHandle(Protocol):
    def pages(self) -> List[PageSize]: ...

    def embed_image(self, data: bytes, image_format: str) -> ImageHandle: ...

    def draw_image(self, page_index: int, image: ImageHandle, rect: PdfRect) -> None: ...

    def serialize(self) -> bytes: ...

    def close(self) -> None: ...


class PdfBackend(Protocol):
    def load(self, pdf_bytes: bytes) -> DocumentHandle: ...


SUPPORTED_FORMATS = ("png", "jpeg")


class PyMuPDFDocument:
    """DocumentHandle over an in-memory PyMuPDF document."""

    def __init__(self, doc: fitz.Document):
        self.doc = doc

    def pages(self) -> List[PageSize]:
        return [PageSize(page.rect.width, page.rect.height) for page in self.doc]

    def embed_image(self, data: bytes, image_format: str) -> ImageHandle:
        if image_format not in SUPPORTED_FORMATS:
            raise ExportFailed(f"Unsupported image format: {image_format}")
        # Validate the bytes now so a broken image fails before any drawing
        try:
            pix = fitz.Pixmap(data)
        except Exception as e:
            raise ExportFailed("A signature image could not be embedded.") from e
        if pix.width == 0 or pix.height == 0:
            raise ExportFailed("A signature image has no pixels.")
        return ImageHandle(data=data, image_format=image_format)

    def draw_image(self, page_index: int, image: ImageHandle, rect: PdfRect) -> None:
        page = self.doc[page_index]
        # PyMuPDF measures y from the top edge of the page
        x0, y0, x1, y1 = to_page_rect(rect, page.rect.height)
        target = fitz.Rect(x0, y0, x1, y1)

        if image.xref:
            page.insert_image(target, xref=image.xref, keep_proportion=False)
        else:
            image.xref = page.insert_image(target, stream=image.data, keep_proportion=False)

    def serialize(self) -> bytes:
        return self.doc.tobytes(garbage=4, deflate=True)

    def close(self) -> None:
        self.doc.close()


class PyMuPDFBackend:
    def load(self, pdf_bytes: bytes) -> PyMuPDFDocument:
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            raise ExportFailed("The source PDF could not be reopened.") from e
        return PyMuPDFDocument(doc)
