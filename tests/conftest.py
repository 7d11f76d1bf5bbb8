"""
Shared fixtures: an offscreen Qt application and small PDFs/images built
with PyMuPDF.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz  # PyMuPDF
import pytest
from PyQt5.QtWidgets import QApplication

from inkseal.config import AppConfig
from inkseal.core.annotations import Annotation, ScaleInfo, SignatureImage
from inkseal.core.document.pdf_backend import ImageHandle, PageSize


def make_pdf(page_sizes=((612, 792),)) -> bytes:
    """Build a PDF with one blank page per (width, height)."""
    doc = fitz.open()
    for width, height in page_sizes:
        doc.new_page(width=width, height=height)
    data = doc.tobytes()
    doc.close()
    return data


def make_png(width=20, height=10, color=(255, 0, 0)) -> bytes:
    """Build an opaque PNG of the given size."""
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.set_rect(pix.irect, color)
    return pix.tobytes("png")


def make_jpeg(width=20, height=10) -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.set_rect(pix.irect, (0, 0, 255))
    return pix.tobytes("jpg")


def make_annotation(page=1, x=100.0, y=100.0, width=150.0, height=50.0,
                    scale=1.0, image=None) -> Annotation:
    if image is None:
        image = SignatureImage(make_png(30, 10), "image/png", 30, 10)
    return Annotation(page=page, image=image, x=x, y=y, width=width,
                      height=height, scale=scale)


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def scale_info():
    """US Letter rendered at scale 1.0."""
    return ScaleInfo.for_page(612, 792, 1.0)


@pytest.fixture
def png_image():
    return SignatureImage(make_png(30, 10), "image/png", 30, 10)


@pytest.fixture
def three_page_pdf():
    return make_pdf([(612, 792)] * 3)


class RecordingDocument:
    """In-memory DocumentHandle that records every call."""

    def __init__(self, backend, page_sizes):
        self.backend = backend
        self.page_sizes = [PageSize(w, h) for w, h in page_sizes]
        self.closed = False

    def pages(self):
        return list(self.page_sizes)

    def embed_image(self, data, image_format):
        if self.backend.fail_on == "embed":
            raise RuntimeError("embed failed")
        self.backend.embeds.append(image_format)
        return ImageHandle(data=data, image_format=image_format)

    def draw_image(self, page_index, image, rect):
        if self.backend.fail_on == "draw":
            raise RuntimeError("draw failed")
        self.backend.draws.append((page_index, image, rect))

    def serialize(self):
        if self.backend.fail_on == "serialize":
            raise RuntimeError("serialize failed")
        return b"%PDF-recorded"

    def close(self):
        self.closed = True


class RecordingBackend:
    """PdfBackend double for exporter tests."""

    def __init__(self, page_sizes=((612, 792), (612, 792)), fail_on=None):
        self.page_sizes = page_sizes
        self.fail_on = fail_on
        self.load_calls = 0
        self.embeds = []
        self.draws = []
        self.documents = []

    def load(self, pdf_bytes):
        self.load_calls += 1
        if self.fail_on == "load":
            raise RuntimeError("load failed")
        doc = RecordingDocument(self, self.page_sizes)
        self.documents.append(doc)
        return doc


@pytest.fixture
def recording_backend():
    return RecordingBackend()
