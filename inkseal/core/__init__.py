"""
Core business logic for Inkseal PDF.
"""
from .annotations import Annotation, AnnotationStore, ScaleInfo, SignatureImage
from .document import PageRenderState, PageRenderer, PDFExporter
from .session import SigningSession

__all__ = [
    "Annotation",
    "AnnotationStore",
    "ScaleInfo",
    "SignatureImage",
    "PageRenderState",
    "PageRenderer",
    "PDFExporter",
    "SigningSession",
]
