"""
Coordinate conversion between the screen and PDF pages.
"""
from .projector import (
    PdfRect,
    RenderRect,
    project_annotation,
    to_page_rect,
    to_pdf_space,
    to_render_space,
)

__all__ = [
    'PdfRect',
    'RenderRect',
    'project_annotation',
    'to_page_rect',
    'to_pdf_space',
    'to_render_space',
]
