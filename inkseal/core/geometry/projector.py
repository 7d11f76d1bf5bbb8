"""
Conversion between render space and PDF user space.

Render space is the on-screen raster: origin top-left, Y down, pixels.
PDF user space is origin bottom-left, Y up, points. The annotation's own
captured scale links the two.
"""
from typing import NamedTuple


class PdfRect(NamedTuple):
    """Rectangle in PDF user space (bottom-left origin)."""
    x: float
    y: float
    width: float
    height: float


class RenderRect(NamedTuple):
    """Rectangle in render space (top-left origin)."""
    x: float
    y: float
    width: float
    height: float


def to_pdf_space(x: float, y: float, width: float, height: float,
                 scale: float, page_height: float) -> PdfRect:
    """
    Project render-space geometry onto a PDF page.

    Args:
        x, y: Top-left corner in render-space pixels
        width, height: Size in render-space pixels
        scale: Render pixels per PDF unit captured with the geometry
        page_height: Height of the target page in PDF units

    Returns:
        The rectangle in PDF user space
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    pdf_width = width / scale
    pdf_height = height / scale
    pdf_x = x / scale
    pdf_y = page_height - (y / scale) - pdf_height
    return PdfRect(pdf_x, pdf_y, pdf_width, pdf_height)


def project_annotation(annotation, page_height: float) -> PdfRect:
    """Project an annotation using the scale it was created with."""
    return to_pdf_space(annotation.x, annotation.y, annotation.width,
                        annotation.height, annotation.scale, page_height)


def to_render_space(rect: PdfRect, scale: float, page_height: float) -> RenderRect:
    """Inverse of :func:`to_pdf_space`."""
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    top = page_height - rect.y - rect.height
    return RenderRect(rect.x * scale, top * scale, rect.width * scale, rect.height * scale)


def to_page_rect(rect: PdfRect, page_height: float):
    """
    Flip a bottom-left rectangle into top-left page coordinates.

    Returns:
        Tuple of (x0, y0, x1, y1) with y0 measured from the top edge
    """
    y0 = page_height - rect.y - rect.height
    return (rect.x, y0, rect.x + rect.width, y0 + rect.height)
