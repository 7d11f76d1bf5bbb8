"""
PDF page rendering with a known render scale.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import fitz  # PyMuPDF

from inkseal.config import AppConfig
from inkseal.core.annotations.models import ScaleInfo
from inkseal.core.errors import DocumentLoadError, InvalidPageReference

logger = logging.getLogger(__name__)


@dataclass
class RenderedPage:
    page_number: int
    pixmap: fitz.Pixmap
    scale_info: ScaleInfo


def compute_render_scale(original_width: float, original_height: float,
                         container_width: Optional[float],
                         config: Optional[AppConfig] = None) -> float:
    """
    Uniform scale that fits a page into the viewer.

    The page is fitted to the container width minus padding and to the
    maximum viewport height, and never enlarged beyond the maximum scale.
    """
    config = config or AppConfig()
    if not container_width or container_width <= 0:
        container_width = config.fallback_container_width

    scale_x = (container_width - config.viewport_padding) / original_width
    scale_y = config.viewport_max_height / original_height
    return min(scale_x, scale_y, config.max_render_scale)


class PageRenderer:
    """Handles PDF document loading and page rasterization."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0

    def load(self, pdf_bytes: bytes) -> int:
        """
        Open a PDF from memory.

        Args:
            pdf_bytes: Raw PDF file content

        Returns:
            Number of pages

        Raises:
            DocumentLoadError: If the bytes are not a readable PDF
        """
        self.close()
        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            logger.warning("Could not open PDF: %s", e)
            raise DocumentLoadError() from e

        if doc.page_count == 0:
            doc.close()
            raise DocumentLoadError("The PDF file has no pages.")

        self.doc = doc
        self.total_pages = doc.page_count
        logger.info("Loaded PDF with %d page(s)", self.total_pages)
        return self.total_pages

    def close(self) -> None:
        if self.doc:
            self.doc.close()
            self.doc = None
        self.total_pages = 0

    def _load_page(self, page_number: int) -> fitz.Page:
        if not self.doc or not (1 <= page_number <= self.total_pages):
            raise InvalidPageReference(page_number, self.total_pages)
        return self.doc.load_page(page_number - 1)

    def render(self, page_number: int, container_width: Optional[float] = None) -> RenderedPage:
        """
        Render a page fitted to the viewer.

        Args:
            page_number: 1-based page number
            container_width: Width of the viewer area in pixels

        Returns:
            The raster together with the scale it was rendered at
        """
        page = self._load_page(page_number)
        rect = page.rect
        scale = compute_render_scale(rect.width, rect.height, container_width, self.config)

        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        scale_info = ScaleInfo.for_page(rect.width, rect.height, scale)
        logger.debug("Rendered page %d at scale %.3f (%dx%d)",
                     page_number, scale, pix.width, pix.height)
        return RenderedPage(page_number, pix, scale_info)

    def render_thumbnail(self, page_number: int, scale: Optional[float] = None) -> fitz.Pixmap:
        if scale is None:
            scale = self.config.thumbnail_scale
        page = self._load_page(page_number)
        return page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
