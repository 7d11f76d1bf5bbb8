"""
A signing session: one loaded PDF and everything placed on it.
"""
import logging
import os
from typing import List, Optional

from inkseal.config import AppConfig
from inkseal.core.annotations import Annotation, AnnotationStore, SignatureImage
from inkseal.core.document import PageRenderer, PageRenderState, RenderedPage
from inkseal.core.errors import DocumentLoadError, InvalidPageReference, NoActiveDocument

logger = logging.getLogger(__name__)


class SigningSession:
    """
    Owns the source bytes, the renderer, the view state and the annotation
    store of one document. Created when a PDF is opened and discarded when
    another one is opened or the user starts over.
    """

    def __init__(self, file_name: str, pdf_bytes: bytes,
                 config: Optional[AppConfig] = None,
                 renderer: Optional[PageRenderer] = None):
        self.config = config or AppConfig()
        self.file_name = file_name
        self.pdf_bytes = pdf_bytes
        self.renderer = renderer or PageRenderer(self.config)
        self.page_state = PageRenderState()
        self.store = AnnotationStore(self.config)

        total_pages = self.renderer.load(pdf_bytes)
        self.page_state.reset(total_pages)

    @classmethod
    def open(cls, path: str, config: Optional[AppConfig] = None) -> "SigningSession":
        """
        Load a PDF from disk.

        Raises:
            DocumentLoadError: If the file cannot be read or is not a PDF
        """
        if not path.lower().endswith(".pdf"):
            raise DocumentLoadError("Only PDF files can be opened.")
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise DocumentLoadError(f"Could not read {os.path.basename(path)}.") from e
        logger.info("Opening %s (%d bytes)", path, len(data))
        return cls(os.path.basename(path), data, config)

    def close(self) -> None:
        self.renderer.close()
        self.store.clear()

    @property
    def total_pages(self) -> int:
        return self.page_state.total_pages

    @property
    def current_page(self) -> int:
        return self.page_state.current_page

    def render_current_page(self, container_width: Optional[float] = None) -> RenderedPage:
        """Render the current page and make its scale the active one."""
        rendered = self.renderer.render(self.page_state.current_page, container_width)
        self.page_state.update_scale(rendered.scale_info)
        return rendered

    def add_image(self, image: SignatureImage, page: Optional[int] = None) -> Annotation:
        """
        Place an image on a page (the current one by default) using the
        scale of the page on screen.
        """
        if not self.page_state.has_scale:
            raise NoActiveDocument()
        if page is None:
            page = self.page_state.current_page
        if not self.page_state.is_valid_page(page):
            raise InvalidPageReference(page, self.total_pages)
        return self.store.add(page, image, image.width, image.height,
                              self.page_state.scale_info)

    def copy_to_selected_pages(self) -> int:
        """
        Copy the current page's annotations to every other selected page.

        Returns:
            Number of annotations created
        """
        targets: List[int] = []
        for page in self.page_state.selected_pages:
            if self.page_state.is_valid_page(page):
                targets.append(page)
            else:
                logger.warning("Ignoring copy target: %s",
                               InvalidPageReference(page, self.total_pages).message)
        return self.store.duplicate_to_pages(self.page_state.current_page, targets)

    def current_annotations(self) -> List[Annotation]:
        return self.store.by_page(self.page_state.current_page)
