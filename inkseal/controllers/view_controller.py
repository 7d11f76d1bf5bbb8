"""
Controller for page navigation, page selection and re-rendering.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from inkseal.core.document import RenderedPage
from inkseal.core.errors import InksealError
from inkseal.core.session import SigningSession

logger = logging.getLogger(__name__)


class ViewController(QObject):
    """Keeps the page on screen and its render scale in step with the session."""

    # Signals
    page_changed = pyqtSignal(int)  # 1-based page number
    page_rendered = pyqtSignal(object)  # RenderedPage
    selection_changed = pyqtSignal(list)  # selected page numbers
    notice = pyqtSignal(str, str)  # level, message

    def __init__(self):
        super().__init__()
        self.session: Optional[SigningSession] = None
        self.container_width: Optional[float] = None

    def set_session(self, session: Optional[SigningSession]) -> None:
        self.session = session
        if session is None:
            return
        self.page_changed.emit(session.current_page)
        self.selection_changed.emit(list(session.page_state.selected_pages))
        self.refresh()

    def refresh(self) -> Optional[RenderedPage]:
        """Render the current page and publish its new scale."""
        if self.session is None:
            return None
        try:
            rendered = self.session.render_current_page(self.container_width)
        except InksealError as e:
            logger.warning("Rendering page %d failed: %s", self.session.current_page, e.message)
            self.notice.emit("error", e.message)
            return None
        self.page_rendered.emit(rendered)
        return rendered

    def set_container_width(self, width: float) -> None:
        """Re-render when the viewer's width changes."""
        if width == self.container_width:
            return
        self.container_width = width
        self.refresh()

    def go_to_page(self, page: int) -> bool:
        """
        Make a page current.

        Args:
            page: 1-based page number

        Returns:
            True if the current page changed
        """
        if self.session is None or not self.session.page_state.set_current_page(page):
            return False
        self.page_changed.emit(page)
        self.refresh()
        return True

    def next_page(self) -> bool:
        if self.session is None:
            return False
        return self.go_to_page(self.session.current_page + 1)

    def previous_page(self) -> bool:
        if self.session is None:
            return False
        return self.go_to_page(self.session.current_page - 1)

    def toggle_page_selection(self, page: int) -> None:
        if self.session is None:
            return
        selected = self.session.page_state.toggle_page_selection(page)
        self.selection_changed.emit(list(selected))
