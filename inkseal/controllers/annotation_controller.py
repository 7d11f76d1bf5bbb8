"""
Controller for placing, removing and propagating signatures.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from inkseal.core.annotations import Annotation
from inkseal.core.errors import InksealError, NoActiveDocument
from inkseal.core.images import ImageSource, render_source
from inkseal.core.session import SigningSession
from .pointer_controller import PointerInteractionController

logger = logging.getLogger(__name__)


class AnnotationController(QObject):
    """Turns tool results and toolbar actions into store changes."""

    # Signals
    annotations_changed = pyqtSignal()
    notice = pyqtSignal(str, str)  # level, message

    def __init__(self, pointer: PointerInteractionController):
        super().__init__()
        self.pointer = pointer
        self.session: Optional[SigningSession] = None

        self.pointer.annotation_changed.connect(lambda _id: self.annotations_changed.emit())
        self.pointer.annotation_removed.connect(lambda _id: self.annotations_changed.emit())

    def set_session(self, session: Optional[SigningSession]) -> None:
        self.session = session
        if session is None:
            self.pointer.bind(None, None)
        else:
            self.pointer.bind(session.store, session.page_state)
        self.annotations_changed.emit()

    def _require_session(self) -> SigningSession:
        if self.session is None:
            raise NoActiveDocument()
        return self.session

    def add_signature(self, source: ImageSource) -> Optional[Annotation]:
        """
        Render a tool result and place it on the current page.

        Args:
            source: Freehand drawing, generated stamp or uploaded image

        Returns:
            The new annotation, or None if it could not be placed
        """
        try:
            session = self._require_session()
            image = render_source(source)
            annotation = session.add_image(image)
        except InksealError as e:
            logger.info("Signature not added: %s", e.message)
            self.notice.emit("error", e.message)
            return None

        self.annotations_changed.emit()
        self.notice.emit("success", "Signature added. Drag it to adjust its position.")
        return annotation

    def delete_selected(self) -> bool:
        selected_id = self.pointer.selected_id
        if selected_id is None:
            return False
        return self.pointer.delete(selected_id)

    def copy_to_selected_pages(self) -> int:
        """
        Copy the current page's signatures onto the other selected pages.

        Returns:
            Number of annotations created
        """
        if self.session is None:
            self.notice.emit("error", NoActiveDocument().message)
            return 0

        page_state = self.session.page_state
        if len(page_state.selected_pages) < 2:
            self.notice.emit("warning", "Select two or more pages first.")
            return 0
        if not self.session.current_annotations():
            self.notice.emit("warning", "There are no signatures on the current page.")
            return 0

        created = self.session.copy_to_selected_pages()
        pages = len({p for p in page_state.selected_pages
                     if p != page_state.current_page and page_state.is_valid_page(p)})
        if created:
            self.annotations_changed.emit()
            self.notice.emit("success", f"Signatures copied to {pages} page(s).")
        else:
            self.notice.emit("warning", "Select a page other than the current one.")
        return created

    def undo(self) -> bool:
        self.pointer.end_gesture()
        if self.session is None or not self.session.store.undo():
            return False
        self.pointer.validate_selection()
        self.annotations_changed.emit()
        return True

    def redo(self) -> bool:
        self.pointer.end_gesture()
        if self.session is None or not self.session.store.redo():
            return False
        self.pointer.validate_selection()
        self.annotations_changed.emit()
        return True

    def has_annotations(self) -> bool:
        return self.session is not None and len(self.session.store) > 0
