from typing import Dict, Optional

import fitz  # PyMuPDF
from PyQt5.QtCore import QEvent, QPointF, QRectF, Qt
from PyQt5.QtGui import QColor, QCursor, QImage, QPainter, QPen, QPixmap
from PyQt5.QtWidgets import QWidget

from inkseal.controllers import GestureState, HitPart, PointerInteractionController
from inkseal.core.annotations import SignatureImage
from inkseal.core.document import RenderedPage
from inkseal.core.session import SigningSession

SELECTION_COLOR = QColor(52, 152, 219)
DELETE_COLOR = QColor(231, 76, 60)


def pixmap_to_qimage(pix: fitz.Pixmap) -> QImage:
    """Wrap a PyMuPDF RGB pixmap in a QImage that owns its pixels."""
    img = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
    return img.copy()


class PageCanvas(QWidget):
    """
    Shows the current page with its signatures laid on top.

    The widget is exactly the size of the rendered page, so widget
    coordinates are render-space coordinates.
    """

    def __init__(self, pointer: PointerInteractionController, parent=None):
        super().__init__(parent)
        self.pointer = pointer
        self.input_handler = None  # set by the main window
        self.session: Optional[SigningSession] = None
        self.page_pixmap: Optional[QPixmap] = None
        self._image_cache: Dict[SignatureImage, QImage] = {}

        self.setMouseTracking(True)
        self.setAttribute(Qt.WA_AcceptTouchEvents)
        self.setFocusPolicy(Qt.StrongFocus)

        self.pointer.selection_changed.connect(lambda _id: self.update())
        self.pointer.annotation_changed.connect(lambda _id: self.update())
        self.pointer.annotation_removed.connect(lambda _id: self.update())

    def set_session(self, session: Optional[SigningSession]) -> None:
        self.session = session
        self.page_pixmap = None
        self._image_cache.clear()
        self.update()

    def set_page(self, rendered: RenderedPage) -> None:
        """Show a freshly rendered page."""
        self.page_pixmap = QPixmap.fromImage(pixmap_to_qimage(rendered.pixmap))
        self.setFixedSize(self.page_pixmap.width(), self.page_pixmap.height())
        self.update()

    def _qimage(self, image: SignatureImage) -> QImage:
        cached = self._image_cache.get(image)
        if cached is None:
            cached = QImage.fromData(image.data)
            self._image_cache[image] = cached
        return cached

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)

        if self.page_pixmap is None:
            painter.fillRect(self.rect(), QColor("#f4f4f4"))
            painter.end()
            return

        painter.drawPixmap(0, 0, self.page_pixmap)
        if self.session is not None:
            for ann in self.session.current_annotations():
                target = QRectF(ann.x, ann.y, ann.width, ann.height)
                painter.drawImage(target, self._qimage(ann.image))
            self._render_selection(painter)
        painter.end()

    def _render_selection(self, painter):
        selected = self.pointer.selected_annotation
        if selected is None or selected.page != self.session.current_page:
            return

        pen = QPen(SELECTION_COLOR, 2, Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(QRectF(selected.x, selected.y, selected.width, selected.height))

        size = self.pointer.config.handle_size
        half = size / 2
        painter.setPen(QPen(Qt.white, 1))

        # Resize handle, bottom-right
        painter.setBrush(SELECTION_COLOR)
        painter.drawRect(QRectF(selected.right - half, selected.bottom - half, size, size))

        # Delete handle, top-right
        painter.setBrush(DELETE_COLOR)
        painter.drawEllipse(QPointF(selected.right, selected.y), half, half)
        painter.setPen(QPen(Qt.white, 2))
        inset = half / 2
        painter.drawLine(QPointF(selected.right - inset, selected.y - inset),
                         QPointF(selected.right + inset, selected.y + inset))
        painter.drawLine(QPointF(selected.right - inset, selected.y + inset),
                         QPointF(selected.right + inset, selected.y - inset))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _update_cursor(self, pos):
        if self.pointer.state == GestureState.RESIZING:
            return
        if self.pointer.state == GestureState.DRAGGING:
            self.setCursor(QCursor(Qt.ClosedHandCursor))
            return

        hit = self.pointer.hit_test(pos.x(), pos.y())
        if hit is None:
            self.setCursor(QCursor(Qt.ArrowCursor))
        elif hit[1] == HitPart.RESIZE_HANDLE:
            self.setCursor(QCursor(Qt.SizeFDiagCursor))
        elif hit[1] == HitPart.DELETE_HANDLE:
            self.setCursor(QCursor(Qt.PointingHandCursor))
        else:
            self.setCursor(QCursor(Qt.OpenHandCursor))

    def mousePressEvent(self, event):
        self.setFocus()
        if self.input_handler:
            self.input_handler.handle_mouse_press(event)
        self._update_cursor(event.localPos())

    def mouseMoveEvent(self, event):
        if self.input_handler:
            self.input_handler.handle_mouse_move(event)
        self._update_cursor(event.localPos())

    def mouseReleaseEvent(self, event):
        if self.input_handler:
            self.input_handler.handle_mouse_release(event)
        self._update_cursor(event.localPos())

    def leaveEvent(self, event):
        if self.input_handler:
            self.input_handler.handle_leave()
        super().leaveEvent(event)

    def event(self, event):
        if event.type() in (QEvent.TouchBegin, QEvent.TouchUpdate,
                            QEvent.TouchEnd, QEvent.TouchCancel):
            if self.input_handler and self.input_handler.handle_touch_event(event):
                self.update()
                return True
        return super().event(event)
