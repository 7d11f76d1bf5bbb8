from typing import List

from PyQt5.QtCore import QSize, Qt, pyqtSignal
from PyQt5.QtGui import QIcon, QPixmap
from PyQt5.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from inkseal.core.session import SigningSession
from .page_canvas import pixmap_to_qimage


class PageSidebar(QWidget):
    """
    Thumbnail strip of all pages.

    Clicking a thumbnail opens the page; its check box adds the page to
    the selection used by "copy to selected pages".
    """

    # Signals
    page_activated = pyqtSignal(int)  # 1-based page number
    page_toggled = pyqtSignal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedWidth(170)
        self._updating = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(4)

        title = QLabel("Pages")
        title.setStyleSheet("font-weight: bold;")
        layout.addWidget(title)

        self.list_widget = QListWidget()
        self.list_widget.setIconSize(QSize(120, 160))
        self.list_widget.itemClicked.connect(self._on_item_clicked)
        self.list_widget.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self.list_widget)

    def load_pages(self, session: SigningSession) -> None:
        """Build one checkable thumbnail per page."""
        self._updating = True
        self.list_widget.clear()
        for page in range(1, session.total_pages + 1):
            pixmap = session.renderer.render_thumbnail(page)
            icon = QIcon(QPixmap.fromImage(pixmap_to_qimage(pixmap)))
            item = QListWidgetItem(icon, f"Page {page}")
            item.setData(Qt.UserRole, page)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Unchecked)
            self.list_widget.addItem(item)
        self._updating = False

    def clear(self) -> None:
        self.list_widget.clear()

    def set_current_page(self, page: int) -> None:
        self._updating = True
        self.list_widget.setCurrentRow(page - 1)
        self._updating = False

    def set_selected_pages(self, pages: List[int]) -> None:
        self._updating = True
        for row in range(self.list_widget.count()):
            item = self.list_widget.item(row)
            checked = item.data(Qt.UserRole) in pages
            item.setCheckState(Qt.Checked if checked else Qt.Unchecked)
        self._updating = False

    def _on_item_clicked(self, item):
        self.page_activated.emit(item.data(Qt.UserRole))

    def _on_item_changed(self, item):
        if not self._updating:
            self.page_toggled.emit(item.data(Qt.UserRole))
