"""
Main application window for Inkseal PDF.
"""
import logging
import os
from typing import Optional

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QSpacerItem,
    QVBoxLayout,
    QWidget,
)

from inkseal.config import AppConfig
from inkseal.controllers import (
    AnnotationController,
    ExportController,
    PointerInteractionController,
    UserInputHandler,
    ViewController,
)
from inkseal.core.errors import InksealError
from inkseal.core.images import UploadedImage
from inkseal.core.session import SigningSession
from inkseal.ui.dialogs import SignaturePadDialog, StampDialog
from inkseal.ui.style import apply_style
from inkseal.ui.widgets import PageCanvas, PageSidebar
from inkseal.utils.warning_manager import WarningType, warning_manager

logger = logging.getLogger(__name__)

NOTICE_TIMEOUT_MS = 5000


class MainWindow(QMainWindow):
    """Signing desk: page view, thumbnails and the signature tools."""

    def __init__(self, file_path: Optional[str] = None, config: Optional[AppConfig] = None):
        super().__init__()
        self.config = config or AppConfig()

        # Initialize core components
        self._init_core_components()

        # Initialize controllers
        self._init_controllers()

        # Setup UI
        self._setup_window()
        self._setup_ui()
        self._setup_connections()
        apply_style(self)
        self._update_actions()

        # Load file if provided
        if file_path and os.path.exists(file_path):
            QTimer.singleShot(0, lambda: self.load_pdf(file_path))

    def _init_core_components(self):
        """Initialize per-document state."""
        self.session: Optional[SigningSession] = None

        # Re-render once resizing has settled
        self._resize_timer = QTimer()
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(150)
        self._resize_timer.timeout.connect(self._on_resize_settled)

    def _init_controllers(self):
        """Initialize application controllers."""
        self.pointer_controller = PointerInteractionController(config=self.config)
        self.annotation_controller = AnnotationController(self.pointer_controller)
        self.view_controller = ViewController()
        self.export_controller = ExportController()
        self.input_handler = UserInputHandler(self, self.pointer_controller)

    def _setup_window(self):
        self.setWindowTitle("Inkseal PDF")
        self.setMinimumSize(900, 650)

    def _setup_ui(self):
        """Setup the user interface."""
        self._create_toolbar()

        self.sidebar = PageSidebar()

        self.page_canvas = PageCanvas(self.pointer_controller)
        self.page_canvas.input_handler = self.input_handler

        canvas_holder = QWidget()
        holder_layout = QVBoxLayout(canvas_holder)
        holder_layout.setContentsMargins(20, 20, 20, 20)
        holder_layout.addWidget(self.page_canvas, alignment=Qt.AlignHCenter | Qt.AlignTop)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(canvas_holder)

        content_layout = QHBoxLayout()
        content_layout.setSpacing(0)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.addWidget(self.sidebar)
        content_layout.addWidget(self.scroll_area)

        content_widget = QWidget()
        content_widget.setLayout(content_layout)

        main_layout = QVBoxLayout()
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.top_frame)
        main_layout.addWidget(content_widget)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        self.info_label = QLabel()
        self.statusBar().addPermanentWidget(self.info_label)

    def _create_toolbar(self):
        """Create the top toolbar."""
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        # File
        self._add_toolbar_button("Open PDF", "Open PDF (Ctrl+O)", self.open_pdf)
        self.file_name_label = QLabel("No PDF Loaded", self.top_frame)
        self.file_name_label.setStyleSheet("font-weight: bold; color: #8899AA;")
        self.top_layout.addWidget(self.file_name_label)

        self._add_toolbar_spacer(40, expanding=True)

        # Tools
        self.draw_button = self._add_toolbar_button("Draw", "Draw a signature", self.show_signature_pad)
        self.stamp_button = self._add_toolbar_button("Stamp", "Create a name stamp", self.show_stamp_dialog)
        self.upload_button = self._add_toolbar_button("Image", "Upload a signature image",
                                                      self.upload_image)
        self._add_toolbar_separator()
        self.copy_button = self._add_toolbar_button(
            "Copy to Selected Pages", "Copy this page's signatures to the checked pages",
            self.annotation_controller.copy_to_selected_pages)
        self._add_toolbar_separator()
        self.undo_button = self._add_toolbar_button("Undo", "Undo (Ctrl+Z)", self.undo)
        self.redo_button = self._add_toolbar_button("Redo", "Redo (Ctrl+Y)", self.redo)

        self._add_toolbar_spacer(40, expanding=True)

        # Page navigation
        self.prev_button = self._add_toolbar_button("<", "Previous page",
                                                    self.view_controller.previous_page)
        self.page_label = QLabel("0 / 0", self.top_frame)
        self.page_label.setAlignment(Qt.AlignCenter)
        self.page_label.setFixedWidth(70)
        self.top_layout.addWidget(self.page_label)
        self.next_button = self._add_toolbar_button(">", "Next page", self.view_controller.next_page)

        self._add_toolbar_separator()

        self.new_button = self._add_toolbar_button("New File", "Start over with another PDF",
                                                   self.new_file)
        self.save_button = self._add_toolbar_button("Save PDF", "Save signed PDF (Ctrl+S)",
                                                    self.save_signed_pdf)
        self.save_button.setObjectName("PrimaryButton")

    def _add_toolbar_button(self, text: str, tooltip: str, callback) -> QPushButton:
        btn = QPushButton(text, self.top_frame)
        btn.setToolTip(tooltip)
        btn.setFocusPolicy(Qt.NoFocus)
        btn.clicked.connect(lambda _checked=False: callback())
        self.top_layout.addWidget(btn)
        return btn

    def _add_toolbar_separator(self):
        separator = QFrame()
        separator.setFrameShape(QFrame.VLine)
        separator.setFrameShadow(QFrame.Sunken)
        separator.setStyleSheet("background-color: #d0d0d0; max-width: 1px;")
        self.top_layout.addWidget(separator)

    def _add_toolbar_spacer(self, width: int, expanding: bool = False):
        policy = QSizePolicy.Expanding if expanding else QSizePolicy.Fixed
        spacer = QSpacerItem(width, 20, policy, QSizePolicy.Minimum)
        self.top_layout.addSpacerItem(spacer)

    def _setup_connections(self):
        """Setup signal/slot connections."""
        self.view_controller.page_changed.connect(self._on_page_changed)
        self.view_controller.page_rendered.connect(self.page_canvas.set_page)
        self.view_controller.selection_changed.connect(self.sidebar.set_selected_pages)
        self.view_controller.notice.connect(self.show_notice)

        self.sidebar.page_activated.connect(self.view_controller.go_to_page)
        self.sidebar.page_toggled.connect(self.view_controller.toggle_page_selection)

        self.annotation_controller.annotations_changed.connect(self._on_annotations_changed)
        self.annotation_controller.notice.connect(self.show_notice)

        self.export_controller.saving_changed.connect(self._on_saving_changed)
        self.export_controller.exported.connect(self._write_signed_pdf)
        self.export_controller.notice.connect(self.show_notice)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def open_pdf(self):
        if not self._confirm_discard():
            return
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    def load_pdf(self, file_path: str) -> bool:
        try:
            session = SigningSession.open(file_path, self.config)
        except InksealError as e:
            self.show_notice("error", e.message)
            return False

        self._close_session()
        self.session = session
        self.file_name_label.setText(session.file_name)
        self.setWindowTitle(f"Inkseal PDF - {session.file_name}")

        self.view_controller.container_width = self.scroll_area.viewport().width()
        self.page_canvas.set_session(session)
        self.annotation_controller.set_session(session)
        self.sidebar.load_pages(session)
        self.view_controller.set_session(session)
        self._update_actions()
        return True

    def new_file(self):
        if self.session is None or not self._confirm_discard():
            return
        self._close_session()
        self.file_name_label.setText("No PDF Loaded")
        self.setWindowTitle("Inkseal PDF")
        self.page_label.setText("0 / 0")
        self._update_actions()

    def _close_session(self):
        if self.session is None:
            return
        self.session.close()
        self.session = None
        self.annotation_controller.set_session(None)
        self.view_controller.set_session(None)
        self.page_canvas.set_session(None)
        self.sidebar.clear()

    def _confirm_discard(self) -> bool:
        if not self.annotation_controller.has_annotations():
            return True
        return warning_manager.confirm(
            self, WarningType.DISCARD_SIGNATURES, "Discard Signatures",
            "The signatures placed on this PDF have not been saved. Discard them?")

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def show_signature_pad(self):
        dialog = SignaturePadDialog(self)
        if dialog.exec_() == SignaturePadDialog.Accepted:
            self.annotation_controller.add_signature(dialog.drawing())

    def show_stamp_dialog(self):
        dialog = StampDialog(self)
        if dialog.exec_() == StampDialog.Accepted:
            self.annotation_controller.add_signature(dialog.stamp())

    def upload_image(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Upload Signature Image", "", "Images (*.png *.jpg *.jpeg *.gif *.bmp)")
        if not file_path:
            return
        try:
            source = UploadedImage.from_file(file_path, self.config.upload_max_bytes,
                                             self.config.upload_max_edge)
        except OSError:
            logger.warning("Could not read %s", file_path, exc_info=True)
            self.show_notice("error", "The image could not be read.")
            return
        self.annotation_controller.add_signature(source)

    def delete_selected_signature(self):
        confirmed = warning_manager.confirm(
            self, WarningType.DELETE_SIGNATURE, "Delete Signature",
            "Delete the selected signature?")
        if confirmed:
            self.annotation_controller.delete_selected()

    def undo(self):
        self.annotation_controller.undo()

    def redo(self):
        self.annotation_controller.redo()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save_signed_pdf(self):
        self.export_controller.start_export(self.session)

    def _write_signed_pdf(self, data: bytes, suggested_name: str):
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Signed PDF", suggested_name, "PDF Files (*.pdf)")
        if not file_path:
            return
        try:
            with open(file_path, 'wb') as f:
                f.write(data)
        except OSError:
            logger.exception("Writing %s failed", file_path)
            self.show_notice("error", "The signed PDF could not be written.")
            return
        logger.info("Wrote signed PDF to %s", file_path)
        self.show_notice("success", f"Saved {os.path.basename(file_path)}.")

    def _on_saving_changed(self, saving: bool):
        self.save_button.setEnabled(not saving and self.session is not None)
        self.save_button.setText("Saving..." if saving else "Save PDF")

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def show_notice(self, level: str, message: str):
        self.statusBar().showMessage(message, NOTICE_TIMEOUT_MS)
        if level == "error":
            QMessageBox.warning(self, "Inkseal PDF", message)

    def _on_page_changed(self, page: int):
        self.pointer_controller.select(None)
        self.sidebar.set_current_page(page)
        self._update_actions()

    def _on_annotations_changed(self):
        self.page_canvas.update()
        self._update_actions()

    def _update_actions(self):
        has_session = self.session is not None
        for button in (self.draw_button, self.stamp_button, self.upload_button,
                       self.copy_button, self.new_button):
            button.setEnabled(has_session)
        self.save_button.setEnabled(has_session and not self.export_controller.is_saving)

        if not has_session:
            for button in (self.undo_button, self.redo_button, self.prev_button, self.next_button):
                button.setEnabled(False)
            self.info_label.setText("")
            return

        store = self.session.store
        self.undo_button.setEnabled(store.can_undo())
        self.redo_button.setEnabled(store.can_redo())
        self.prev_button.setEnabled(self.session.current_page > 1)
        self.next_button.setEnabled(self.session.current_page < self.session.total_pages)
        self.page_label.setText(f"{self.session.current_page} / {self.session.total_pages}")
        self.info_label.setText(
            f"{len(store)} signature(s) | {len(self.session.current_annotations())} on this page")

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def keyPressEvent(self, event):
        self.input_handler.handle_key_press(event)
        if not event.isAccepted():
            super().keyPressEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._resize_timer.start()

    def _on_resize_settled(self):
        self.view_controller.set_container_width(self.scroll_area.viewport().width())

    def closeEvent(self, event):
        if not self._confirm_discard():
            event.ignore()
            return
        worker = self.export_controller.export_worker
        if worker is not None:
            worker.wait()
        self._close_session()
        event.accept()
