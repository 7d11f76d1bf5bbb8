"""
Controller that runs the export in the background and reports the result.
"""
import logging
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from inkseal.core.document import ExportResult, ExportStatus, PDFExporter, signed_filename
from inkseal.core.errors import NoActiveDocument
from inkseal.core.export import ExportWorker
from inkseal.core.session import SigningSession

logger = logging.getLogger(__name__)

NOTICE_LEVELS = {
    ExportStatus.DONE: "success",
    ExportStatus.WARNING: "warning",
    ExportStatus.FAILED: "error",
}


class ExportController(QObject):
    """Starts one export at a time and hands the signed bytes back to the UI."""

    # Signals
    saving_changed = pyqtSignal(bool)
    exported = pyqtSignal(bytes, str)  # signed PDF, suggested file name
    notice = pyqtSignal(str, str)  # level, message

    def __init__(self, exporter: Optional[PDFExporter] = None, use_thread: bool = True):
        super().__init__()
        self.exporter = exporter or PDFExporter()
        self.use_thread = use_thread
        self.export_worker: Optional[ExportWorker] = None
        self._file_name = ""

    @property
    def is_saving(self) -> bool:
        return self.export_worker is not None or self.exporter.is_saving

    def start_export(self, session: Optional[SigningSession]) -> bool:
        """
        Save the session's annotations into a copy of its PDF.

        Returns:
            True if an export was started
        """
        if session is None:
            self.notice.emit("error", NoActiveDocument().message)
            return False
        if self.is_saving:
            self.notice.emit("warning", "A save is already in progress.")
            return False

        self._file_name = session.file_name
        self.export_worker = ExportWorker(
            self.exporter,
            session.pdf_bytes,
            session.store.annotations,
            session.page_state.has_scale,
        )
        self.export_worker.progress.connect(self._on_export_progress)
        self.export_worker.completed.connect(self._on_export_completed)
        self.saving_changed.emit(True)

        if self.use_thread:
            self.export_worker.finished.connect(self.export_worker.deleteLater)
            self.export_worker.start()
        else:
            self.export_worker.run()
        return True

    def _on_export_progress(self, message: str) -> None:
        self.notice.emit("info", message)

    def _on_export_completed(self, result: ExportResult) -> None:
        self.export_worker = None
        self.saving_changed.emit(False)
        logger.info("Export finished: %s (%d drawn, %d skipped)",
                    result.status.value, result.drawn, result.skipped)
        self.notice.emit(NOTICE_LEVELS[result.status], result.message)
        if result.ok:
            self.exported.emit(result.data, signed_filename(self._file_name))
