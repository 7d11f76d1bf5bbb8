# core/export/export_worker.py

import copy

from PyQt5.QtCore import QThread, pyqtSignal

from inkseal.core.document import PDFExporter


class ExportWorker(QThread):
    """Worker thread for exporting signed PDFs without freezing the UI."""

    # Signals
    progress = pyqtSignal(str)  # status message
    completed = pyqtSignal(object)  # ExportResult

    def __init__(self, exporter: PDFExporter, pdf_bytes, annotations, scale_ready=True):
        super().__init__()
        self.exporter = exporter
        self.pdf_bytes = pdf_bytes
        # Work on copies so edits made while saving cannot leak into the file
        self.annotations = [copy.copy(ann) for ann in annotations]
        self.scale_ready = scale_ready

    def run(self):
        """Execute the export in a background thread."""
        self.progress.emit("Saving signed PDF...")
        result = self.exporter.export(self.pdf_bytes, self.annotations, self.scale_ready)
        self.completed.emit(result)
