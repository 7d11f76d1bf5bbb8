"""
Flattens placed annotations into a new PDF.
"""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from inkseal.core.annotations.models import Annotation, SignatureImage
from inkseal.core.errors import InvalidPageReference
from inkseal.core.geometry import project_annotation
from .pdf_backend import DocumentHandle, ImageHandle, PdfBackend, PyMuPDFBackend

logger = logging.getLogger(__name__)

EXPORT_FAILED_MESSAGE = "Saving the signed PDF failed."


class ExportState(Enum):
    IDLE = "idle"
    SAVING = "saving"
    DONE = "done"
    FAILED = "failed"


class ExportStatus(Enum):
    DONE = "done"
    FAILED = "failed"
    WARNING = "warning"  # precondition not met, nothing attempted


@dataclass
class ExportResult:
    status: ExportStatus
    message: str
    data: Optional[bytes] = None
    drawn: int = 0
    skipped: int = 0

    @property
    def ok(self) -> bool:
        return self.status == ExportStatus.DONE


def signed_filename(source_name: str) -> str:
    """``contract.pdf`` -> ``contract_signed.pdf``."""
    base = os.path.basename(source_name) or "document.pdf"
    stem, ext = os.path.splitext(base)
    return f"{stem}_signed{ext or '.pdf'}"


class PDFExporter:
    """
    Export state machine: IDLE -> SAVING -> DONE | FAILED.

    Export never touches the annotations it is given; a failed export
    discards its working document and can simply be retried.
    """

    def __init__(self, backend: Optional[PdfBackend] = None):
        self.backend = backend or PyMuPDFBackend()
        self.state = ExportState.IDLE

    @property
    def is_saving(self) -> bool:
        return self.state == ExportState.SAVING

    def export(self, pdf_bytes: Optional[bytes], annotations: Sequence[Annotation],
               scale_ready: bool = True) -> ExportResult:
        """
        Draw every annotation onto a copy of the document.

        Args:
            pdf_bytes: Source document
            annotations: Annotations in insertion order
            scale_ready: Whether a page has been rendered at least once

        Returns:
            The outcome; ``data`` holds the new PDF when it succeeded
        """
        if self.is_saving:
            return ExportResult(ExportStatus.WARNING, "A save is already in progress.")
        if not pdf_bytes or not annotations:
            return ExportResult(ExportStatus.WARNING, "There are no signatures to save.")
        if not scale_ready:
            return ExportResult(ExportStatus.WARNING,
                                "The PDF is still loading. Please try again in a moment.")

        self.state = ExportState.SAVING
        doc: Optional[DocumentHandle] = None
        try:
            doc = self.backend.load(pdf_bytes)
            data, drawn, skipped = self._draw_annotations(doc, list(annotations))
        except Exception:
            logger.exception("Failed to export signed PDF")
            self.state = ExportState.FAILED
            return ExportResult(ExportStatus.FAILED, EXPORT_FAILED_MESSAGE)
        finally:
            if doc is not None:
                try:
                    doc.close()
                except Exception:
                    logger.debug("Closing the working document failed", exc_info=True)

        self.state = ExportState.DONE
        logger.info("Exported %d annotation(s), skipped %d", drawn, skipped)
        return ExportResult(ExportStatus.DONE, "The signed PDF was saved.",
                            data=data, drawn=drawn, skipped=skipped)

    def _draw_annotations(self, doc: DocumentHandle, annotations: List[Annotation]):
        pages = doc.pages()
        embedded: Dict[SignatureImage, ImageHandle] = {}
        drawn = 0
        skipped = 0

        for ann in annotations:
            if not (1 <= ann.page <= len(pages)):
                logger.warning("Skipping annotation %s: %s", ann.id,
                               InvalidPageReference(ann.page, len(pages)).message)
                skipped += 1
                continue

            image = embedded.get(ann.image)
            if image is None:
                image = doc.embed_image(ann.image.data, ann.image.image_format)
                embedded[ann.image] = image

            page_height = pages[ann.page - 1].height
            rect = project_annotation(ann, page_height)
            doc.draw_image(ann.page - 1, image, rect)
            drawn += 1

        return doc.serialize(), drawn, skipped
