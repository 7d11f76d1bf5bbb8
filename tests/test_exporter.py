"""
Tests for flattening annotations into a signed PDF.
"""
import fitz  # PyMuPDF
import pytest

from inkseal.core.annotations import SignatureImage
from inkseal.core.document import ExportState, ExportStatus, PDFExporter, signed_filename
from inkseal.core.document.pdf_exporter import EXPORT_FAILED_MESSAGE
from inkseal.core.geometry import PdfRect

from conftest import RecordingBackend, make_annotation, make_jpeg, make_pdf, make_png

PDF_BYTES = b"%PDF-1.7 placeholder"


class TestPreconditions:

    def test_no_annotations_never_loads(self, recording_backend):
        """Nothing to save returns a warning without touching the backend."""
        exporter = PDFExporter(recording_backend)
        result = exporter.export(PDF_BYTES, [])

        assert result.status == ExportStatus.WARNING
        assert result.data is None
        assert recording_backend.load_calls == 0
        assert exporter.state == ExportState.IDLE

    def test_missing_document(self, recording_backend):
        exporter = PDFExporter(recording_backend)
        result = exporter.export(None, [make_annotation()])

        assert result.status == ExportStatus.WARNING
        assert recording_backend.load_calls == 0

    def test_scale_not_ready(self, recording_backend):
        exporter = PDFExporter(recording_backend)
        result = exporter.export(PDF_BYTES, [make_annotation()], scale_ready=False)

        assert result.status == ExportStatus.WARNING
        assert "loading" in result.message
        assert recording_backend.load_calls == 0

    def test_refuses_reentry(self, recording_backend):
        exporter = PDFExporter(recording_backend)
        exporter.state = ExportState.SAVING

        result = exporter.export(PDF_BYTES, [make_annotation()])

        assert result.status == ExportStatus.WARNING
        assert "in progress" in result.message
        assert recording_backend.load_calls == 0


class TestDrawing:

    def test_single_annotation_on_first_page(self, recording_backend):
        """(100, 100, 150, 50) at scale 1 is drawn at (100, 642) on page 0 only."""
        exporter = PDFExporter(recording_backend)
        result = exporter.export(PDF_BYTES, [make_annotation()])

        assert result.status == ExportStatus.DONE
        assert result.data == b"%PDF-recorded"
        assert exporter.state == ExportState.DONE
        assert len(recording_backend.draws) == 1

        page_index, _image, rect = recording_backend.draws[0]
        assert page_index == 0
        assert rect == PdfRect(100, 642, 150, 50)
        assert recording_backend.documents[0].closed

    def test_insertion_order_is_draw_order(self, recording_backend):
        first = make_annotation(page=2)
        second = make_annotation(page=1, x=10)
        PDFExporter(recording_backend).export(PDF_BYTES, [first, second])

        assert [d[0] for d in recording_backend.draws] == [1, 0]

    def test_jpeg_mime_embeds_as_jpeg(self, recording_backend):
        image = SignatureImage(make_jpeg(), "image/jpg", 20, 10)
        PDFExporter(recording_backend).export(PDF_BYTES, [make_annotation(image=image)])

        assert recording_backend.embeds == ["jpeg"]

    def test_other_mime_embeds_as_png(self, recording_backend):
        image = SignatureImage(make_png(), "image/webp", 20, 10)
        PDFExporter(recording_backend).export(PDF_BYTES, [make_annotation(image=image)])

        assert recording_backend.embeds == ["png"]

    def test_shared_image_is_embedded_once(self, recording_backend, png_image):
        annotations = [make_annotation(page=1, image=png_image),
                       make_annotation(page=2, image=png_image)]
        result = PDFExporter(recording_backend).export(PDF_BYTES, annotations)

        assert result.drawn == 2
        assert recording_backend.embeds == ["png"]
        assert recording_backend.draws[0][1] is recording_backend.draws[1][1]

    def test_missing_page_is_skipped(self, recording_backend):
        annotations = [make_annotation(page=5), make_annotation(page=2)]
        result = PDFExporter(recording_backend).export(PDF_BYTES, annotations)

        assert result.status == ExportStatus.DONE
        assert (result.drawn, result.skipped) == (1, 1)
        assert [d[0] for d in recording_backend.draws] == [1]

    def test_each_page_uses_its_own_height(self):
        backend = RecordingBackend(page_sizes=((612, 792), (842, 595)))
        PDFExporter(backend).export(PDF_BYTES, [make_annotation(page=2)])

        _index, _image, rect = backend.draws[0]
        assert rect.y == pytest.approx(595 - 100 - 50)


class TestFailure:

    @pytest.mark.parametrize("stage", ["load", "embed", "draw", "serialize"])
    def test_failure_is_reported_not_raised(self, stage):
        backend = RecordingBackend(fail_on=stage)
        exporter = PDFExporter(backend)
        ann = make_annotation()

        result = exporter.export(PDF_BYTES, [ann])

        assert result.status == ExportStatus.FAILED
        assert result.message == EXPORT_FAILED_MESSAGE
        assert result.data is None
        assert exporter.state == ExportState.FAILED
        assert (ann.x, ann.y, ann.width, ann.height) == (100, 100, 150, 50)
        for doc in backend.documents:
            assert doc.closed

    def test_retry_after_failure(self):
        backend = RecordingBackend(fail_on="draw")
        exporter = PDFExporter(backend)
        exporter.export(PDF_BYTES, [make_annotation()])

        backend.fail_on = None
        result = exporter.export(PDF_BYTES, [make_annotation()])

        assert result.ok
        assert exporter.state == ExportState.DONE


class TestPyMuPDFExport:
    """End-to-end export through PyMuPDF."""

    def _image_rects(self, data):
        doc = fitz.open(stream=data, filetype="pdf")
        try:
            rects = []
            for page in doc:
                page_rects = []
                for item in page.get_images(full=True):
                    page_rects.extend(page.get_image_rects(item[0]))
                rects.append(page_rects)
            return rects
        finally:
            doc.close()

    def test_image_lands_where_it_was_placed(self):
        pdf = make_pdf([(612, 792), (612, 792)])
        result = PDFExporter().export(pdf, [make_annotation(page=1)])

        assert result.ok
        rects = self._image_rects(result.data)
        assert len(rects[0]) == 1
        assert rects[1] == []

        rect = rects[0][0]
        assert rect.x0 == pytest.approx(100, abs=0.5)
        assert rect.y0 == pytest.approx(100, abs=0.5)
        assert rect.x1 == pytest.approx(250, abs=0.5)
        assert rect.y1 == pytest.approx(150, abs=0.5)

    def test_placement_at_render_scale(self):
        """Geometry captured at scale 1.5 maps back to page units."""
        pdf = make_pdf([(612, 792)])
        ann = make_annotation(x=150, y=150, width=225, height=75, scale=1.5)
        result = PDFExporter().export(pdf, [ann])

        rect = self._image_rects(result.data)[0][0]
        assert rect.x0 == pytest.approx(100, abs=0.5)
        assert rect.y0 == pytest.approx(100, abs=0.5)
        assert rect.width == pytest.approx(150, abs=0.5)
        assert rect.height == pytest.approx(50, abs=0.5)

    def test_shared_image_reused_across_pages(self, png_image):
        pdf = make_pdf([(612, 792)] * 3)
        annotations = [make_annotation(page=p, image=png_image) for p in (1, 2, 3)]
        result = PDFExporter().export(pdf, annotations)

        doc = fitz.open(stream=result.data, filetype="pdf")
        try:
            xrefs = {item[0] for page in doc for item in page.get_images(full=True)}
        finally:
            doc.close()
        assert len(xrefs) == 1

    def test_jpeg_signature(self):
        pdf = make_pdf()
        image = SignatureImage(make_jpeg(30, 10), "image/jpeg", 30, 10)
        result = PDFExporter().export(pdf, [make_annotation(image=image)])

        assert result.ok
        assert len(self._image_rects(result.data)[0]) == 1

    def test_broken_source_fails_cleanly(self):
        result = PDFExporter().export(b"not a pdf", [make_annotation()])
        assert result.status == ExportStatus.FAILED


class TestSignedFilename:

    @pytest.mark.parametrize("source, expected", [
        ("contract.pdf", "contract_signed.pdf"),
        ("/tmp/My Lease.PDF", "My Lease_signed.PDF"),
        ("noext", "noext_signed.pdf"),
        ("", "document_signed.pdf"),
    ])
    def test_names(self, source, expected):
        assert signed_filename(source) == expected
