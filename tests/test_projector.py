"""
Tests for render-space <-> PDF-space conversion.
"""
import pytest

from inkseal.core.geometry import (
    PdfRect,
    project_annotation,
    to_page_rect,
    to_pdf_space,
    to_render_space,
)

from conftest import make_annotation


class TestToPdfSpace:

    def test_letter_page_at_unit_scale(self):
        """(100, 100, 150, 50) on a 792pt page lands at y = 642."""
        rect = to_pdf_space(100, 100, 150, 50, 1.0, 792)
        assert rect == PdfRect(100, 642, 150, 50)

    def test_scale_divides_every_component(self):
        rect = to_pdf_space(150, 150, 225, 75, 1.5, 792)
        assert rect.x == pytest.approx(100)
        assert rect.y == pytest.approx(642)
        assert rect.width == pytest.approx(150)
        assert rect.height == pytest.approx(50)

    def test_top_left_corner_maps_to_page_top(self):
        rect = to_pdf_space(0, 0, 60, 30, 0.5, 500)
        assert rect.y + rect.height == pytest.approx(500)

    def test_non_positive_scale_is_rejected(self):
        with pytest.raises(ValueError):
            to_pdf_space(0, 0, 10, 10, 0, 792)
        with pytest.raises(ValueError):
            to_render_space(PdfRect(0, 0, 10, 10), -1, 792)

    def test_uses_annotation_scale(self):
        """Projection uses the scale captured on the annotation."""
        ann = make_annotation(x=75.75, y=75.75, width=113.625, height=37.875, scale=0.7575)
        rect = project_annotation(ann, 792)
        assert rect.x == pytest.approx(100)
        assert rect.y == pytest.approx(642)
        assert rect.width == pytest.approx(150)
        assert rect.height == pytest.approx(50)


class TestRoundTrip:

    @pytest.mark.parametrize("scale", [0.25, 0.7575, 1.0, 1.5])
    def test_render_pdf_render(self, scale):
        pdf = to_pdf_space(37.5, 210.25, 140, 46.6, scale, 842)
        back = to_render_space(pdf, scale, 842)
        assert back.x == pytest.approx(37.5)
        assert back.y == pytest.approx(210.25)
        assert back.width == pytest.approx(140)
        assert back.height == pytest.approx(46.6)


class TestToPageRect:

    def test_flips_to_top_left_origin(self):
        x0, y0, x1, y1 = to_page_rect(PdfRect(100, 642, 150, 50), 792)
        assert (x0, y0, x1, y1) == (100, 100, 250, 150)
