"""
Tests for the signature image tools and decoding.
"""
import datetime

import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage

from inkseal.core.annotations import SignatureImage
from inkseal.core.errors import (
    EmptyDrawing,
    EmptyStampName,
    ImageTooLarge,
    UnsupportedImageFormat,
)
from inkseal.core.images import (
    FreehandDrawing,
    GeneratedStamp,
    UploadedImage,
    decode_image,
    render_source,
    sniff_format,
)
from inkseal.core.images.sources import content_bounds

from conftest import make_jpeg, make_png


class TestDecoder:

    def test_png_size(self):
        decoded = decode_image(make_png(40, 12))
        assert (decoded.width, decoded.height, decoded.image_format) == (40, 12, "png")
        assert decoded.mime_type == "image/png"

    def test_jpeg_size(self):
        decoded = decode_image(make_jpeg(16, 8))
        assert (decoded.width, decoded.height, decoded.image_format) == (16, 8, "jpeg")

    def test_other_bytes_are_rejected(self):
        with pytest.raises(UnsupportedImageFormat):
            decode_image(b"GIF89a....")
        with pytest.raises(UnsupportedImageFormat):
            decode_image(b"")
        with pytest.raises(UnsupportedImageFormat):
            sniff_format(b"BM")

    def test_truncated_png(self):
        with pytest.raises(UnsupportedImageFormat):
            decode_image(make_png()[:20])

    def test_image_format_from_mime(self):
        assert SignatureImage(b"", "image/jpg", 1, 1).image_format == "jpeg"
        assert SignatureImage(b"", "IMAGE/JPEG", 1, 1).image_format == "jpeg"
        assert SignatureImage(b"", "image/gif", 1, 1).image_format == "png"


class TestGeneratedStamp:

    def test_renders_high_resolution_png(self, qapp):
        image = GeneratedStamp("Kim").render()

        assert image.mime_type == "image/png"
        assert (image.width, image.height) == (450, 450)
        assert decode_image(image.data).width == 450

    def test_blank_name(self, qapp):
        with pytest.raises(EmptyStampName):
            GeneratedStamp("   ").render()

    def test_long_names_are_truncated(self):
        assert GeneratedStamp("ABCDEFGH").label == "ABCDE"

    def test_date_format(self):
        stamp = GeneratedStamp("Lee", date=datetime.date(2024, 3, 5))
        assert stamp.date_text == "2024.03.05"

    @pytest.mark.parametrize("shape", ["circle", "rectangle"])
    def test_shapes_with_date(self, qapp, shape):
        stamp = GeneratedStamp("Park", shape=shape, include_date=True,
                               date=datetime.date(2024, 1, 1))
        image = render_source(stamp)

        bounds = content_bounds(QImage.fromData(image.data))
        assert bounds is not None
        assert bounds.width() < 450


class TestFreehandDrawing:

    def test_crops_to_ink_with_padding(self, qapp):
        drawing = FreehandDrawing(strokes=[[(10, 10), (60, 40), (110, 60)]])
        image = drawing.render()

        assert 110 < image.width < 140
        assert 60 < image.height < 90

        qimage = QImage.fromData(image.data)
        assert qimage.pixelColor(0, 0).alpha() == 0
        assert content_bounds(qimage).left() >= 8

    def test_empty_drawing(self, qapp):
        with pytest.raises(EmptyDrawing):
            FreehandDrawing().render()
        with pytest.raises(EmptyDrawing):
            FreehandDrawing(strokes=[[]]).render()

    def test_single_dot(self, qapp):
        image = FreehandDrawing(strokes=[[(200, 100)]], pen_size=6).render()
        assert image.width >= 20


class TestUploadedImage:

    def test_large_images_are_downscaled(self, qapp):
        image = UploadedImage(make_png(600, 300), "image/png").render()

        assert (image.width, image.height) == (300, 150)
        assert image.mime_type == "image/png"

    def test_small_images_keep_size(self, qapp):
        image = UploadedImage(make_jpeg(40, 20), "image/jpeg").render()
        assert (image.width, image.height) == (40, 20)

    def test_non_image_type(self, qapp):
        with pytest.raises(UnsupportedImageFormat):
            UploadedImage(make_png(), "application/pdf").render()

    def test_size_limit(self, qapp):
        with pytest.raises(ImageTooLarge) as exc:
            UploadedImage(make_png(), "image/png", max_bytes=10).render()
        assert exc.value.limit == 10

    def test_undecodable(self, qapp):
        with pytest.raises(UnsupportedImageFormat):
            UploadedImage(b"\x00" * 64, "image/png").render()

    def test_from_file(self, qapp, tmp_path):
        path = tmp_path / "sig.png"
        path.write_bytes(make_png(10, 5))

        source = UploadedImage.from_file(str(path))

        assert source.mime_type == "image/png"
        assert render_source(source).width == 10


def test_content_bounds_of_blank_image(qapp):
    blank = QImage(20, 20, QImage.Format_ARGB32)
    blank.fill(Qt.transparent)
    assert content_bounds(blank) is None
