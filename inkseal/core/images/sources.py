"""
Producers of signature images.

Each tool (freehand pad, stamp generator, image upload) is a small value
object whose ``render()`` yields the same normalized
:class:`~inkseal.core.annotations.models.SignatureImage`. Rendering uses Qt
and therefore needs a ``QGuiApplication``.
"""
import datetime
import mimetypes
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from PyQt5.QtCore import QBuffer, QByteArray, QIODevice, QPointF, QRect, QRectF, Qt
from PyQt5.QtGui import QColor, QFont, QImage, QPainter, QPainterPath, QPen

from inkseal.core.annotations.models import SignatureImage
from inkseal.core.errors import (
    EmptyDrawing,
    EmptyStampName,
    ImageTooLarge,
    UnsupportedImageFormat,
)
from .decoder import decode_image

Point = Tuple[float, float]


def qimage_to_png(image: QImage) -> bytes:
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.WriteOnly)
    image.save(buffer, "PNG")
    buffer.close()
    return bytes(data)


def _png_signature_image(image: QImage) -> SignatureImage:
    return SignatureImage(qimage_to_png(image), "image/png", image.width(), image.height())


def content_bounds(image: QImage) -> Optional[QRect]:
    """
    Bounding box of all pixels that are not fully transparent.

    Returns:
        The box, or None for a blank image
    """
    rgba = image.convertToFormat(QImage.Format_RGBA8888)
    width, height, bpl = rgba.width(), rgba.height(), rgba.bytesPerLine()
    data = rgba.constBits().asstring(rgba.sizeInBytes())

    min_x, min_y, max_x, max_y = width, height, -1, -1
    for y in range(height):
        start = y * bpl
        alpha = data[start + 3:start + width * 4:4]
        stripped = alpha.rstrip(b"\x00")
        if not stripped:
            continue
        first = len(alpha) - len(alpha.lstrip(b"\x00"))
        last = len(stripped) - 1
        min_x = min(min_x, first)
        max_x = max(max_x, last)
        min_y = min(min_y, y)
        max_y = y

    if max_x < 0:
        return None
    return QRect(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1)


@dataclass
class FreehandDrawing:
    """Strokes drawn on the signature pad, in pad pixel coordinates."""
    strokes: List[List[Point]] = field(default_factory=list)
    pen_color: str = "#000000"
    pen_size: float = 3.0
    canvas_size: Tuple[int, int] = (450, 200)
    padding: int = 10

    def render(self) -> SignatureImage:
        strokes = [s for s in self.strokes if s]
        if not strokes:
            raise EmptyDrawing()

        canvas = QImage(self.canvas_size[0], self.canvas_size[1], QImage.Format_ARGB32)
        canvas.fill(Qt.transparent)

        painter = QPainter(canvas)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(QPen(QColor(self.pen_color), self.pen_size,
                            Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
        for stroke in strokes:
            if len(stroke) == 1:
                painter.drawPoint(QPointF(*stroke[0]))
                continue
            path = QPainterPath(QPointF(*stroke[0]))
            for point in stroke[1:]:
                path.lineTo(QPointF(*point))
            painter.drawPath(path)
        painter.end()

        bounds = content_bounds(canvas)
        if bounds is None:
            raise EmptyDrawing()

        cropped = QImage(bounds.width() + self.padding * 2,
                         bounds.height() + self.padding * 2, QImage.Format_ARGB32)
        cropped.fill(Qt.transparent)
        painter = QPainter(cropped)
        painter.drawImage(self.padding, self.padding, canvas.copy(bounds))
        painter.end()
        return _png_signature_image(cropped)


@dataclass
class GeneratedStamp:
    """A round or square name stamp, optionally with today's date."""
    name: str
    shape: str = "circle"  # 'circle' or 'rectangle'
    color: str = "#e74c3c"
    border_width: float = 3.0
    font_size: int = 24
    font_family: str = "Noto Sans KR"
    include_date: bool = False
    date: Optional[datetime.date] = None

    DISPLAY_SIZE = 150
    RESOLUTION = 3
    MAX_NAME_LENGTH = 5

    @property
    def label(self) -> str:
        return self.name.strip()[:self.MAX_NAME_LENGTH]

    @property
    def date_text(self) -> str:
        return (self.date or datetime.date.today()).strftime("%Y.%m.%d")

    def render(self) -> SignatureImage:
        if not self.label:
            raise EmptyStampName()

        size = self.DISPLAY_SIZE * self.RESOLUTION
        image = QImage(size, size, QImage.Format_ARGB32)
        image.fill(Qt.transparent)

        painter = QPainter(image)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.TextAntialiasing)
        # Everything below is laid out on the 150px display grid
        painter.scale(self.RESOLUTION, self.RESOLUTION)

        color = QColor(self.color)
        center = self.DISPLAY_SIZE / 2
        radius = self.DISPLAY_SIZE / 2 - self.border_width - 5

        painter.setPen(QPen(color, self.border_width))
        painter.setBrush(Qt.NoBrush)
        if self.shape == "circle":
            painter.drawEllipse(QPointF(center, center), radius, radius)
        else:
            side = radius * 1.6
            painter.drawRect(QRectF(center - side / 2, center - side / 2, side, side))

        if self.include_date:
            self._draw_text(painter, self.label, center - self.font_size / 2, self.font_size, True)
            self._draw_text(painter, self.date_text, center + self.font_size / 2,
                            self.font_size * 0.5, False)
        else:
            self._draw_text(painter, self.label, center, self.font_size, True)
        painter.end()

        return _png_signature_image(image)

    def _draw_text(self, painter: QPainter, text: str, center_y: float,
                   pixel_size: float, bold: bool) -> None:
        font = QFont(self.font_family)
        font.setPixelSize(max(1, int(round(pixel_size))))
        font.setBold(bold)
        painter.setFont(font)
        box = QRectF(0, center_y - pixel_size, self.DISPLAY_SIZE, pixel_size * 2)
        painter.drawText(box, Qt.AlignCenter, text)


@dataclass
class UploadedImage:
    """A user supplied picture, downscaled and re-encoded as PNG."""
    data: bytes
    mime_type: str
    max_bytes: int = 5 * 1024 * 1024
    max_edge: int = 300

    @classmethod
    def from_file(cls, path: str, max_bytes: int = 5 * 1024 * 1024,
                  max_edge: int = 300) -> "UploadedImage":
        """Read an image file, guessing its type from the extension."""
        mime_type, _ = mimetypes.guess_type(path)
        with open(path, 'rb') as f:
            data = f.read()
        return cls(data, mime_type or "application/octet-stream", max_bytes, max_edge)

    def render(self) -> SignatureImage:
        if not self.mime_type.lower().startswith("image/"):
            raise UnsupportedImageFormat("Only image files can be uploaded.")
        if len(self.data) > self.max_bytes:
            raise ImageTooLarge(len(self.data), self.max_bytes)

        image = QImage.fromData(self.data)
        if image.isNull():
            raise UnsupportedImageFormat("The image could not be decoded.")

        if image.width() > self.max_edge or image.height() > self.max_edge:
            image = image.scaled(self.max_edge, self.max_edge,
                                 Qt.KeepAspectRatio, Qt.SmoothTransformation)
        return _png_signature_image(image)


ImageSource = Union[FreehandDrawing, GeneratedStamp, UploadedImage]


def render_source(source: ImageSource) -> SignatureImage:
    """Render a tool result and confirm the encoded image decodes."""
    image = source.render()
    decoded = decode_image(image.data)
    if (decoded.width, decoded.height) != (image.width, image.height):
        image = SignatureImage(image.data, image.mime_type, decoded.width, decoded.height)
    return image
