"""
Raster image sniffing and decoding.
"""
from dataclasses import dataclass

import fitz  # PyMuPDF

from inkseal.core.errors import UnsupportedImageFormat

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"


@dataclass(frozen=True)
class DecodedImage:
    width: int
    height: int
    image_format: str  # 'png' or 'jpeg'

    @property
    def mime_type(self) -> str:
        return f"image/{self.image_format}"


def sniff_format(data: bytes) -> str:
    if data.startswith(PNG_MAGIC):
        return "png"
    if data.startswith(JPEG_MAGIC):
        return "jpeg"
    raise UnsupportedImageFormat()


def decode_image(data: bytes) -> DecodedImage:
    """
    Read the pixel size of a PNG or JPEG image.

    Raises:
        UnsupportedImageFormat: If the bytes are not a readable PNG/JPEG
    """
    if not data:
        raise UnsupportedImageFormat("The image is empty.")
    image_format = sniff_format(data)
    try:
        pix = fitz.Pixmap(data)
    except Exception as e:
        raise UnsupportedImageFormat("The image could not be decoded.") from e
    if pix.width <= 0 or pix.height <= 0:
        raise UnsupportedImageFormat("The image has no pixels.")
    return DecodedImage(pix.width, pix.height, image_format)
