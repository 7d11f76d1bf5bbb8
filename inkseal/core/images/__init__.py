"""
Signature image producers and decoding.
"""
from .decoder import DecodedImage, decode_image, sniff_format
from .sources import (
    FreehandDrawing,
    GeneratedStamp,
    ImageSource,
    UploadedImage,
    render_source,
)

__all__ = [
    'DecodedImage',
    'decode_image',
    'sniff_format',
    'FreehandDrawing',
    'GeneratedStamp',
    'ImageSource',
    'UploadedImage',
    'render_source',
]
