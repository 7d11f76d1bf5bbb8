"""
Data model for placed signature annotations.
"""
import uuid
from dataclasses import dataclass, field, replace
from typing import Optional

JPEG_MIME_TYPES = ("image/jpeg", "image/jpg")


def new_annotation_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ScaleInfo:
    """Render scale of the page currently on screen."""
    scale: float  # render-space pixels per PDF unit
    original_width: float  # PDF units
    original_height: float
    rendered_width: float  # render-space pixels
    rendered_height: float

    @classmethod
    def for_page(cls, original_width: float, original_height: float,
                 scale: float) -> "ScaleInfo":
        return cls(
            scale=scale,
            original_width=original_width,
            original_height=original_height,
            rendered_width=original_width * scale,
            rendered_height=original_height * scale,
        )


@dataclass(frozen=True)
class SignatureImage:
    """An encoded raster image ready to be placed on a page."""
    data: bytes
    mime_type: str
    width: int  # intrinsic pixel size
    height: int

    @property
    def image_format(self) -> str:
        """'jpeg' for JPEG mime types, 'png' for anything else."""
        return "jpeg" if self.mime_type.lower() in JPEG_MIME_TYPES else "png"

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass
class Annotation:
    """
    A signature, stamp or image placed on one page.

    Geometry is kept in render-space pixels together with the scale that was
    active when the annotation was created; export projects with that scale
    and never with the one currently on screen.
    """
    page: int  # 1-based page number
    image: SignatureImage
    x: float
    y: float
    width: float
    height: float
    scale: float
    id: str = field(default_factory=new_annotation_id)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains_point(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def copy_to_page(self, page: int, annotation_id: Optional[str] = None) -> "Annotation":
        """Same image, geometry and scale on another page, with a fresh id."""
        return replace(self, page=page, id=annotation_id or new_annotation_id())
