"""
Ordered store of the annotations placed in one signing session.
"""
import logging
from typing import Iterator, List, Optional, Sequence

from inkseal.config import AppConfig
from inkseal.core.errors import NoActiveDocument
from .models import Annotation, ScaleInfo, SignatureImage
from .history import CheckpointHistory, restore_checkpoint

logger = logging.getLogger(__name__)


class AnnotationStore:
    """
    Holds annotations in insertion order, which is also their z-order and
    export order.

    ``move`` and ``resize`` are plain setters: bounds clamping and the
    minimum size belong to the pointer controller that drives them.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.annotations: List[Annotation] = []
        self.history = CheckpointHistory(self.config.undo_depth)

    def __len__(self) -> int:
        return len(self.annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self.annotations)

    def get(self, annotation_id: str) -> Optional[Annotation]:
        for ann in self.annotations:
            if ann.id == annotation_id:
                return ann
        return None

    def by_page(self, page: int) -> List[Annotation]:
        """
        Get all annotations for a specific page.

        Args:
            page: 1-based page number

        Returns:
            Annotations on the page in insertion order
        """
        return [ann for ann in self.annotations if ann.page == page]

    def display_size(self, intrinsic_width: float, intrinsic_height: float):
        """
        Default on-screen size for an image of the given pixel size.

        The width starts at the default footprint; the height follows the
        image's aspect ratio and is kept within the min/max display edge,
        re-deriving the width when it has to be clamped.
        """
        aspect_ratio = intrinsic_width / intrinsic_height
        width = self.config.default_annotation_width
        height = width / aspect_ratio

        if height < self.config.min_display_edge:
            height = self.config.min_display_edge
            width = height * aspect_ratio
        elif height > self.config.max_display_edge:
            height = self.config.max_display_edge
            width = height * aspect_ratio
        return width, height

    def add(self, page: int, image_data: SignatureImage, intrinsic_width: float,
            intrinsic_height: float, scale_info: Optional[ScaleInfo]) -> Annotation:
        """
        Place a new annotation at the default offset of a page.

        Args:
            page: 1-based page number
            image_data: Decoded image
            intrinsic_width: Image width in pixels
            intrinsic_height: Image height in pixels
            scale_info: Render scale of the page on screen

        Returns:
            The created annotation

        Raises:
            NoActiveDocument: If no page has been rendered yet
        """
        if scale_info is None:
            raise NoActiveDocument()
        if intrinsic_width <= 0 or intrinsic_height <= 0:
            raise ValueError("image dimensions must be positive")

        width, height = self.display_size(intrinsic_width, intrinsic_height)
        # Pull the default offset back so the new annotation starts on the page
        x = max(0.0, min(self.config.default_offset_x, scale_info.rendered_width - width))
        y = max(0.0, min(self.config.default_offset_y, scale_info.rendered_height - height))
        annotation = Annotation(
            page=page,
            image=image_data,
            x=x,
            y=y,
            width=width,
            height=height,
            scale=scale_info.scale,
        )

        self.checkpoint()
        self.annotations.append(annotation)
        logger.debug("Added annotation %s on page %d (%.1fx%.1f @ scale %.3f)",
                     annotation.id, page, width, height, annotation.scale)
        return annotation

    def move(self, annotation_id: str, x: float, y: float) -> None:
        ann = self.get(annotation_id)
        if ann is not None:
            ann.x = x
            ann.y = y

    def resize(self, annotation_id: str, width: float, height: float) -> None:
        ann = self.get(annotation_id)
        if ann is not None:
            ann.width = width
            ann.height = height

    def remove(self, annotation_id: str) -> bool:
        """
        Delete an annotation. Unknown ids are ignored.

        Returns:
            True if an annotation was removed
        """
        ann = self.get(annotation_id)
        if ann is None:
            return False
        self.checkpoint()
        self.annotations.remove(ann)
        logger.debug("Removed annotation %s", annotation_id)
        return True

    def duplicate_to_pages(self, source_page: int, target_pages: Sequence[int]) -> int:
        """
        Copy every annotation of ``source_page`` onto the other target pages.

        Args:
            source_page: Page whose annotations are copied
            target_pages: Selected pages; ``source_page`` itself is skipped

        Returns:
            Number of annotations created (0 when there was nothing to do)
        """
        if len(target_pages) <= 1:
            return 0
        sources = self.by_page(source_page)
        if not sources:
            return 0

        copies = [
            ann.copy_to_page(page)
            for page in target_pages
            if page != source_page
            for ann in sources
        ]
        if copies:
            self.checkpoint()
            self.annotations.extend(copies)
        logger.debug("Copied %d annotation(s) from page %d", len(copies), source_page)
        return len(copies)

    def clear(self) -> None:
        """Drop all annotations and history."""
        self.annotations.clear()
        self.history.clear()

    def checkpoint(self) -> None:
        """Record the current state so the next change can be undone."""
        self.history.record(self.annotations)

    def undo(self) -> bool:
        checkpoint = self.history.step_back(self.annotations)
        if checkpoint is None:
            return False
        self.annotations = restore_checkpoint(checkpoint, self.annotations)
        return True

    def redo(self) -> bool:
        checkpoint = self.history.step_forward(self.annotations)
        if checkpoint is None:
            return False
        self.annotations = restore_checkpoint(checkpoint, self.annotations)
        return True

    def can_undo(self) -> bool:
        return self.history.can_undo

    def can_redo(self) -> bool:
        return self.history.can_redo
