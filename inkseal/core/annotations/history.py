"""
Checkpoint history for the annotation store.

A checkpoint records where every annotation sat (page, position, size and
capture scale) in z-order. Images never change once created, so checkpoints
share them instead of copying. A drag or resize pushes one checkpoint on its
first change, so a whole gesture undoes in a single step.
"""
from collections import deque
from typing import Deque, Iterable, List, NamedTuple, Optional, Tuple

from .models import Annotation, SignatureImage


class Placement(NamedTuple):
    """Where one annotation was at checkpoint time."""
    id: str
    page: int
    image: SignatureImage
    x: float
    y: float
    width: float
    height: float
    scale: float

    @classmethod
    def of(cls, ann: Annotation) -> "Placement":
        return cls(ann.id, ann.page, ann.image, ann.x, ann.y,
                   ann.width, ann.height, ann.scale)

    def apply_to(self, ann: Annotation) -> Annotation:
        ann.page = self.page
        ann.x, ann.y = self.x, self.y
        ann.width, ann.height = self.width, self.height
        ann.scale = self.scale
        return ann

    def to_annotation(self) -> Annotation:
        return Annotation(page=self.page, image=self.image, x=self.x, y=self.y,
                          width=self.width, height=self.height, scale=self.scale,
                          id=self.id)


Checkpoint = Tuple[Placement, ...]


def take_checkpoint(annotations: Iterable[Annotation]) -> Checkpoint:
    return tuple(Placement.of(ann) for ann in annotations)


def restore_checkpoint(checkpoint: Checkpoint,
                       live: Iterable[Annotation]) -> List[Annotation]:
    """
    Rebuild the annotation list described by a checkpoint.

    Annotations that still exist are updated in place, so references held
    by the UI stay valid; removed ones are recreated with their old id.
    """
    by_id = {ann.id: ann for ann in live}
    restored = []
    for placement in checkpoint:
        ann = by_id.get(placement.id)
        restored.append(placement.apply_to(ann) if ann is not None
                        else placement.to_annotation())
    return restored


class CheckpointHistory:
    """Bounded undo history with a redo branch that a new edit discards."""

    def __init__(self, depth: int = 50):
        self._undo: Deque[Checkpoint] = deque(maxlen=depth)
        self._redo: List[Checkpoint] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def record(self, annotations: Iterable[Annotation]) -> None:
        self._undo.append(take_checkpoint(annotations))
        self._redo.clear()

    def step_back(self, annotations: Iterable[Annotation]) -> Optional[Checkpoint]:
        """
        Trade the current state for the latest checkpoint.

        Returns:
            The checkpoint to restore, or None when there is nothing to undo
        """
        if not self._undo:
            return None
        self._redo.append(take_checkpoint(annotations))
        return self._undo.pop()

    def step_forward(self, annotations: Iterable[Annotation]) -> Optional[Checkpoint]:
        if not self._redo:
            return None
        self._undo.append(take_checkpoint(annotations))
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
