"""
Drag, resize and selection of annotations from pointer input.

Mouse and touch input are translated into :class:`PointerEvent` by the
input handler, so everything here is device agnostic and works in
render-space pixels of the page on screen.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from inkseal.config import AppConfig
from inkseal.core.annotations import Annotation, AnnotationStore
from inkseal.core.document import PageRenderState

logger = logging.getLogger(__name__)


class PointerPhase(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"  # pointer left the window


@dataclass(frozen=True)
class PointerEvent:
    x: float
    y: float
    phase: PointerPhase


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class HitPart(Enum):
    BODY = "body"
    RESIZE_HANDLE = "resize_handle"
    DELETE_HANDLE = "delete_handle"


class PointerInteractionController(QObject):
    """
    Gesture state machine: IDLE -> DRAGGING | RESIZING -> IDLE.

    A gesture can only start from IDLE, so drag and resize never overlap.
    Releasing the pointer arms a short guard during which a background
    click does not clear the selection.
    """

    # Signals
    selection_changed = pyqtSignal(object)  # annotation id or None
    annotation_changed = pyqtSignal(str)  # moved or resized
    annotation_removed = pyqtSignal(str)

    def __init__(self, store: Optional[AnnotationStore] = None,
                 page_state: Optional[PageRenderState] = None,
                 config: Optional[AppConfig] = None,
                 clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self.config = config or AppConfig()
        self.clock = clock
        self.store = store
        self.page_state = page_state

        self.state = GestureState.IDLE
        self.selected_id: Optional[str] = None
        self._active: Optional[Annotation] = None
        self._drag_offset: Tuple[float, float] = (0.0, 0.0)
        self._resize_start: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
        self._checkpointed = False
        self._background_pressed = False
        self._released_at: Optional[float] = None

    def bind(self, store: Optional[AnnotationStore],
             page_state: Optional[PageRenderState]) -> None:
        """Attach to a new session's state (or detach with None)."""
        self.store = store
        self.page_state = page_state
        self.state = GestureState.IDLE
        self._active = None
        self._background_pressed = False
        self._released_at = None
        self.select(None)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, annotation_id: Optional[str]) -> None:
        if annotation_id == self.selected_id:
            return
        self.selected_id = annotation_id
        self.selection_changed.emit(annotation_id)

    @property
    def selected_annotation(self) -> Optional[Annotation]:
        if self.selected_id is None or self.store is None:
            return None
        return self.store.get(self.selected_id)

    def validate_selection(self) -> None:
        """Drop the selection if its annotation no longer exists."""
        if self.selected_id is not None and self.selected_annotation is None:
            self.select(None)

    def in_release_guard(self) -> bool:
        if self._released_at is None:
            return False
        return (self.clock() - self._released_at) < self.config.release_guard_seconds

    def click_background(self) -> bool:
        """
        Clear the selection after a click on the bare page.

        Returns:
            True if the selection was cleared
        """
        if self.state != GestureState.IDLE or self.in_release_guard():
            return False
        self.select(None)
        return True

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------

    def _handle_rect_contains(self, cx: float, cy: float, x: float, y: float) -> bool:
        half = self.config.handle_size / 2
        return cx - half <= x <= cx + half and cy - half <= y <= cy + half

    def hit_test(self, x: float, y: float) -> Optional[Tuple[Annotation, HitPart]]:
        """
        Find what is under the pointer on the current page.

        The selected annotation's handles are checked first, then bodies
        from the topmost (last added) down.
        """
        if self.store is None or self.page_state is None:
            return None
        page = self.page_state.current_page

        selected = self.selected_annotation
        if selected is not None and selected.page == page:
            if self._handle_rect_contains(selected.right, selected.bottom, x, y):
                return selected, HitPart.RESIZE_HANDLE
            if self._handle_rect_contains(selected.right, selected.y, x, y):
                return selected, HitPart.DELETE_HANDLE

        for ann in reversed(self.store.by_page(page)):
            if ann.contains_point(x, y):
                return ann, HitPart.BODY
        return None

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------

    def handle_event(self, event: PointerEvent) -> None:
        if event.phase == PointerPhase.DOWN:
            self.pointer_down(event.x, event.y)
        elif event.phase == PointerPhase.MOVE:
            self.pointer_move(event.x, event.y)
        else:
            self.pointer_up(click=event.phase == PointerPhase.UP)

    def pointer_down(self, x: float, y: float) -> None:
        if self.state != GestureState.IDLE:
            return

        hit = self.hit_test(x, y)
        if hit is None:
            self._background_pressed = True
            return
        self._background_pressed = False

        annotation, part = hit
        if part == HitPart.DELETE_HANDLE:
            self.delete(annotation.id)
        elif part == HitPart.RESIZE_HANDLE:
            self._begin(annotation, GestureState.RESIZING)
            self._resize_start = (x, y, annotation.width, annotation.height)
        else:
            self.select(annotation.id)
            self._begin(annotation, GestureState.DRAGGING)
            self._drag_offset = (x - annotation.x, y - annotation.y)

    def pointer_move(self, x: float, y: float) -> None:
        if self.state == GestureState.DRAGGING:
            self._drag_to(x, y)
        elif self.state == GestureState.RESIZING:
            self._resize_to(x)

    def pointer_up(self, click: bool = True) -> None:
        if self.state != GestureState.IDLE:
            logger.debug("%s of %s finished", self.state.value, self._active.id)
            self.state = GestureState.IDLE
            self._active = None
            self._released_at = self.clock()
        elif self._background_pressed and click:
            self.click_background()
        self._background_pressed = False

    def end_gesture(self) -> None:
        """Finish any drag or resize without treating it as a background click."""
        self.pointer_up(click=False)

    def delete(self, annotation_id: str) -> bool:
        if self.store is None or not self.store.remove(annotation_id):
            return False
        if self.selected_id == annotation_id:
            self.select(None)
        self.annotation_removed.emit(annotation_id)
        return True

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def _begin(self, annotation: Annotation, state: GestureState) -> None:
        self.state = state
        self._active = annotation
        self._checkpointed = False
        logger.debug("%s of %s started", state.value, annotation.id)

    def _checkpoint_once(self) -> None:
        # One undo step per gesture, taken just before its first change
        if not self._checkpointed:
            self.store.checkpoint()
            self._checkpointed = True

    def _live_active(self) -> Optional[Annotation]:
        # Undo during a gesture may rebuild or drop the annotation
        ann = self.store.get(self._active.id)
        if ann is None:
            self.end_gesture()
        else:
            self._active = ann
        return ann

    def _container_size(self) -> Tuple[float, float]:
        info = self.page_state.scale_info if self.page_state else None
        if info is None:
            return float("inf"), float("inf")
        return info.rendered_width, info.rendered_height

    def _drag_to(self, x: float, y: float) -> None:
        ann = self._live_active()
        if ann is None:
            return
        container_width, container_height = self._container_size()
        new_x = x - self._drag_offset[0]
        new_y = y - self._drag_offset[1]

        bounded_x = max(0.0, min(new_x, container_width - ann.width))
        bounded_y = max(0.0, min(new_y, container_height - ann.height))

        self._checkpoint_once()
        self.store.move(ann.id, bounded_x, bounded_y)
        self.annotation_changed.emit(ann.id)

    def _resize_to(self, x: float) -> None:
        ann = self._live_active()
        if ann is None:
            return
        start_x, _start_y, start_width, start_height = self._resize_start
        aspect_ratio = start_width / start_height

        # Width drives the resize; vertical pointer movement is ignored
        new_width = start_width + (x - start_x)
        # Keep the box on the page: the right and bottom edges cap the width
        container_width, container_height = self._container_size()
        new_width = min(new_width, container_width - ann.x,
                        (container_height - ann.y) * aspect_ratio)
        new_width = max(self.config.min_resize_width, new_width)
        new_height = new_width / aspect_ratio

        self._checkpoint_once()
        self.store.resize(ann.id, new_width, new_height)
        self.annotation_changed.emit(ann.id)
