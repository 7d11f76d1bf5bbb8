"""
Tests for pointer-driven selection, drag and resize.
"""
import pytest

from inkseal.controllers import (
    GestureState,
    HitPart,
    PointerEvent,
    PointerInteractionController,
    PointerPhase,
)
from inkseal.core.annotations import AnnotationStore
from inkseal.core.document import PageRenderState


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def page_state(scale_info):
    state = PageRenderState()
    state.reset(3)
    state.update_scale(scale_info)
    return state


@pytest.fixture
def store():
    return AnnotationStore()


@pytest.fixture
def pointer(qapp, store, page_state, config, clock):
    return PointerInteractionController(store, page_state, config, clock)


@pytest.fixture
def placed(store, scale_info, png_image):
    """A 150x50 annotation at (100, 100) on page 1."""
    return store.add(1, png_image, 30, 10, scale_info)


def down(pointer, x, y):
    pointer.handle_event(PointerEvent(x, y, PointerPhase.DOWN))


def move(pointer, x, y):
    pointer.handle_event(PointerEvent(x, y, PointerPhase.MOVE))


def up(pointer, x=0, y=0):
    pointer.handle_event(PointerEvent(x, y, PointerPhase.UP))


def select_and_settle(pointer, clock, x=110, y=110):
    """Click an annotation and let the release guard expire."""
    down(pointer, x, y)
    up(pointer, x, y)
    clock.now += 1.0


class TestSelection:

    def test_background_press_clears_nothing_when_empty(self, pointer, store):
        """A press on the bare page selects nothing and changes nothing."""
        down(pointer, 10, 10)
        up(pointer, 10, 10)

        assert pointer.selected_id is None
        assert len(store) == 0
        assert store.can_undo() is False

    def test_press_on_body_selects(self, pointer, placed):
        emitted = []
        pointer.selection_changed.connect(emitted.append)

        down(pointer, 110, 110)

        assert pointer.selected_id == placed.id
        assert pointer.state == GestureState.DRAGGING
        assert emitted == [placed.id]

    def test_background_click_clears_selection(self, pointer, placed, clock):
        select_and_settle(pointer, clock)

        down(pointer, 500, 500)
        up(pointer, 500, 500)

        assert pointer.selected_id is None

    def test_release_guard_keeps_selection(self, pointer, placed, clock):
        """A background click right after a drag keeps the selection."""
        down(pointer, 110, 110)
        move(pointer, 120, 120)
        up(pointer, 120, 120)

        clock.now += 0.05
        down(pointer, 500, 500)
        up(pointer, 500, 500)
        assert pointer.selected_id == placed.id

        clock.now += 0.2
        down(pointer, 500, 500)
        up(pointer, 500, 500)
        assert pointer.selected_id is None

    def test_topmost_annotation_wins(self, pointer, store, placed, scale_info, png_image):
        above = store.add(1, png_image, 30, 10, scale_info)
        down(pointer, 110, 110)
        assert pointer.selected_id == above.id

    def test_other_pages_are_not_hit(self, pointer, page_state, placed):
        page_state.set_current_page(2)
        assert pointer.hit_test(110, 110) is None

    def test_handles_only_for_selection(self, pointer, placed, clock):
        assert pointer.hit_test(250, 150) == (placed, HitPart.BODY)

        select_and_settle(pointer, clock)

        assert pointer.hit_test(250, 150) == (placed, HitPart.RESIZE_HANDLE)
        assert pointer.hit_test(250, 100) == (placed, HitPart.DELETE_HANDLE)
        assert pointer.hit_test(256, 156) == (placed, HitPart.RESIZE_HANDLE)
        assert pointer.hit_test(260, 160) is None


class TestDrag:

    def test_drag_keeps_grab_offset(self, pointer, placed):
        down(pointer, 110, 110)
        move(pointer, 210, 160)

        assert (placed.x, placed.y) == (200, 150)

    def test_drag_clamps_to_page(self, pointer, placed, scale_info):
        down(pointer, 110, 110)

        move(pointer, -500, -500)
        assert (placed.x, placed.y) == (0, 0)

        move(pointer, 10000, 10000)
        assert placed.x == pytest.approx(scale_info.rendered_width - placed.width)
        assert placed.y == pytest.approx(scale_info.rendered_height - placed.height)

    def test_drag_emits_changes(self, pointer, placed):
        changed = []
        pointer.annotation_changed.connect(changed.append)

        down(pointer, 110, 110)
        move(pointer, 120, 120)
        move(pointer, 130, 130)

        assert changed == [placed.id, placed.id]

    def test_moves_without_gesture_are_ignored(self, pointer, placed):
        move(pointer, 300, 300)
        assert (placed.x, placed.y) == (100, 100)

    def test_one_undo_step_per_gesture(self, pointer, store, placed):
        down(pointer, 110, 110)
        for step in range(1, 6):
            move(pointer, 110 + step * 10, 110)
        up(pointer)

        assert store.undo() is True
        assert (store.get(placed.id).x, store.get(placed.id).y) == (100, 100)
        assert store.undo() is True  # the add itself
        assert len(store) == 0

    def test_cancel_ends_gesture(self, pointer, placed):
        down(pointer, 110, 110)
        pointer.handle_event(PointerEvent(0, 0, PointerPhase.CANCEL))
        move(pointer, 300, 300)

        assert pointer.state == GestureState.IDLE
        assert (placed.x, placed.y) == (100, 100)
        assert pointer.selected_id == placed.id


class TestResize:

    def test_resize_preserves_aspect(self, pointer, placed, clock):
        select_and_settle(pointer, clock)

        down(pointer, 250, 150)
        assert pointer.state == GestureState.RESIZING
        move(pointer, 300, 400)

        assert placed.width == pytest.approx(200)
        assert placed.height == pytest.approx(200 / 3)
        assert (placed.x, placed.y) == (100, 100)

    def test_resize_has_minimum_width(self, pointer, placed, clock, config):
        select_and_settle(pointer, clock)

        down(pointer, 250, 150)
        move(pointer, -400, 150)

        assert placed.width == pytest.approx(config.min_resize_width)
        assert placed.height == pytest.approx(config.min_resize_width / 3)

    def test_resize_stays_on_page(self, pointer, placed, clock, scale_info):
        select_and_settle(pointer, clock)

        down(pointer, 250, 150)
        move(pointer, 5000, 150)

        assert placed.right == pytest.approx(scale_info.rendered_width)
        assert placed.width / placed.height == pytest.approx(3)

    def test_no_drag_while_resizing(self, pointer, placed, clock):
        select_and_settle(pointer, clock)

        down(pointer, 250, 150)
        down(pointer, 110, 110)  # second press is ignored
        move(pointer, 280, 150)

        assert pointer.state == GestureState.RESIZING
        assert (placed.x, placed.y) == (100, 100)
        assert placed.width == pytest.approx(180)


class TestDelete:

    def test_delete_handle_removes(self, pointer, store, placed, clock):
        removed = []
        pointer.annotation_removed.connect(removed.append)
        select_and_settle(pointer, clock)

        down(pointer, 250, 100)

        assert removed == [placed.id]
        assert len(store) == 0
        assert pointer.selected_id is None
        assert pointer.state == GestureState.IDLE

    def test_validate_selection_after_undo(self, pointer, store, placed, clock):
        select_and_settle(pointer, clock)
        store.undo()

        pointer.validate_selection()

        assert pointer.selected_id is None

    def test_bind_resets_state(self, pointer, placed):
        down(pointer, 110, 110)
        pointer.bind(None, None)

        assert pointer.state == GestureState.IDLE
        assert pointer.selected_id is None
        assert pointer.hit_test(110, 110) is None


class TestUndoDuringGesture:

    def test_drag_follows_annotation_rebuilt_by_redo(self, pointer, store, placed):
        down(pointer, 110, 110)
        store.undo()  # drops the add
        store.redo()  # brings it back as a new object

        move(pointer, 130, 120)

        live = store.get(placed.id)
        assert live is not placed
        assert (live.x, live.y) == (120, 110)

    def test_drag_ends_when_annotation_is_undone(self, pointer, store, placed):
        down(pointer, 110, 110)
        store.undo()

        move(pointer, 130, 120)

        assert pointer.state == GestureState.IDLE
        assert len(store) == 0

    def test_resize_clamps_with_restored_size(self, pointer, store, placed, clock, scale_info):
        select_and_settle(pointer, clock)
        down(pointer, 250, 150)
        move(pointer, 350, 150)
        assert placed.width == pytest.approx(250)

        store.undo()
        store.move(placed.id, 500, 100)
        move(pointer, 5000, 150)

        assert placed.right == pytest.approx(scale_info.rendered_width)

    def test_end_gesture_keeps_selection(self, pointer, placed):
        down(pointer, 110, 110)
        pointer.end_gesture()
        move(pointer, 300, 300)

        assert pointer.state == GestureState.IDLE
        assert (placed.x, placed.y) == (100, 100)
        assert pointer.selected_id == placed.id
