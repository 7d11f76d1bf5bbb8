from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtGui import QKeySequence

from .pointer_controller import PointerEvent, PointerInteractionController, PointerPhase

TOUCH_PHASES = {
    QEvent.TouchBegin: PointerPhase.DOWN,
    QEvent.TouchUpdate: PointerPhase.MOVE,
    QEvent.TouchEnd: PointerPhase.UP,
    QEvent.TouchCancel: PointerPhase.CANCEL,
}


class UserInputHandler:
    """
    Handles keyboard, mouse and touch input for the signing window.

    Mouse and touch events on the page are reduced to :class:`PointerEvent`
    so the pointer controller sees one kind of input.
    """
    def __init__(self, main_window, pointer: PointerInteractionController):
        """
        Initializes the handler.

        Args:
            main_window (MainWindow): The application window receiving shortcuts.
            pointer (PointerInteractionController): Receiver of pointer events.
        """
        self.main_window = main_window
        self.pointer = pointer

    def handle_key_press(self, event):
        """
        Handles key press events for the main window.
        """
        if event.matches(QKeySequence.Open):
            self.main_window.open_pdf()
            event.accept()
        elif event.matches(QKeySequence.Save):
            self.main_window.save_signed_pdf()
            event.accept()
        elif event.matches(QKeySequence.Undo):
            self.main_window.undo()
            event.accept()
        elif event.matches(QKeySequence.Redo):
            self.main_window.redo()
            event.accept()
        elif event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            if self.pointer.selected_id is not None:
                self.main_window.delete_selected_signature()
            event.accept()
        elif event.key() == Qt.Key_Escape:
            self.pointer.select(None)
            event.accept()
        elif event.key() in (Qt.Key_PageDown, Qt.Key_Right):
            self.main_window.view_controller.next_page()
            event.accept()
        elif event.key() in (Qt.Key_PageUp, Qt.Key_Left):
            self.main_window.view_controller.previous_page()
            event.accept()
        else:
            event.ignore()

    def handle_mouse_press(self, event):
        if event.button() == Qt.LeftButton:
            pos = event.localPos()
            self.pointer.handle_event(PointerEvent(pos.x(), pos.y(), PointerPhase.DOWN))

    def handle_mouse_move(self, event):
        pos = event.localPos()
        self.pointer.handle_event(PointerEvent(pos.x(), pos.y(), PointerPhase.MOVE))

    def handle_mouse_release(self, event):
        if event.button() == Qt.LeftButton:
            pos = event.localPos()
            self.pointer.handle_event(PointerEvent(pos.x(), pos.y(), PointerPhase.UP))

    def handle_leave(self):
        """Ends any gesture when the pointer leaves the page."""
        self.pointer.handle_event(PointerEvent(0, 0, PointerPhase.CANCEL))

    def handle_touch_event(self, event):
        """
        Follows the first touch point of a touch sequence.

        Returns:
            True if the event was a touch event and has been handled
        """
        phase = TOUCH_PHASES.get(event.type())
        if phase is None:
            return False
        points = event.touchPoints()
        if points:
            pos = points[0].pos()
            self.pointer.handle_event(PointerEvent(pos.x(), pos.y(), phase))
        elif phase == PointerPhase.CANCEL:
            self.handle_leave()
        event.accept()
        return True
