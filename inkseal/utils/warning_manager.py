"""
Confirmation dialogs that the user can silence for the rest of the session.
"""
from typing import Dict, Set
from enum import Enum
from PyQt5.QtWidgets import QMessageBox, QCheckBox, QWidget


class WarningType(Enum):
    """Confirmations that can be suppressed."""
    DISCARD_SIGNATURES = "discard_signatures"
    DELETE_SIGNATURE = "delete_signature"


class WarningManager:
    """
    Remembers which confirmations were silenced and what was answered.
    Singleton so every window shares the same session state.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self._suppressed: Set[WarningType] = set()
        self._answers: Dict[WarningType, bool] = {}

    def should_show_warning(self, warning_type: WarningType) -> bool:
        return warning_type not in self._suppressed

    def suppress_warning(self, warning_type: WarningType, answer: bool = True) -> None:
        """
        Stop asking and reuse an answer for the rest of the session.

        Args:
            warning_type: Confirmation to silence
            answer: Value returned in place of the dialog
        """
        self._suppressed.add(warning_type)
        self._answers[warning_type] = answer

    def reset_all_warnings(self) -> None:
        self._suppressed.clear()
        self._answers.clear()

    def confirm(self, parent: QWidget, warning_type: WarningType,
                title: str, message: str, show_dont_ask: bool = True) -> bool:
        """
        Ask a Yes/No question unless it was silenced earlier.

        Args:
            parent: Parent widget
            warning_type: Confirmation being asked
            title: Dialog title
            message: Question text
            show_dont_ask: Whether to offer the "don't ask again" box

        Returns:
            True if the user agreed
        """
        if not self.should_show_warning(warning_type):
            return self._answers.get(warning_type, True)

        msg_box = QMessageBox(parent)
        msg_box.setIcon(QMessageBox.Question)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setStandardButtons(QMessageBox.Yes | QMessageBox.No)
        msg_box.setDefaultButton(QMessageBox.No)

        dont_ask_checkbox = None
        if show_dont_ask:
            dont_ask_checkbox = QCheckBox("Don't ask again this session")
            msg_box.setCheckBox(dont_ask_checkbox)

        agreed = msg_box.exec_() == QMessageBox.Yes

        if dont_ask_checkbox and dont_ask_checkbox.isChecked():
            self.suppress_warning(warning_type, agreed)

        return agreed


# Global instance for easy access
warning_manager = WarningManager()
