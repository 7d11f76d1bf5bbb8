from PyQt5.QtWidgets import QWidget

STYLE_SHEET = """
    /* --- GENERAL --- */
    QMainWindow, QDialog, QWidget, QLabel, QFrame {
        background-color: #f5f6f8;
        color: #2e2e2e;
        border: none;
    }
    QLabel {
        background-color: transparent;
    }

    /* --- BUTTONS --- */
    QPushButton {
        background-color: #e2e5ea;
        color: #2e2e2e;
        border: none;
        border-radius: 6px;
        padding: 7px 14px;
        font-weight: bold;
    }
    QPushButton:hover {
        background-color: #d3d7de;
    }
    QPushButton:pressed {
        background-color: #c3c8d1;
    }
    QPushButton:disabled {
        color: #a0a4ab;
    }
    QPushButton#PrimaryButton {
        background-color: #3498db;
        color: white;
    }
    QPushButton#PrimaryButton:hover {
        background-color: #2f89c5;
    }
    QPushButton#PrimaryButton:disabled {
        background-color: #a9cce8;
    }

    /* --- INPUTS --- */
    QLineEdit, QSpinBox, QComboBox {
        background-color: #ffffff;
        border: 1px solid #cccccc;
        border-radius: 4px;
        padding: 4px 8px;
        color: #2e2e2e;
    }
    QLineEdit:focus, QSpinBox:focus, QComboBox:focus {
        border: 1px solid #3498db;
    }

    /* --- SIDEBAR --- */
    QListWidget {
        background-color: #ffffff;
        border: 1px solid #e0e0e0;
        border-radius: 4px;
    }
    QListWidget::item:selected {
        background-color: #d6eaf8;
        color: #2e2e2e;
    }

    /* --- FRAMES --- */
    #TopFrame {
        background-color: #ffffff;
        border-bottom: 1px solid #e0e0e0;
    }
    QScrollArea {
        background-color: #e9ebef;
        border: none;
    }
"""


def apply_style(widget: QWidget):
    """Applies the application style sheet to a window and its children."""
    widget.setStyleSheet(STYLE_SHEET)
