from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import QColorDialog, QToolButton


class ColorButton(QToolButton):
    """Swatch button that opens a color picker."""

    color_changed = pyqtSignal(str)  # '#rrggbb'

    def __init__(self, color: str, title: str = "Choose Color", parent=None):
        super().__init__(parent)
        self.color = color
        self.title = title
        self.setToolTip(title)
        self.setFixedSize(32, 32)
        self.clicked.connect(self._choose_color)
        self._update_swatch()

    def _choose_color(self):
        color = QColorDialog.getColor(QColor(self.color), self, self.title)
        if color.isValid():
            self.color = color.name()
            self._update_swatch()
            self.color_changed.emit(self.color)

    def _update_swatch(self):
        self.setStyleSheet(f"""
            QToolButton {{
                background-color: {self.color};
                border: 2px solid #bbbbbb;
                border-radius: 4px;
            }}
            QToolButton:hover {{
                border: 2px solid #888888;
            }}
        """)
