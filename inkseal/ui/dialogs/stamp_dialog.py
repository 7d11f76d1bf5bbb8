from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import (
    QCheckBox, QComboBox, QDialog, QFormLayout, QHBoxLayout, QLabel,
    QLineEdit, QPushButton, QSpinBox, QVBoxLayout
)

from inkseal.core.errors import EmptyStampName
from inkseal.core.images import GeneratedStamp
from .color_button import ColorButton

FONT_OPTIONS = [
    ("Noto Sans KR", "Noto Sans KR"),
    ("serif", "Serif"),
    ("sans-serif", "Sans-serif"),
    ("cursive", "Cursive"),
]


class StampDialog(QDialog):
    """Name stamp generator with a live preview."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Create Stamp")
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        self.preview_label = QLabel()
        self.preview_label.setAlignment(Qt.AlignCenter)
        self.preview_label.setFixedSize(GeneratedStamp.DISPLAY_SIZE + 10,
                                        GeneratedStamp.DISPLAY_SIZE + 10)
        self.preview_label.setStyleSheet("border: 1px dashed #cccccc; border-radius: 8px;")
        layout.addWidget(self.preview_label, alignment=Qt.AlignHCenter)

        form = QFormLayout()

        self.name_edit = QLineEdit()
        self.name_edit.setMaxLength(GeneratedStamp.MAX_NAME_LENGTH)
        self.name_edit.setPlaceholderText("Name on the stamp")
        form.addRow("Name:", self.name_edit)

        self.shape_combo = QComboBox()
        self.shape_combo.addItem("Circle", "circle")
        self.shape_combo.addItem("Rectangle", "rectangle")
        form.addRow("Shape:", self.shape_combo)

        self.color_button = ColorButton("#e74c3c", "Choose Stamp Color", self)
        form.addRow("Color:", self.color_button)

        self.border_spin = QSpinBox()
        self.border_spin.setRange(1, 10)
        self.border_spin.setValue(3)
        self.border_spin.setSuffix(" px")
        form.addRow("Border:", self.border_spin)

        self.font_size_spin = QSpinBox()
        self.font_size_spin.setRange(12, 48)
        self.font_size_spin.setValue(24)
        self.font_size_spin.setSuffix(" px")
        form.addRow("Font size:", self.font_size_spin)

        self.font_combo = QComboBox()
        for value, label in FONT_OPTIONS:
            self.font_combo.addItem(label, value)
        form.addRow("Font:", self.font_combo)

        self.date_check = QCheckBox("Include today's date")
        form.addRow("", self.date_check)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        buttons.addStretch()
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        buttons.addWidget(cancel_button)
        self.add_button = QPushButton("Add Stamp")
        self.add_button.setDefault(True)
        self.add_button.clicked.connect(self.accept)
        buttons.addWidget(self.add_button)
        layout.addLayout(buttons)

        self.name_edit.textChanged.connect(self._update_preview)
        self.shape_combo.currentIndexChanged.connect(self._update_preview)
        self.color_button.color_changed.connect(self._update_preview)
        self.border_spin.valueChanged.connect(self._update_preview)
        self.font_size_spin.valueChanged.connect(self._update_preview)
        self.font_combo.currentIndexChanged.connect(self._update_preview)
        self.date_check.toggled.connect(self._update_preview)
        self._update_preview()

    def stamp(self) -> GeneratedStamp:
        return GeneratedStamp(
            name=self.name_edit.text(),
            shape=self.shape_combo.currentData(),
            color=self.color_button.color,
            border_width=float(self.border_spin.value()),
            font_size=self.font_size_spin.value(),
            font_family=self.font_combo.currentData(),
            include_date=self.date_check.isChecked(),
        )

    def _update_preview(self, *_args):
        try:
            image = self.stamp().render()
        except EmptyStampName:
            self.preview_label.clear()
            self.add_button.setEnabled(False)
            return
        self.add_button.setEnabled(True)
        pixmap = QPixmap.fromImage(QImage.fromData(image.data))
        self.preview_label.setPixmap(pixmap.scaled(
            GeneratedStamp.DISPLAY_SIZE, GeneratedStamp.DISPLAY_SIZE,
            Qt.KeepAspectRatio, Qt.SmoothTransformation))
