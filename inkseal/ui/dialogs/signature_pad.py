from typing import List

from PyQt5.QtCore import QEvent, QPointF, Qt
from PyQt5.QtGui import QColor, QPainter, QPainterPath, QPen
from PyQt5.QtWidgets import (
    QDialog, QHBoxLayout, QLabel, QPushButton, QSlider, QVBoxLayout, QWidget
)

from inkseal.core.images import FreehandDrawing
from .color_button import ColorButton


class SignaturePad(QWidget):
    """Drawing surface that records strokes in its own pixel coordinates."""

    def __init__(self, width: int = 450, height: int = 200, parent=None):
        super().__init__(parent)
        self.setFixedSize(width, height)
        self.setAttribute(Qt.WA_AcceptTouchEvents)
        self.setCursor(Qt.CrossCursor)

        self.strokes: List[List[tuple]] = []
        self.pen_color = "#000000"
        self.pen_size = 3.0
        self._drawing = False

    def clear(self):
        self.strokes = []
        self.update()

    def _start(self, pos):
        self._drawing = True
        self.strokes.append([(pos.x(), pos.y())])
        self.update()

    def _extend(self, pos):
        if self._drawing:
            self.strokes[-1].append((pos.x(), pos.y()))
            self.update()

    def _finish(self):
        self._drawing = False

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._start(event.localPos())

    def mouseMoveEvent(self, event):
        self._extend(event.localPos())

    def mouseReleaseEvent(self, event):
        self._finish()

    def leaveEvent(self, event):
        self._finish()
        super().leaveEvent(event)

    def event(self, event):
        if event.type() in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd):
            points = event.touchPoints()
            if points:
                pos = points[0].pos()
                if event.type() == QEvent.TouchBegin:
                    self._start(pos)
                elif event.type() == QEvent.TouchUpdate:
                    self._extend(pos)
                else:
                    self._finish()
            event.accept()
            return True
        return super().event(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), Qt.white)
        painter.setPen(QPen(QColor("#cccccc"), 1, Qt.DashLine))
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))

        painter.setPen(QPen(QColor(self.pen_color), self.pen_size,
                            Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
        for stroke in self.strokes:
            if len(stroke) == 1:
                painter.drawPoint(QPointF(*stroke[0]))
                continue
            path = QPainterPath(QPointF(*stroke[0]))
            for point in stroke[1:]:
                path.lineTo(QPointF(*point))
            painter.drawPath(path)
        painter.end()


class SignaturePadDialog(QDialog):
    """Freehand signature tool."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Draw Signature")
        self.setModal(True)

        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        hint = QLabel("Sign inside the box below.")
        hint.setStyleSheet("color: #666666;")
        layout.addWidget(hint)

        self.pad = SignaturePad(parent=self)
        layout.addWidget(self.pad)

        options = QHBoxLayout()
        options.addWidget(QLabel("Pen color:"))
        self.color_button = ColorButton(self.pad.pen_color, "Choose Pen Color", self)
        self.color_button.color_changed.connect(self._on_color_changed)
        options.addWidget(self.color_button)

        options.addSpacing(16)
        options.addWidget(QLabel("Pen size:"))
        self.size_slider = QSlider(Qt.Horizontal, self)
        self.size_slider.setRange(1, 10)
        self.size_slider.setValue(int(self.pad.pen_size))
        self.size_slider.setFixedWidth(100)
        self.size_slider.valueChanged.connect(self._on_size_changed)
        options.addWidget(self.size_slider)
        self.size_label = QLabel(f"{int(self.pad.pen_size)}px")
        options.addWidget(self.size_label)
        options.addStretch()
        layout.addLayout(options)

        buttons = QHBoxLayout()
        clear_button = QPushButton("Clear")
        clear_button.clicked.connect(self.pad.clear)
        buttons.addWidget(clear_button)
        buttons.addStretch()
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        buttons.addWidget(cancel_button)
        add_button = QPushButton("Add Signature")
        add_button.setDefault(True)
        add_button.clicked.connect(self.accept)
        buttons.addWidget(add_button)
        layout.addLayout(buttons)

    def _on_color_changed(self, color: str):
        self.pad.pen_color = color
        self.pad.update()

    def _on_size_changed(self, value: int):
        self.pad.pen_size = float(value)
        self.size_label.setText(f"{value}px")
        self.pad.update()

    def drawing(self) -> FreehandDrawing:
        return FreehandDrawing(
            strokes=[list(stroke) for stroke in self.pad.strokes],
            pen_color=self.pad.pen_color,
            pen_size=self.pad.pen_size,
            canvas_size=(self.pad.width(), self.pad.height()),
        )
