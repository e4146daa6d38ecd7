"""
Graph Canvas
============
Draws the coordinate grid, the rasterized curve, the rotated axes x' / y'
through O' and the main axes with integer ticks.

All drawing happens in device pixels (logical size x devicePixelRatio) so
the raster buffer maps one-to-one onto the screen. A frame remembers the
(width, height) it was rasterized with; every overlay of that frame uses the
same pair.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, QTimer, QPointF, QRectF
from PySide6.QtGui import QPainter, QFont, QFontMetricsF, QImage, QBrush
from PySide6.QtWidgets import QWidget, QSizePolicy

from conicexplorer.config import (
    SCALE, HOVER_THRESHOLD_PX, RESIZE_DEBOUNCE_MS,
    BACKGROUND_COLOR, GRID_COLOR, AXIS_COLOR, TICK_LABEL_COLOR, ROTATED_AXIS_COLOR, ROTATED_AXIS_ACTIVE_COLOR,
)
from conicexplorer.model.analysis import GeometryDescriptor, analyze
from conicexplorer.model.coefficients import Coefficients
from conicexplorer.model.hover import HoverAxis, HoverState
from conicexplorer.model.raster import model_to_pixel, rasterize

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """One rasterized picture of one coefficient snapshot."""
    width: int
    height: int
    dpr: float
    image: QImage
    is_empty: bool
    theta: float
    origin_px: Optional[tuple[float, float]]

    @property
    def center_px(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


def rgba_to_qimage(rgba: np.ndarray) -> QImage:
    """(H, W, 4) RGBA uint8 -> ARGB32 QImage (memory order b, g, r, a)."""
    bgra = np.ascontiguousarray(rgba[..., [2, 1, 0, 3]])
    return pg.functions.makeQImage(bgra, alpha=True, copy=True, transpose=False)


def _draw_text(painter: QPainter, x: float, y: float, text: str, h_align: str = "left", v_align: str = "baseline") -> None:
    """Draw text anchored at (x, y) like a canvas textAlign/textBaseline pair."""
    fm = QFontMetricsF(painter.font())
    w = fm.horizontalAdvance(text)
    if h_align == "center":
        x -= w / 2
    elif h_align == "right":
        x -= w
    if v_align == "top":
        y += fm.ascent()
    elif v_align == "middle":
        y += (fm.ascent() - fm.descent()) / 2
    elif v_align == "bottom":
        y -= fm.descent()
    painter.drawText(QPointF(x, y), text)


def _font(pixel_size: int, family: str = "sans-serif", italic: bool = False, bold: bool = False) -> QFont:
    font = QFont(family)
    font.setPixelSize(pixel_size)
    font.setItalic(italic)
    font.setBold(bold)
    return font


class GraphCanvas(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setMinimumSize(150, 150)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setCursor(Qt.CrossCursor)

        self._coefficients = Coefficients()
        self._geometry: GeometryDescriptor = analyze(self._coefficients)
        self._frame: Optional[Frame] = None
        self._hover = HoverState()
        self._drawing = False

        # Debounce resize: rebuild the frame once the size settles
        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(RESIZE_DEBOUNCE_MS)
        self._resize_timer.timeout.connect(self.redraw)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_coefficients(self, coefficients: Coefficients) -> None:
        """Full recomputation from the new snapshot."""
        self._coefficients = coefficients
        self._geometry = analyze(coefficients)
        self.redraw()

    def redraw(self) -> None:
        """Rebuild the frame for the current size, then repaint."""
        if self._drawing:
            # A frame is being built; the pending timer picks up the new state
            self._resize_timer.start()
            return
        self._drawing = True
        try:
            self._frame = self._build_frame()
        finally:
            self._drawing = False
        self.update()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event) -> None:
        self._resize_timer.start()
        super().resizeEvent(event)

    def mouseMoveEvent(self, event) -> None:
        frame = self._frame
        if frame is None:
            return
        pos = event.position()
        pointer = (pos.x() * frame.dpr, pos.y() * frame.dpr)
        if self._hover.pointer_moved(pointer, frame.origin_px, frame.theta, HOVER_THRESHOLD_PX * frame.dpr):
            self.update()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event) -> None:
        if self._hover.pointer_left():
            self.update()
        super().leaveEvent(event)

    def paintEvent(self, event) -> None:
        if self._frame is None:
            self._frame = self._build_frame()

        painter = QPainter(self)
        painter.fillRect(self.rect(), pg.mkColor(BACKGROUND_COLOR))
        frame = self._frame
        if frame is None:
            painter.end()
            return

        painter.setRenderHint(QPainter.Antialiasing)
        painter.scale(1.0 / frame.dpr, 1.0 / frame.dpr)

        self._draw_grid(painter, frame)
        painter.drawImage(0, 0, frame.image)
        self._draw_rotated_axes(painter, frame)
        self._draw_main_axes(painter, frame)
        if frame.is_empty:
            self._draw_empty_notice(painter, frame)
        painter.end()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _device_size(self) -> tuple[int, int, float]:
        dpr = self.devicePixelRatioF() or 1.0
        return int(math.floor(self.width() * dpr)), int(math.floor(self.height() * dpr)), dpr

    def _build_frame(self) -> Optional[Frame]:
        width, height, dpr = self._device_size()
        if width == 0 or height == 0:
            return None

        center = (width / 2, height / 2)
        result = rasterize(self._coefficients, width, height, center, SCALE)

        origin = None
        if self._geometry.center is not None:
            origin = model_to_pixel(*self._geometry.center, center, SCALE)

        return Frame(
            width=width,
            height=height,
            dpr=dpr,
            image=rgba_to_qimage(result.image),
            is_empty=result.is_empty,
            theta=self._geometry.theta,
            origin_px=origin,
        )

    # ---- layers ----

    @staticmethod
    def _draw_grid(painter: QPainter, frame: Frame) -> None:
        cx, cy = frame.center_px
        painter.setPen(pg.mkPen(GRID_COLOR, width=1))
        x = cx % SCALE
        while x < frame.width:
            painter.drawLine(QPointF(x, 0), QPointF(x, frame.height))
            x += SCALE
        y = cy % SCALE
        while y < frame.height:
            painter.drawLine(QPointF(0, y), QPointF(frame.width, y))
            y += SCALE

    def _draw_rotated_axes(self, painter: QPainter, frame: Frame) -> None:
        if frame.origin_px is None:
            return
        ox, oy = frame.origin_px
        axis_len = max(frame.width, frame.height) * 1.5
        hovered = self._hover.axis

        painter.save()
        painter.translate(ox, oy)
        painter.rotate(math.degrees(-frame.theta))

        for axis, start, end in (
            (HoverAxis.X, QPointF(-axis_len, 0), QPointF(axis_len, 0)),
            (HoverAxis.Y, QPointF(0, -axis_len), QPointF(0, axis_len)),
        ):
            active = hovered is axis
            if active:
                # Glow under the highlighted axis
                glow = pg.mkColor(ROTATED_AXIS_ACTIVE_COLOR)
                glow.setAlpha(70)
                painter.setPen(pg.mkPen(glow, width=8))
                painter.drawLine(start, end)
                painter.setPen(pg.mkPen(ROTATED_AXIS_ACTIVE_COLOR, width=2))
            else:
                painter.setPen(pg.mkPen(ROTATED_AXIS_COLOR, width=1, dash=[5, 5]))
            painter.drawLine(start, end)

        # Labels for the new axes
        for axis, text, x, y in (
            (HoverAxis.X, "x'", axis_len / 2 - 20, -5),
            (HoverAxis.Y, "y'", 5, -axis_len / 2 + 20),
        ):
            active = hovered is axis
            painter.setPen(pg.mkPen(ROTATED_AXIS_ACTIVE_COLOR if active else ROTATED_AXIS_COLOR))
            painter.setFont(_font(16 if active else 12, "serif", italic=True, bold=active))
            _draw_text(painter, x, y, text)

        painter.restore()

        # Center point O'
        any_active = hovered is not HoverAxis.NONE
        color = ROTATED_AXIS_ACTIVE_COLOR if any_active else ROTATED_AXIS_COLOR
        radius = 5 if any_active else 3
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(pg.mkColor(color)))
        painter.drawEllipse(QPointF(ox, oy), radius, radius)
        painter.setBrush(Qt.NoBrush)
        painter.setPen(pg.mkPen(color))
        painter.setFont(_font(12, "serif", italic=True))
        _draw_text(painter, ox + 8, oy - 6, "O'")

    @staticmethod
    def _draw_main_axes(painter: QPainter, frame: Frame) -> None:
        cx, cy = frame.center_px
        w, h = frame.width, frame.height

        painter.setPen(pg.mkPen(AXIS_COLOR, width=2))
        painter.drawLine(QPointF(0, cy), QPointF(w, cy))
        painter.drawLine(QPointF(cx, 0), QPointF(cx, h))

        # Integer ticks & labels
        painter.setFont(_font(10))
        tick_pen = pg.mkPen(AXIS_COLOR, width=2)
        label_pen = pg.mkPen(TICK_LABEL_COLOR)

        for i in range(math.ceil(-cx / SCALE), math.floor((w - cx) / SCALE) + 1):
            if i == 0:
                continue
            x = cx + i * SCALE
            painter.setPen(tick_pen)
            painter.drawLine(QPointF(x, cy - 3), QPointF(x, cy + 3))
            painter.setPen(label_pen)
            _draw_text(painter, x, cy + 6, str(i), "center", "top")

        for i in range(-math.ceil((h - cy) / SCALE), math.floor(cy / SCALE) + 1):
            if i == 0:
                continue
            y = cy - i * SCALE
            painter.setPen(tick_pen)
            painter.drawLine(QPointF(cx - 3, y), QPointF(cx + 3, y))
            painter.setPen(label_pen)
            _draw_text(painter, cx - 6, y, str(i), "right", "middle")

        # Axis names
        painter.setPen(pg.mkPen(AXIS_COLOR))
        painter.setFont(_font(16, "serif", italic=True, bold=True))
        _draw_text(painter, w - 10, cy - 6, "x", "right", "bottom")
        _draw_text(painter, cx + 10, 10, "y", "left", "top")
        _draw_text(painter, cx - 6, cy + 6, "O", "right", "top")

    @staticmethod
    def _draw_empty_notice(painter: QPainter, frame: Frame) -> None:
        box_w = min(frame.width - 20, 360)
        box = QRectF((frame.width - box_w) / 2, frame.height / 2 - 50, box_w, 100)
        fill = pg.mkColor(BACKGROUND_COLOR)
        fill.setAlpha(210)
        painter.setPen(pg.mkPen("#334155", width=1))
        painter.setBrush(QBrush(fill))
        painter.drawRoundedRect(box, 12, 12)
        painter.setBrush(Qt.NoBrush)

        painter.setPen(pg.mkPen("#e2e8f0"))
        painter.setFont(_font(20, bold=True))
        _draw_text(painter, box.center().x(), box.center().y() - 6, "Curve Empty", "center", "bottom")
        painter.setPen(pg.mkPen("#94a3b8"))
        painter.setFont(_font(14))
        _draw_text(painter, box.center().x(), box.center().y() + 6, "No real solution in visible range.", "center", "top")
