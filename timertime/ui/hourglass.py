"""Hourglass animation widget rendered with QPainter.

One loop drains the top bulb into the bottom bulb.  Playback follows
repeat-count semantics: ``play(loop_count)`` runs the drain once and
then repeats it ``loop_count`` more times, restarting from a full top
bulb each loop.  ``playback_state_changed`` reports every start and stop
so a view host can forward completion to the lifecycle controller.
"""

from __future__ import annotations

import math

from PyQt6.QtCore import (
    Qt, QRectF, QPointF, QAbstractAnimation, QVariantAnimation,
    QEasingCurve, pyqtSignal,
)
from PyQt6.QtGui import QPainter, QPainterPath, QPen, QColor
from PyQt6.QtWidgets import QWidget


LOOP_DURATION_MS = 2000   # one drain at speed 1.0
DEFAULT_SPEED = 0.8


def is_valid_speed(speed: object) -> bool:
    """True for a finite playback rate above zero."""
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        return False
    return math.isfinite(speed) and speed > 0


class HourglassView(QWidget):
    """Custom-painted hourglass with loop-counted playback."""

    playback_state_changed = pyqtSignal(bool)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(160, 240)

        self._progress: float = 0.0    # 0 = top full, 1 = drained
        self._speed: float = DEFAULT_SPEED

        self._glass_color = QColor("#9A93A8")
        self._sand_color = QColor("#D9A441")

        self._anim = QVariantAnimation(self)
        self._anim.setStartValue(0.0)
        self._anim.setEndValue(1.0)
        self._anim.setEasingCurve(QEasingCurve.Type.Linear)
        self._anim.setDuration(self.loop_duration_ms)
        self._anim.valueChanged.connect(self._on_anim_value)
        self._anim.stateChanged.connect(self._on_anim_state)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, speed: float) -> None:
        """Playback rate; takes effect on the next :meth:`play`."""
        if not is_valid_speed(speed):
            raise ValueError(f"speed must be a positive number, got {speed!r}")
        self._speed = speed

    @property
    def loop_duration_ms(self) -> int:
        # never 0: a zero-length loop would stop inside start()
        return max(1, int(LOOP_DURATION_MS / self._speed))

    @property
    def progress(self) -> float:
        return self._progress

    def is_animating(self) -> bool:
        return self._anim.state() == QAbstractAnimation.State.Running

    def play(self, loop_count: int) -> None:
        """Play once plus ``loop_count`` repeats, from a full top bulb."""
        if loop_count < 0:
            raise ValueError(f"loop_count must be >= 0, got {loop_count}")
        self._anim.stop()
        self._anim.setDuration(self.loop_duration_ms)
        self._anim.setLoopCount(loop_count + 1)
        self._progress = 0.0
        self._anim.start()
        self.update()

    def stop(self) -> None:
        self._anim.stop()

    def show_at_rest(self) -> None:
        """Stop and show the fully drained glass."""
        self._anim.stop()
        self._progress = 1.0
        self.update()

    def apply_palette(self, palette: dict[str, str]) -> None:
        self._glass_color = QColor(palette.get("glass", "#9A93A8"))
        self._sand_color = QColor(palette.get("sand", "#D9A441"))
        self.update()

    # ══════════════════════════════════════════════════════════════════
    #  ANIMATION SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_anim_value(self, value: object) -> None:
        self._progress = float(value)  # type: ignore[arg-type]
        self.update()

    def _on_anim_state(
        self,
        new_state: QAbstractAnimation.State,
        old_state: QAbstractAnimation.State,
    ) -> None:
        running = QAbstractAnimation.State.Running
        if new_state == running and old_state != running:
            self.playback_state_changed.emit(True)
        elif old_state == running and new_state != running:
            self.playback_state_changed.emit(False)

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        glass_h = min(h - 20, w * 1.5)
        glass_w = glass_h / 1.5
        left = (w - glass_w) / 2
        top = (h - glass_h) / 2
        cx = w / 2
        cy = h / 2
        neck = glass_w * 0.06
        half = glass_h / 2

        top_bulb = QPainterPath()
        top_bulb.moveTo(left, top)
        top_bulb.lineTo(left + glass_w, top)
        top_bulb.lineTo(cx + neck, cy)
        top_bulb.lineTo(cx - neck, cy)
        top_bulb.closeSubpath()

        bottom_bulb = QPainterPath()
        bottom_bulb.moveTo(cx - neck, cy)
        bottom_bulb.lineTo(cx + neck, cy)
        bottom_bulb.lineTo(left + glass_w, top + glass_h)
        bottom_bulb.lineTo(left, top + glass_h)
        bottom_bulb.closeSubpath()

        pct = self._progress

        # ── sand: top bulb drains from the surface down ──────────────
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(self._sand_color)
        top_fill = 1.0 - pct
        if top_fill > 0.001:
            level = cy - half * top_fill * 0.85
            painter.save()
            painter.setClipPath(top_bulb)
            painter.drawRect(QRectF(left, level, glass_w, cy - level))
            painter.restore()

        # ── sand: bottom bulb fills from the base up ─────────────────
        if pct > 0.001:
            level = top + glass_h - half * pct * 0.85
            painter.save()
            painter.setClipPath(bottom_bulb)
            painter.drawRect(QRectF(left, level, glass_w, top + glass_h - level))
            painter.restore()

        # ── falling stream ───────────────────────────────────────────
        if self.is_animating() and 0.0 < pct < 1.0:
            stream_pen = QPen(self._sand_color, max(2.0, neck * 0.8))
            painter.setPen(stream_pen)
            painter.drawLine(
                QPointF(cx, cy),
                QPointF(cx, top + glass_h - half * pct * 0.85),
            )

        # ── glass outline + caps ─────────────────────────────────────
        outline = QPen(self._glass_color, 3)
        outline.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(outline)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(top_bulb)
        painter.drawPath(bottom_bulb)

        cap_pen = QPen(self._glass_color, 8)
        cap_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(cap_pen)
        painter.drawLine(QPointF(left - 8, top), QPointF(left + glass_w + 8, top))
        painter.drawLine(
            QPointF(left - 8, top + glass_h),
            QPointF(left + glass_w + 8, top + glass_h),
        )

        painter.end()
